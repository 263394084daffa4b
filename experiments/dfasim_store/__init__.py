"""Persistence and tooling around the dfasim core.

This package holds the persistence collaborator (payload limits,
sanitizing, JSON file storage) and the consistency sweep harness. These
are not part of the core dfasim library package.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
