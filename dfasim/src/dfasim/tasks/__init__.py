"""Tasks built on the core: bulk accept/reject testing and sample automata."""
