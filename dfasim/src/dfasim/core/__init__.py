"""Core automaton model, variants, evaluation engine and wire codec."""
