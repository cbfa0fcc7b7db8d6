"""Regular-grammar automata and a canonical LR(1) parser for a small C-like language."""

__version__ = "0.1.0"
__all__ = ["__version__"]