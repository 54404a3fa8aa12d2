"""omikuji: draw a fortune card from a CSV dataset."""

__version__ = "0.1.0"
