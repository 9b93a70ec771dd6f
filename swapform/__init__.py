"""Quote and state engine for a token swap form."""

__version__ = "0.1.0"
