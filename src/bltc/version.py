"""Single source of truth for the bltc version string."""

__version__ = "0.1.0"
