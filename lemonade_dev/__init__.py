"""lemonade-dev — development-time manifest generator for lemonade projects."""

__version__ = "0.1.0"
