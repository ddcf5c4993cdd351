"""SwipeLite small-business invoicing."""

__version__ = "1.0.0"
