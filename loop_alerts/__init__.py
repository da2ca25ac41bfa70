"""Local alerts for an automated insulin delivery controller."""

__version__ = "0.1.0"
