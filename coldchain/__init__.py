"""Domain core for the cold-chain equipment rental marketplace."""

__version__ = "1.0.0"
