"""Java heap dump retrieval for Akkeris dynos."""

__version__ = "0.1.0"
