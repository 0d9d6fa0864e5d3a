"""Server-side meme renderer."""

__version__ = "1.0.0"
