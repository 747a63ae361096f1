"""mediausage - find the content that references a media file."""

__version__ = "0.1.0"
