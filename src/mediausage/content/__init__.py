"""
Content scanning for Hugo sites.

Provides tools for:
- Scanning Hugo content files
- Parsing front matter and body text
- Listing page bundle resources
"""

from mediausage.content.scanner import ContentItem, ContentScanner

__all__ = [
    "ContentScanner",
    "ContentItem",
]
