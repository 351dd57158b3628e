"""FastAPI service that renders CSS color names as HTML headings.

This package resolves human-readable color names to hex triplets and
serves them as inline-styled HTML fragments and JSON documents.
"""

__version__ = "1.0.0"
