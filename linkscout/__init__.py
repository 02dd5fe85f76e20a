"""Extract, filter and remap links from HTML, Markdown and plain text."""

__version__ = "0.1.0"
__all__ = [
    "extractor",
    "filter",
    "html",
    "htmlutil",
    "markdown",
    "plaintext",
    "quirks",
    "remap",
    "retry",
    "srcset",
]