"""
Text Utilities

Handle generation and description formatting for catalog rows.
"""

import re

_DISALLOWED_HANDLE_CHARS = re.compile(r'[^a-z0-9\s-]')
_WHITESPACE_RUN = re.compile(r'\s+')
_HYPHEN_RUN = re.compile(r'-+')


def generate_handle(title: str) -> str:
    """
    Generate a URL-safe handle from a product title.

    Lowercases the title, drops everything outside ``[a-z0-9\\s-]``,
    turns whitespace runs into single hyphens and trims hyphens from
    both ends. Running it on its own output returns the same string.

    Args:
        title: Product title

    Returns:
        Handle matching ``[a-z0-9-]*``

    Example:
        >>> generate_handle("Amethyst Pendant")
        'amethyst-pendant'
        >>> generate_handle("  Rose Quartz -- Heart (Large)! ")
        'rose-quartz-heart-large'
    """
    if not title:
        return ''

    handle = _DISALLOWED_HANDLE_CHARS.sub('', str(title).lower())
    handle = _WHITESPACE_RUN.sub('-', handle)
    handle = _HYPHEN_RUN.sub('-', handle)

    return handle.strip('-')


def wrap_paragraph(text: str) -> str:
    """Wrap text in a single HTML paragraph."""
    return f"<p>{text}</p>"
