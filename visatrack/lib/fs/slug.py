"""
visatrack/lib/fs/slug.py - Storage-safe Slug Generation

Converts dependent display names to slugs usable inside storage keys.

Example transformations:
    "Little Sister" → "little-sister"
    "Zoë Müller" → "zoe-muller"
    "   ---   " → "dependent"  # Fallback
"""
from slugify import slugify as _slugify


def make_slug(title: str, max_len: int = 40, fallback: str = "dependent") -> str:
    """
    Convert a display name to a lowercase, hyphen-separated slug.

    Args:
        title: Original name (can contain Unicode, spaces, special chars)
        max_len: Maximum slug length (default: 40)
        fallback: Returned when the slug would be empty

    Example:
        >>> make_slug("Little Sister")
        'little-sister'
        >>> make_slug("Zoë Müller")
        'zoe-muller'
        >>> make_slug("   ---   ")
        'dependent'
    """
    s = _slugify(title, lowercase=True)
    s = s.strip("-")
    if len(s) > max_len:
        s = s[:max_len].rstrip("-")
    return s or fallback
