"""
Slug sanitizer

Turns a title into a URL slug the way WordPress's sanitize_title() does:

    >>> title_sanitize("Café <b>Menu</b> 2000!")
    'cafe-menu-2000'
    >>> title_sanitize("Events %%date:Y%%")
    'events-%datey'

The second example is why slug filtering runs shortcodes on the raw title
before sanitizing: the sanitizer removes the %% delimiters.
"""

import re
import unicodedata
from urllib.parse import quote


TAG_PATTERN = re.compile(r'<[^>]*?>')
OCTET_PATTERN = re.compile(r'%([a-fA-F0-9][a-fA-F0-9])')
OCTET_MARKER_PATTERN = re.compile(r'---([a-fA-F0-9][a-fA-F0-9])---')
ENTITY_PATTERN = re.compile(r'&.+?;')
DISALLOWED_PATTERN = re.compile(r'[^%a-z0-9 _-]')


def accents_remove(text: str) -> str:
    """Fold accented characters to their unaccented base letters"""
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def title_sanitize(title: str, fallback: str = '') -> str:
    """
    Sanitize a title into a slug

    Args:
        title: Raw title
        fallback: Returned when the slug comes out empty

    Returns:
        Lowercase slug of [a-z0-9_-] plus percent-encoded non-ASCII
    """
    slug = TAG_PATTERN.sub('', title)
    slug = accents_remove(slug)

    # Keep existing %XX escapes, drop any other percent sign
    slug = OCTET_PATTERN.sub(r'---\1---', slug)
    slug = slug.replace('%', '')
    slug = OCTET_MARKER_PATTERN.sub(r'%\1', slug)

    slug = ''.join(quote(ch) if ord(ch) > 127 else ch for ch in slug)
    slug = slug.lower()
    slug = ENTITY_PATTERN.sub('', slug)
    slug = slug.replace('.', '-')
    slug = DISALLOWED_PATTERN.sub('', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    slug = slug.strip('-')

    return slug or fallback
