"""
Attribute splitter for %%shortcode%% tokens

Turns one raw token into a handler name and its positional attributes.

Steps, in order:
1. Quote protection: a segment wrapped in matching quotes and bounded by
   ':' or '%%' on both sides loses exactly one quote at each end and has
   its colons replaced with an entity, so it survives the split intact.
2. Delimiter strip: '%' characters are trimmed from both ends.
3. Split on ':'.
4. URL-decode each part, then turn the colon entity back into ':'.
5. The first part is the handler name, the rest are attributes.

Quoting rules, as seen by an author:
    %%date:Y-m-d%%       -> format Y-m-d
    %%date:"Y-m-d"%%     -> format Y-m-d
    %%date:""Y-m-d""%%   -> format "Y-m-d"
    %%date:"Y"-m-d%%     -> format "Y"-m-d   (quotes do not span the segment)
    %%date:"H:i:s"%%     -> format H:i:s
    %%date:'H:"i":s'%%   -> format H:"i":s
    %%date:H%3Ai%%       -> format H:i      (percent-encoded colon)

Unbalanced or partial quotes are not an error; the segment is then split
at its colons like any other.
"""

import re
from urllib.parse import unquote_plus

from ..config import appsettings
from ..models.shortcode import ShortcodeCall


QUOTED_SEGMENT_PATTERN = re.compile(r'(?:(?<=:)|(?<=%%))(["\']).*?\1(?=:|%%)')


def quotes_protect(token_text: str) -> str:
    """
    Strip the outer quote pair of every quoted segment and escape its colons

    Args:
        token_text: Raw token text, delimiters included

    Returns:
        Token text with quoted segments unwrapped

    Example:
        >>> quotes_protect('%%date:"H:i:s":now%%')
        '%%date:H&#58;i&#58;s:now%%'
    """
    def segment_unwrap(match: re.Match) -> str:
        segment = match.group(0).replace(':', appsettings.colon_entity)
        return segment[1:-1]

    return QUOTED_SEGMENT_PATTERN.sub(segment_unwrap, token_text)


def part_decode(part: str) -> str:
    """URL-decode one attribute and restore protected colons"""
    return unquote_plus(part).replace(appsettings.colon_entity, ':')


def call_split(token_text: str) -> ShortcodeCall:
    """
    Split a token into handler name and attributes

    Args:
        token_text: Raw token text, e.g. '%%days:jS F%20Y:1495678388%%'

    Returns:
        ShortcodeCall with decoded name and attributes

    Example:
        >>> call_split('%%days:jS F%20Y:1495678388%%')
        ShortcodeCall(name='days', attrs=['jS F Y', '1495678388'])
    """
    protected = quotes_protect(token_text)
    parts = [part_decode(part) for part in protected.strip('%').split(':')]
    return ShortcodeCall(name=parts[0], attrs=parts[1:])
