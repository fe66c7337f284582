"""
Tokenizer for %%shortcode%% notation

Locates every %%name:attr1:attr2%% token in a block of text. The name part
may not contain whitespace; attribute parts may contain anything except a
line break. Matching is non-greedy and left-to-right, so the leftmost
candidate wins and scanning resumes after its closing delimiter.

Example:
    >>> [t.text for t in tokens_find("Copyright %%date:Y%% %%siteurl%%")]
    ['%%date:Y%%', '%%siteurl%%']
"""

import re
from typing import List

from ..models.shortcode import Token


SHORTCODE_PATTERN = re.compile(r'%%[^\r\n\s]+?(?::[^\r\n]*?)*?%%')


def tokens_find(text: str) -> List[Token]:
    """
    Find all shortcode tokens in text

    Args:
        text: Text to scan

    Returns:
        Tokens in order of appearance, repeated texts included.
        Empty list if text holds no %%...%% token.
    """
    if not text or '%%' not in text:
        return []

    return [Token(text=match.group(0), position=match.start())
            for match in SHORTCODE_PATTERN.finditer(text)]


def tokens_distinct(tokens: List[Token]) -> List[str]:
    """
    Collapse tokens to their distinct texts, keeping first-seen order

    Identical token texts resolve once and share the result.
    """
    return list(dict.fromkeys(token.text for token in tokens))
