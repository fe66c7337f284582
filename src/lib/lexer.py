"""
Custom Pygments lexer for %%shortcode%% notation

Highlights shortcode tokens embedded in ordinary text, e.g. when showing
authors which parts of a page will be substituted.

Token types:
- Punctuation: %% delimiters and ':' separators
- Name.Tag: Shortcode names (e.g., date, siteurl)
- String: Quoted attributes (e.g., "H:i:s")
- String.Escape: Percent-encoded sequences (e.g., %20)
- Literal: Plain attributes (e.g., Y-m-d, post_date)
- Text: Everything outside tokens
"""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import Text, Punctuation, Name, String, Literal


class ShortcodeLexer(RegexLexer):
    """
    Lexer for %%name:attr1:attr2%% shortcodes

    Example:
        Copyright %%date:"Y":post_date%%

    Tokens:
        %% → Punctuation
        date → Name.Tag
        : → Punctuation
        "Y" → String
        post_date → Literal
        %% → Punctuation
    """

    name = 'Slickcode'
    aliases = ['slickcode', 'shortcode']
    filenames = ['*.sc']

    tokens = {
        'root': [
            # Opening delimiter followed by a name
            (r'(%%)([^\s:%]+)(?=[^\r\n]*?%%)', bygroups(Punctuation, Name.Tag), 'attrs'),

            # Everything else is text
            (r'[^%]+', Text),
            (r'%', Text),
        ],

        'attrs': [
            (r'%%', Punctuation, '#pop'),
            (r':', Punctuation),
            (r'"[^"\r\n]*"(?=:|%%)', String),
            (r"'[^'\r\n]*'(?=:|%%)", String),
            (r'%[0-9a-fA-F]{2}', String.Escape),
            (r'[^:%\r\n]+', Literal),
            (r'%', Literal),
            # Unterminated token: give up on it at the line break
            (r'[\r\n]', Text, '#pop'),
        ],
    }


def get_lexer() -> ShortcodeLexer:
    """
    Get the ShortcodeLexer instance

    Returns:
        ShortcodeLexer instance ready for use with Pygments
    """
    return ShortcodeLexer()


def source_highlight(text: str, title: str = "") -> str:
    """
    Render text as a standalone HTML page with shortcodes highlighted

    Args:
        text: Source text
        title: HTML document title

    Returns:
        Complete HTML document
    """
    formatter = HtmlFormatter(full=True, title=title, style='default')
    return highlight(text, get_lexer(), formatter)
