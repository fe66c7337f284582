"""
Shortcode data models

Type-safe structures passed between the tokenizer, the attribute splitter
and the resolver. All of them live only for one transformation call, except
HandlerSpec which is held by the process-wide HandlerRegistry.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List


class FilterContext(Enum):
    """
    Pipeline stage that invoked the shortcode engine

    The value is the label handed to handlers as their last argument.
    """
    CONTENT = "the_content"            # post body
    TITLE = "the_title"                # post/page title
    DOCUMENT_TITLE = "wp_title"        # <title> of the document
    SLUG = "sanitize_title"            # slug sanitization, see ShortcodeEngine.filter_apply
    MANUAL = "manual"                  # direct library call


@dataclass
class Token:
    """
    One %%...%% occurrence found by the tokenizer

    Attributes:
        text: Raw token text including both %% delimiters
        position: Character offset of the token in the scanned text

    Example:
        For source "Copyright %%date:Y%%":
        Token(text="%%date:Y%%", position=10)
    """
    text: str
    position: int


@dataclass
class ShortcodeCall:
    """
    Result of splitting one token into a handler name and its arguments

    Attributes:
        name: Handler name (first colon-separated segment)
        attrs: Positional arguments, URL-decoded, quoted colons restored

    Example:
        '%%date:"H:i:s":now%%' -> ShortcodeCall(name="date", attrs=["H:i:s", "now"])
    """
    name: str
    attrs: List[str] = field(default_factory=list)


@dataclass
class HandlerSpec:
    """
    A callable registered under a filter hook

    Attributes:
        hook: Hook key the handler is registered under (e.g., "shortcode_date")
        handler: Callable receiving the chained value first, then extra args
        priority: Ascending execution order within the hook
        accepted_args: Number of positional arguments handed to the callable
        sequence: Registration order, breaks priority ties
    """
    hook: str
    handler: Callable
    priority: int = 10
    accepted_args: int = 1
    sequence: int = 0

    def invoke(self, value, *args):
        """Call the handler with the value and as many extra args as it accepts"""
        extra = args[:max(self.accepted_args - 1, 0)]
        return self.handler(value, *extra)
