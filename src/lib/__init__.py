"""
slickcode - %%shortcode%% substitution engine

Inline shortcodes for content, titles and slugs:
%%tag:attr1:attr2%% tokens resolved through registered handlers.
"""

__version__ = "1.0.0"

from .engine import ShortcodeEngine, substitutions_apply
from .registry import HandlerRegistry
from .tokenizer import tokens_find
from .attributes import call_split
from .log import LOG, state_connectToLogger

__all__ = [
    "ShortcodeEngine",
    "HandlerRegistry",
    "substitutions_apply",
    "tokens_find",
    "call_split",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
