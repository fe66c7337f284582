"""
slickcode - %%shortcode%% substitution engine

Inline shortcodes for content, titles and slugs:
%%tag:attr1:attr2%% tokens resolved through registered handlers.
"""

__version__ = "1.0.0"

from .lib import ShortcodeEngine, HandlerRegistry, LOG, state_connectToLogger
from .models import FilterContext, HostContext

__all__ = [
    "ShortcodeEngine",
    "HandlerRegistry",
    "FilterContext",
    "HostContext",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
