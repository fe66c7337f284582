"""
Models package for slickcode

Contains data structures and type definitions for the shortcode engine
and the CLI pipeline.
"""

from .state import ProgramState, pipeline
from .shortcode import FilterContext, Token, ShortcodeCall, HandlerSpec
from .host import HostContext

__all__ = [
    "ProgramState",
    "pipeline",
    "FilterContext",
    "Token",
    "ShortcodeCall",
    "HandlerSpec",
    "HostContext",
]
