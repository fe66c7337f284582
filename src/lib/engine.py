"""
Shortcode engine for %%notation%%

Replaces %%name:attr1:attr2%% tokens in text with the output of the
handlers registered for them.

Each distinct token is passed through the "shortcode_<name>" filter chain
with the shortcode name as the initial value. If the chain returns
something else, the token is replaced with it (an empty string removes the
token). If the chain hands back the name unchanged, either because nothing
is registered or because every handler echoed it, the token is not a valid
shortcode and stays in the text as written.

All replacements are made in a single pass over the original text, so a
handler's output is never scanned for further shortcodes.

Example:
    >>> engine = ShortcodeEngine(HandlerRegistry())
    >>> engine.text_transform("Copyright %%date:Y%% %%unknown_tag%%")  # in 2000
    'Copyright 2000 %%unknown_tag%%'

Known limitation: a handler that wants to output exactly its own name is
indistinguishable from one that declines the token.
"""

import re
from typing import Dict, List, Optional, Union

from ..config import appsettings, AppSettings
from ..models.host import HostContext
from ..models.shortcode import FilterContext
from .attributes import call_split
from .host import host_bound
from .log import LOG
from .registry import HandlerRegistry
from .slug import title_sanitize
from .tokenizer import tokens_find, tokens_distinct


def substitutions_apply(text: str, substitutions: Dict[str, str]) -> str:
    """
    Replace every occurrence of each key with its value in one pass

    Longer keys win where keys overlap. Replacement text is not rescanned.
    """
    if not substitutions:
        return text

    keys = sorted(substitutions, key=len, reverse=True)
    pattern = re.compile('|'.join(re.escape(key) for key in keys))
    return pattern.sub(lambda match: substitutions[match.group(0)], text)


class ShortcodeEngine:
    """
    Applies %%shortcodes%% to text using a HandlerRegistry

    Args:
        registry: Registry holding the shortcode handlers (default: a
                  registry with the built-in shortcodes)
        settings: Application settings (default: the appsettings singleton)
    """

    def __init__(
        self,
        registry: Optional[HandlerRegistry] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self.registry = registry if registry is not None else HandlerRegistry()
        self.settings = settings or appsettings

    def token_resolve(
        self,
        token_text: str,
        text: str,
        caller_args: List,
        context_label: str,
    ) -> Optional[str]:
        """
        Resolve one token through its filter chain

        Args:
            token_text: Raw token, delimiters included
            text: Full text the token was found in
            caller_args: Arguments the engine was invoked with
            context_label: Label of the invoking filter context

        Returns:
            Replacement text, or None if the token is not handled
        """
        call = call_split(token_text)
        hook = self.settings.hookName_make(call.name)
        value = self.registry.filters_apply(
            hook, call.name, call.attrs, text, caller_args, context_label
        )

        if value == call.name:
            LOG(f"{token_text}: not handled", level=3)
            return None

        value = '' if value is None else str(value)
        LOG(f"{token_text} -> {value!r}", level=3)
        return value

    def substitutions_build(
        self,
        text: str,
        context: FilterContext = FilterContext.MANUAL,
        caller_args: Optional[List] = None,
    ) -> Dict[str, str]:
        """
        Resolve every distinct token in text

        Returns:
            Mapping of handled token texts to their replacements
        """
        tokens = tokens_find(text)
        if not tokens:
            return {}

        if caller_args is None:
            caller_args = [text]

        distinct = tokens_distinct(tokens)
        LOG(f"Found {len(tokens)} shortcode tokens ({len(distinct)} distinct)", level=2)

        substitutions: Dict[str, str] = {}
        for token_text in distinct:
            value = self.token_resolve(token_text, text, caller_args, context.value)
            if value is not None:
                substitutions[token_text] = value
        return substitutions

    def text_transform(
        self,
        text: str,
        context: FilterContext = FilterContext.MANUAL,
        caller_args: Optional[List] = None,
        host: Optional[HostContext] = None,
    ) -> str:
        """
        Substitute shortcodes in text

        Args:
            text: Text to transform
            context: Filter context the call comes from, passed on to handlers
            caller_args: Arguments handed to handlers as-is (default: [text])
            host: HostContext for the handlers (default: currently bound one)

        Returns:
            Text with handled shortcodes replaced and others left verbatim
        """
        if not text:
            return text

        with host_bound(host):
            substitutions = self.substitutions_build(text, context, caller_args)
        return substitutions_apply(text, substitutions)

    def filter_apply(
        self,
        context: Union[FilterContext, str],
        *args,
        host: Optional[HostContext] = None,
    ) -> str:
        """
        Entry point for a host filter pipeline

        The first argument is the text to transform. For the slug context
        the arguments are (sanitized, raw): shortcodes are applied to the
        raw title because sanitizing strips the %% delimiters. If nothing
        changed, the already sanitized value is returned as-is; otherwise
        the transformed raw title is sanitized again.

        Does nothing when automatic shortcodes are disabled in settings.

        Args:
            context: FilterContext or its label (e.g. "the_title")
            *args: Filter arguments, text first
            host: HostContext for the handlers

        Returns:
            Filtered text
        """
        if not args:
            return ''

        if not self.settings.automatic_shortcodes:
            return args[0]

        context = FilterContext(context)
        caller_args = list(args)

        if context is not FilterContext.SLUG:
            return self.text_transform(args[0], context, caller_args, host)

        sanitized = args[0]
        raw = args[1] if len(args) > 1 else args[0]
        transformed = self.text_transform(raw, context, caller_args, host)
        if transformed == raw:
            return sanitized

        with host_bound(host) as bound:
            sanitizer = bound.slug_sanitizer or title_sanitize
        LOG(f"Re-sanitizing slug from '{transformed}'", level=2)
        return sanitizer(transformed)
