"""
Handler registry for shortcode filter hooks

Maps hook keys to priority-ordered HandlerSpec lists. Shortcode handlers
live under "shortcode_<name>" keys (see AppSettings.hookName_make); any
other hook key may be used as a general filter chain.

A chain is applied by handing the initial value to the first handler and
each handler's return value to the next one. Handlers run in ascending
priority, ties in registration order.

The registry is populated at startup and only read while text is being
transformed.
"""

from typing import Callable, Dict, List, Optional

from ..config import appsettings
from ..models.shortcode import HandlerSpec


class HandlerRegistry:
    """
    Registry of filter chains keyed by hook name

    Example:
        >>> registry = HandlerRegistry(builtins=False)
        >>> registry.shortcode_add('shout', lambda name, attrs, *rest: ' '.join(attrs).upper())
        >>> registry.filters_apply('shortcode_shout', 'shout', ['hi'], '', [], 'manual')
        'HI'
    """

    def __init__(self, builtins: bool = True) -> None:
        """
        Initialize the registry

        Args:
            builtins: Register the built-in date, days, time and siteurl shortcodes
        """
        self.hooks: Dict[str, List[HandlerSpec]] = {}
        self.sequence = 0
        if builtins:
            from .handlers import handlers_registerBuiltins
            handlers_registerBuiltins(self)

    def filter_add(
        self,
        hook: str,
        handler: Callable,
        priority: int = 10,
        accepted_args: int = 1,
    ) -> HandlerSpec:
        """
        Register a handler under a hook key

        Args:
            hook: Hook key
            handler: Callable receiving the chained value first
            priority: Ascending execution order within the hook
            accepted_args: Number of positional arguments passed to handler

        Returns:
            The HandlerSpec stored in the registry
        """
        if accepted_args < 1:
            raise ValueError(f"accepted_args must be at least 1, got {accepted_args}")

        spec = HandlerSpec(
            hook=hook,
            handler=handler,
            priority=priority,
            accepted_args=accepted_args,
            sequence=self.sequence,
        )
        self.sequence += 1
        self.hooks.setdefault(hook, []).append(spec)
        self.hooks[hook].sort(key=lambda s: (s.priority, s.sequence))
        return spec

    def shortcode_add(
        self,
        name: str,
        handler: Callable,
        priority: int = 10,
        accepted_args: int = 5,
    ) -> HandlerSpec:
        """
        Register a handler for %%name%% tokens

        The handler is called as handler(value, attrs, text, caller_args, context)
        truncated to accepted_args arguments. value is the shortcode name for
        the first handler in the chain. Returning the name unchanged marks the
        token as unhandled.
        """
        if not name or ':' in name or any(ch.isspace() for ch in name):
            raise ValueError(f"Invalid shortcode name: {name!r}")
        return self.filter_add(appsettings.hookName_make(name), handler, priority, accepted_args)

    def shortcode(self, name: str, priority: int = 10, accepted_args: int = 5) -> Callable:
        """Decorator form of shortcode_add"""
        def handler_register(handler: Callable) -> Callable:
            self.shortcode_add(name, handler, priority, accepted_args)
            return handler
        return handler_register

    def filter_remove(self, hook: str, handler: Callable, priority: Optional[int] = None) -> bool:
        """
        Remove a handler from a hook

        Args:
            hook: Hook key
            handler: Handler callable to remove
            priority: Only remove registrations at this priority when given

        Returns:
            True if at least one registration was removed
        """
        specs = self.hooks.get(hook, [])
        kept = [s for s in specs
                if not (s.handler == handler and (priority is None or s.priority == priority))]
        if len(kept) == len(specs):
            return False
        if kept:
            self.hooks[hook] = kept
        else:
            del self.hooks[hook]
        return True

    def filter_has(self, hook: str) -> bool:
        """Check if any handler is registered under hook"""
        return bool(self.hooks.get(hook))

    def shortcode_has(self, name: str) -> bool:
        """Check if any handler is registered for %%name%%"""
        return self.filter_has(appsettings.hookName_make(name))

    def handlers_get(self, hook: str) -> List[HandlerSpec]:
        """Handlers registered under hook, in execution order"""
        return list(self.hooks.get(hook, []))

    def shortcodes_list(self) -> List[str]:
        """Names of all registered shortcodes, sorted"""
        names = (appsettings.shortcodeName_extract(hook) for hook in self.hooks)
        return sorted(name for name in names if name)

    def filters_apply(self, hook: str, value, *args):
        """
        Run the chain registered under hook

        Args:
            hook: Hook key
            value: Initial value handed to the first handler
            *args: Extra arguments, truncated per handler to its accepted_args

        Returns:
            The value returned by the last handler, or value itself when
            nothing is registered
        """
        for spec in self.hooks.get(hook, []):
            value = spec.invoke(value, *args)
        return value
