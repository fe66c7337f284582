"""
Host context binding and host options loader

Handlers have a fixed call signature, so the HostContext of the current
transformation is made available through a context variable rather than
passed to them. ShortcodeEngine binds it for the duration of each call.

Host options may be kept in a YAML file:

    site_url: https://example.org
    date_format: "jS F Y"
    timezone: Europe/London
    published: 2017-05-25 02:13:08
    fields:
      event_date: 2024-03-01
"""

import yaml
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from ..models.host import HostContext


class HostOptionsError(Exception):
    """Raised when a host options file cannot be loaded or validated"""
    pass


_host_context: ContextVar[Optional[HostContext]] = ContextVar('host_context', default=None)

HOST_OPTION_KEYS = {'site_url', 'date_format', 'timezone', 'published', 'fields'}


def host_current() -> HostContext:
    """
    HostContext bound to the current transformation

    Returns:
        The bound HostContext, or one built from application settings
    """
    host = _host_context.get()
    if host is None:
        host = HostContext.context_createFromSettings()
    return host


@contextmanager
def host_bound(host: Optional[HostContext]) -> Iterator[HostContext]:
    """
    Bind a HostContext for the duration of a with-block

    Passing None keeps whatever is already bound (or the settings default).
    """
    if host is None:
        yield host_current()
        return

    token = _host_context.set(host)
    try:
        yield host
    finally:
        _host_context.reset(token)


def hostOptions_load(path: Path) -> HostContext:
    """
    Load host options from a YAML file

    Values not present in the file come from application settings.

    Args:
        path: Path to the YAML file

    Returns:
        HostContext built from the file

    Raises:
        HostOptionsError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    if not path.exists():
        raise HostOptionsError(f"Host options file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            options = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise HostOptionsError(f"Invalid YAML in {path}: {e}")

    return hostOptions_validate(options or {}, source=str(path))


def hostOptions_validate(options: Any, source: str = "<options>") -> HostContext:
    """
    Validate a host options mapping and build a HostContext from it

    Raises:
        HostOptionsError: On unknown keys or wrongly typed values
    """
    if not isinstance(options, dict):
        raise HostOptionsError(f"{source}: host options must be a mapping")

    unknown = set(options) - HOST_OPTION_KEYS
    if unknown:
        raise HostOptionsError(f"{source}: unknown host options: {', '.join(sorted(unknown))}")

    values: Dict[str, Any] = {}
    for key in ('site_url', 'date_format', 'timezone'):
        if key in options:
            if not isinstance(options[key], str):
                raise HostOptionsError(f"{source}: '{key}' must be a string")
            values[key] = options[key]

    if 'published' in options:
        values['published'] = published_coerce(options['published'], source)

    if 'fields' in options:
        fields = options['fields'] or {}
        if not isinstance(fields, dict):
            raise HostOptionsError(f"{source}: 'fields' must be a mapping")
        values['fields'] = {str(k): '' if v is None else str(v) for k, v in fields.items()}

    return HostContext.context_createFromSettings(**values)


def published_coerce(value: Any, source: str):
    """Normalize a YAML 'published' value to epoch seconds or datetime"""
    # YAML turns bare timestamps into datetime/date objects
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise HostOptionsError(f"{source}: 'published' must be a timestamp")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        from .handlers import reference_parse
        parsed = reference_parse(value)
        if parsed is None:
            raise HostOptionsError(f"{source}: cannot parse 'published' value {value!r}")
        return parsed
    raise HostOptionsError(f"{source}: 'published' must be a timestamp")
