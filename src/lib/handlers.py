"""
Built-in shortcode handlers

    %%date%%, %%days%%, %%time%%   current or referenced date/time
    %%siteurl%%                    the host's site URL

Date shortcodes:
    %%date:FORMAT:REFERENCE%%

    FORMAT     PHP date() format, URL-encode spaces or quote it to keep
               colons, e.g. %%date:"H:i:s"%% or %%days:jS F%20Y%%.
               Empty: the host's default date format.
    REFERENCE  Empty: now. "post_date": the published timestamp of the
               current item. The name of a non-empty custom field: that
               field's value. An integer: epoch seconds. Anything else is
               parsed as a date/time ("tomorrow", "+1 week", "2017-05-25").
               Unparseable references fall back to now.

    %%days%% drops time-of-day characters from FORMAT, %%time%% drops date
    characters, %%date%% uses FORMAT as given.

Examples:
    Copyright &copy; %%date:Y%%          -> Copyright © 2000
    %%date:Y-m-d:post_date%%             -> 2000-12-31
    %%days:jS F%20Y:1495678388%%         -> 25th May 2017
    %%time:"H:i:s":now%%                 -> 23:59:59
"""

import re
from datetime import datetime, timezone, tzinfo
from typing import Callable, List, Optional, Tuple

import dateutil.parser
from dateutil import tz
from dateutil.relativedelta import relativedelta

from ..config import appsettings
from ..models.host import HostContext
from .host import host_current
from .log import LOG
from .phpdate import date_format


# Time-of-day characters removed by %%days%%, date characters removed by %%time%%
DAYS_STRIP_PATTERN = re.compile(r'(?<!\\)[aAbgGhHisuveIOPTZcrU]+')
TIME_STRIP_PATTERN = re.compile(r'(?<!\\)[dDjlNSwzWFmMntLoYycrU]+')

INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')

RELATIVE_PATTERN = re.compile(
    r'^([+-]?\d+)\s*'
    r'(sec|second|min|minute|hour|day|week|fortnight|month|year)s?'
    r'(\s+ago)?$',
    re.IGNORECASE,
)

RELATIVE_UNITS = {
    'sec': 'seconds',
    'second': 'seconds',
    'min': 'minutes',
    'minute': 'minutes',
    'hour': 'hours',
    'day': 'days',
    'week': 'weeks',
    'month': 'months',
    'year': 'years',
}


def clock_system() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def zone_resolve(name: str) -> Tuple[tzinfo, str]:
    """
    tzinfo for a timezone name, UTC when the name is unknown

    Returns:
        (tzinfo, name actually in effect)
    """
    zone = tz.gettz(name) if name else None
    if zone is None:
        LOG(f"Unknown timezone '{name}', using UTC", level=2)
        return tz.UTC, 'UTC'
    return zone, name


def reference_parse(reference: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a free-form time reference

    Understands now, today, midnight, noon, tomorrow, yesterday, relative
    offsets ("+1 day", "-2 weeks", "3 hours ago") and anything
    dateutil.parser accepts. Missing date parts come from today, missing
    time parts are midnight.

    Args:
        reference: Text to parse
        now: Reference point for relative expressions (default: system time)

    Returns:
        Parsed datetime (naive unless the text carried an offset), or None
        if the text cannot be parsed
    """
    if now is None:
        now = datetime.now()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    text = reference.strip().lower()

    keywords = {
        'now': now,
        'today': midnight,
        'midnight': midnight,
        'noon': midnight.replace(hour=12),
        'tomorrow': midnight + relativedelta(days=1),
        'yesterday': midnight - relativedelta(days=1),
    }
    if text in keywords:
        return keywords[text]

    relative = RELATIVE_PATTERN.match(text)
    if relative:
        amount, unit, ago = relative.groups()
        amount = int(amount)
        unit = unit.lower()
        if ago:
            amount = -amount
        if unit == 'fortnight':
            offset = {'weeks': 2 * amount}
        else:
            offset = {RELATIVE_UNITS[unit]: amount}
        try:
            return now + relativedelta(**offset)
        except (ValueError, OverflowError):
            # Lands outside years 1..9999
            return None

    try:
        return dateutil.parser.parse(reference, default=midnight.replace(tzinfo=None))
    except (ValueError, OverflowError):
        return None


class DateShortcode:
    """
    Handler shared by %%date%%, %%days%% and %%time%%

    Args:
        clock: Callable returning the current time as an aware datetime
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.clock = clock or clock_system

    def __call__(
        self,
        name: str = 'date',
        attrs: Optional[List[str]] = None,
        text: str = '',
        args: Optional[list] = None,
        context: str = '',
    ) -> str:
        host = host_current()
        attrs = list(attrs or [])
        pattern = attrs[0] if len(attrs) > 0 and attrs[0] else host.date_format
        reference = attrs[1] if len(attrs) > 1 else ''

        zone, zone_name = zone_resolve(host.timezone)
        moment = self.moment_resolve(reference, host, zone)

        if name == 'days':
            pattern = DAYS_STRIP_PATTERN.sub('', pattern)
        elif name == 'time':
            pattern = TIME_STRIP_PATTERN.sub('', pattern)

        LOG(f"{name}: format '{pattern}' at {moment.isoformat()}", level=3)
        return date_format(pattern, moment, zone_name)

    def moment_resolve(self, reference: str, host: HostContext, zone) -> datetime:
        """
        Turn a time reference into an aware datetime in the host timezone

        Args:
            reference: Second shortcode attribute (may be empty)
            host: Current HostContext
            zone: tzinfo of the host timezone

        Returns:
            Aware datetime
        """
        now = self.clock().astimezone(zone)
        if not reference:
            return now

        if reference == appsettings.published_sentinel and host.published is not None:
            return self.moment_coerce(host.published, zone, now)

        if host.fields.get(reference):
            reference = host.fields[reference]

        return self.moment_coerce(reference, zone, now)

    def moment_coerce(self, value, zone, now: datetime) -> datetime:
        """Convert epoch seconds, datetimes or date text to an aware datetime"""
        if isinstance(value, datetime):
            return self.zone_convert(value, zone, now)

        if isinstance(value, (int, float)):
            return self.epoch_convert(value, zone, now)

        value = str(value).strip()
        if INTEGER_PATTERN.match(value):
            return self.epoch_convert(int(value), zone, now)

        parsed = reference_parse(value, now.replace(tzinfo=None))
        if parsed is None:
            LOG(f"Unparseable time reference '{value}', using current time", level=2)
            return now
        return self.zone_convert(parsed, zone, now)

    def zone_convert(self, moment: datetime, zone, now: datetime) -> datetime:
        """Naive datetimes are taken as local to zone, aware ones are converted"""
        if moment.tzinfo is None:
            return moment.replace(tzinfo=zone)
        try:
            return moment.astimezone(zone)
        except (OverflowError, ValueError):
            LOG(f"{moment.isoformat()} out of range in host timezone, using current time", level=2)
            return now

    def epoch_convert(self, seconds, zone, now: datetime) -> datetime:
        try:
            return datetime.fromtimestamp(seconds, zone)
        except (OverflowError, OSError, ValueError):
            LOG(f"Timestamp {seconds} out of range, using current time", level=2)
            return now


def siteurl_handler(name: str = 'siteurl', *args) -> str:
    """%%siteurl%%: the host's configured site URL, attributes ignored"""
    return host_current().site_url


def handlers_registerBuiltins(registry, clock: Optional[Callable[[], datetime]] = None) -> None:
    """
    Register the built-in shortcodes on a registry

    Args:
        registry: HandlerRegistry to populate
        clock: Optional clock for the date shortcodes (tests pin time here)
    """
    date_handler = DateShortcode(clock)
    registry.shortcode_add('date', date_handler, 10, 5)
    registry.shortcode_add('days', date_handler, 10, 5)
    registry.shortcode_add('time', date_handler, 10, 5)
    registry.shortcode_add('siteurl', siteurl_handler, 10, 5)
