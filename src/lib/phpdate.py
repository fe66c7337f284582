"""
PHP date() format rendering

Date shortcodes take their format in PHP date() notation, e.g. "jS F Y"
renders as "25th May 2017". Every format character PHP documents is
supported; a backslash makes the following character literal and any
other character is copied through unchanged.

Names are always English; the output does not depend on the process locale.
"""

import calendar
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional


DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']
MONTH_NAMES = ['January', 'February', 'March', 'April', 'May', 'June', 'July',
               'August', 'September', 'October', 'November', 'December']


def ordinal_suffix(day: int) -> str:
    """English ordinal suffix for a day of the month (st, nd, rd, th)"""
    if 11 <= day % 100 <= 13:
        return 'th'
    return {1: 'st', 2: 'nd', 3: 'rd'}.get(day % 10, 'th')


def offset_format(moment: datetime, separator: str = '') -> str:
    """UTC offset as +HHMM, or +HH:MM with separator=':'"""
    offset = moment.utcoffset() or timedelta(0)
    seconds = int(offset.total_seconds())
    sign = '-' if seconds < 0 else '+'
    hours, minutes = divmod(abs(seconds) // 60, 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def swatch_beat(moment: datetime) -> str:
    """Swatch Internet time, measured from UTC+1"""
    # Seconds of the day only: shifting the datetime overflows at years 1 and 9999
    offset = int((moment.utcoffset() or timedelta(0)).total_seconds())
    seconds = moment.hour * 3600 + moment.minute * 60 + moment.second - offset + 3600
    return f"{int((seconds % 86400) / 86.4):03d}"


def hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


def epoch_seconds(moment: datetime) -> int:
    if moment.tzinfo is None:
        return calendar.timegm(moment.timetuple())
    return int(moment.timestamp())


FORMATTERS: Dict[str, Callable[[datetime, Optional[str]], str]] = {
    # Day
    'd': lambda m, z: f"{m.day:02d}",
    'D': lambda m, z: DAY_NAMES[m.weekday()][:3],
    'j': lambda m, z: str(m.day),
    'l': lambda m, z: DAY_NAMES[m.weekday()],
    'N': lambda m, z: str(m.isoweekday()),
    'S': lambda m, z: ordinal_suffix(m.day),
    'w': lambda m, z: str(m.isoweekday() % 7),
    'z': lambda m, z: str(m.timetuple().tm_yday - 1),
    # Week
    'W': lambda m, z: f"{m.isocalendar()[1]:02d}",
    # Month
    'F': lambda m, z: MONTH_NAMES[m.month - 1],
    'm': lambda m, z: f"{m.month:02d}",
    'M': lambda m, z: MONTH_NAMES[m.month - 1][:3],
    'n': lambda m, z: str(m.month),
    't': lambda m, z: str(calendar.monthrange(m.year, m.month)[1]),
    # Year
    'L': lambda m, z: '1' if calendar.isleap(m.year) else '0',
    'o': lambda m, z: str(m.isocalendar()[0]),
    'Y': lambda m, z: f"{m.year:04d}",
    'y': lambda m, z: f"{m.year % 100:02d}",
    # Time
    'a': lambda m, z: 'am' if m.hour < 12 else 'pm',
    'A': lambda m, z: 'AM' if m.hour < 12 else 'PM',
    'B': lambda m, z: swatch_beat(m),
    'g': lambda m, z: str(hour12(m)),
    'G': lambda m, z: str(m.hour),
    'h': lambda m, z: f"{hour12(m):02d}",
    'H': lambda m, z: f"{m.hour:02d}",
    'i': lambda m, z: f"{m.minute:02d}",
    's': lambda m, z: f"{m.second:02d}",
    'u': lambda m, z: f"{m.microsecond:06d}",
    'v': lambda m, z: f"{m.microsecond // 1000:03d}",
    # Timezone
    'e': lambda m, z: z or m.tzname() or 'UTC',
    'I': lambda m, z: '1' if m.dst() else '0',
    'O': lambda m, z: offset_format(m),
    'P': lambda m, z: offset_format(m, ':'),
    'p': lambda m, z: 'Z' if not (m.utcoffset() or timedelta(0)) else offset_format(m, ':'),
    'T': lambda m, z: m.tzname() or 'UTC',
    'Z': lambda m, z: str(int((m.utcoffset() or timedelta(0)).total_seconds())),
    # Full date/time
    'c': lambda m, z: date_format('Y-m-d\\TH:i:sP', m, z),
    'r': lambda m, z: date_format('D, d M Y H:i:s O', m, z),
    'U': lambda m, z: str(epoch_seconds(m)),
}


def date_format(pattern: str, moment: datetime, zone_name: Optional[str] = None) -> str:
    """
    Render a datetime using a PHP date() format pattern

    Args:
        pattern: PHP format, e.g. "Y-m-d H:i:s" or "jS F Y"
        moment: Datetime to render (aware datetimes render their own offset)
        zone_name: Timezone identifier reported by the 'e' character

    Returns:
        Formatted string

    Example:
        >>> date_format('jS F Y', datetime(2017, 5, 25))
        '25th May 2017'
        >>> date_format('\\\\Y\\\\e\\\\a\\\\r: Y', datetime(2000, 1, 1))
        'Year: 2000'
    """
    result = []
    pos = 0
    while pos < len(pattern):
        char = pattern[pos]
        if char == '\\':
            # Escaped: next character literal, trailing backslash kept
            if pos + 1 < len(pattern):
                result.append(pattern[pos + 1])
                pos += 2
            else:
                result.append(char)
                pos += 1
            continue

        formatter = FORMATTERS.get(char)
        result.append(formatter(moment, zone_name) if formatter else char)
        pos += 1

    return ''.join(result)
