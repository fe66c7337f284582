"""
Built-in handler tests

Tests %%date%%, %%days%%, %%time%% and %%siteurl%% end to end through the
engine, with the clock pinned to 2000-12-31 23:59:59 UTC.
"""

import re
from datetime import datetime

import pytest

from slickcode.lib.handlers import (
    DAYS_STRIP_PATTERN,
    TIME_STRIP_PATTERN,
    DateShortcode,
    reference_parse,
)
from slickcode.lib.host import host_bound
from slickcode.models.host import HostContext


class TestDateFormats:
    """Format attribute handling"""

    def test_year(self, engine, host):
        """%%date:Y%% renders the year"""
        assert engine.text_transform("%%date:Y%%", host=host) == "2000"

    def test_default_format(self, engine, host):
        """No format falls back to the host's date format"""
        assert engine.text_transform("%%date%%", host=host) == "December 31, 2000"

    def test_empty_format_with_reference(self, engine, host):
        """An empty format still falls back when a reference is given"""
        assert engine.text_transform("%%date::0%%", host=host) == "January 1, 1970"

    def test_quoted_time_format(self, engine, host):
        """Quoted formats keep their colons"""
        assert engine.text_transform('%%date:"H:i:s":now%%', host=host) == "23:59:59"

    def test_doubled_quotes_literal(self, engine, host):
        """Doubled quotes leave one literal pair in the output"""
        assert engine.text_transform('%%date:""Y-m-d""%%', host=host) == '"2000-12-31"'

    def test_encoded_format(self, engine, host):
        """URL-encoded spaces in the format"""
        assert engine.text_transform("%%days:jS F%20Y:1495678388%%", host=host) == "25th May 2017"

    def test_host_timezone(self, engine):
        """Timestamps render in the host timezone"""
        host = HostContext(timezone="America/New_York")
        assert engine.text_transform('%%date:"Y-m-d H:i"%%', host=host) == "2000-12-31 18:59"

    def test_unknown_timezone_uses_utc(self, engine):
        """An unknown timezone name falls back to UTC"""
        host = HostContext(timezone="Not/AZone")
        assert engine.text_transform('%%date:"H:i"%%', host=host) == "23:59"

    @pytest.mark.parametrize("zone,expected", [
        ("America/New_York", "America/New_York"),
        ("Not/AZone", "UTC"),
    ])
    def test_timezone_identifier(self, engine, zone, expected):
        """'e' names the timezone the output is rendered in"""
        assert engine.text_transform("%%date:e%%", host=HostContext(timezone=zone)) == expected


class TestTimeReferences:
    """Second attribute: which moment to render"""

    def test_epoch_seconds(self, engine, host):
        """Integer references are epoch seconds"""
        assert engine.text_transform("%%date:Y-m-d:1495678388%%", host=host) == "2017-05-25"

    def test_epoch_zero(self, engine, host):
        """Zero is the epoch, not 'now'"""
        assert engine.text_transform("%%date:Y:0%%", host=host) == "1970"

    def test_published_timestamp(self, engine):
        """post_date uses the host's published timestamp"""
        host = HostContext(published=datetime(1999, 1, 2, 3, 4, 5))
        assert engine.text_transform("%%date:Y-m-d:post_date%%", host=host) == "1999-01-02"

    def test_published_epoch(self, engine):
        """Published may be given as epoch seconds"""
        host = HostContext(published=1495678388)
        assert engine.text_transform("%%date:Y:post_date%%", host=host) == "2017"

    def test_published_missing_uses_now(self, engine, host):
        """Without a published timestamp post_date falls back to now"""
        assert engine.text_transform("%%date:Y:post_date%%", host=host) == "2000"

    def test_custom_field(self, engine):
        """A reference naming a custom field uses the field's value"""
        host = HostContext(fields={"event_date": "2024-03-01"})
        assert engine.text_transform("%%date:Y-m-d:event_date%%", host=host) == "2024-03-01"

    def test_empty_custom_field_ignored(self, engine):
        """Empty fields are not used; the name itself is then parsed"""
        host = HostContext(fields={"event_date": ""})
        assert engine.text_transform("%%date:Y-m-d:event_date%%", host=host) == "2000-12-31"

    def test_free_form_date(self, engine, host):
        """Parseable dates are used directly"""
        assert engine.text_transform("%%date:l:2017-05-25%%", host=host) == "Thursday"

    @pytest.mark.parametrize("reference,expected", [
        ("tomorrow", "2001-01-01"),
        ("yesterday", "2000-12-30"),
        ("today", "2000-12-31"),
        ("%2B1 day", "2001-01-01"),
        ("-2 days", "2000-12-29"),
        ("3 days ago", "2000-12-28"),
        ("1 fortnight ago", "2000-12-17"),
    ])
    def test_relative_references(self, engine, host, reference, expected):
        """Relative references are measured from the clock"""
        assert engine.text_transform(f"%%date:Y-m-d:{reference}%%", host=host) == expected

    def test_unparseable_reference_uses_now(self, engine, host):
        """Nonsense references render the current time"""
        assert engine.text_transform("%%date:Y-m-d:nonsense%%", host=host) == "2000-12-31"

    @pytest.mark.parametrize("reference", [
        "99999999999999999999",
        "%2B99999 years",
        "99999999999999 days ago",
        '"0001-01-01 00:00%2B05:00"',
        '"9999-12-31 23:00-05:00"',
    ])
    def test_out_of_range_reference_uses_now(self, engine, host, reference):
        """References outside the representable years render the current time"""
        assert engine.text_transform(f"%%date:Y:{reference}%%", host=host) == "2000"

    def test_range_start_in_positive_zone(self, engine):
        """Year 1 local time east of UTC still renders every character"""
        host = HostContext(timezone="Asia/Kolkata")
        result = engine.text_transform('%%date:"Y B":"0001-01-01 00:00"%%', host=host)
        assert re.fullmatch(r"0001 \d{3}", result)

    def test_reference_parse_unparseable(self):
        """reference_parse reports failure with None"""
        assert reference_parse("nonsense") is None

    def test_reference_parse_date_only_is_midnight(self):
        """Missing time parts default to midnight"""
        assert reference_parse("2017-05-25", datetime(2000, 1, 1, 12, 30)) == datetime(2017, 5, 25)


class TestDaysAndTime:
    """days and time strip half of the format"""

    def test_days_pattern(self):
        """Time-of-day characters are removed"""
        assert DAYS_STRIP_PATTERN.sub("", "Y-m-d H:i:s") == "Y-m-d ::"

    def test_time_pattern(self):
        """Date characters are removed"""
        assert TIME_STRIP_PATTERN.sub("", "Y-m-d H:i:s") == "-- H:i:s"

    def test_escaped_letters_kept(self):
        """Backslash-escaped letters survive stripping"""
        assert DAYS_STRIP_PATTERN.sub("", r"\a\t H Y") == r"\a\t  Y"

    def test_days_shortcode(self, engine, host):
        """%%days%% renders only the date part"""
        assert engine.text_transform('%%days:"Y-m-d H:i:s"%%', host=host) == "2000-12-31 ::"

    def test_time_shortcode(self, engine, host):
        """%%time%% renders only the time part"""
        assert engine.text_transform('%%time:"Y-m-d H:i:s"%%', host=host) == "-- 23:59:59"

    def test_days_with_date_only_format(self, engine, host):
        """Nothing to strip leaves the format alone"""
        assert engine.text_transform("%%days:jS F%20Y%%", host=host) == "31st December 2000"

    def test_handler_called_directly(self, fixed_clock, host):
        """The handler can be used without the engine"""
        handler = DateShortcode(fixed_clock)
        with host_bound(host):
            assert handler("time", ["g:i a"]) == "11:59 pm"


class TestSiteUrl:
    """%%siteurl%%"""

    def test_site_url(self, engine, host):
        """Renders the host's site URL"""
        assert engine.text_transform("%%siteurl%%/about", host=host) == "https://example.org/about"

    def test_attributes_ignored(self, engine, host):
        """Attributes make no difference"""
        assert engine.text_transform("%%siteurl:x:y%%", host=host) == "https://example.org"

    def test_repeated(self, engine, host):
        """Every occurrence is replaced"""
        result = engine.text_transform("%%siteurl%% and %%siteurl%%", host=host)
        assert result == "https://example.org and https://example.org"
