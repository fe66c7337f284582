"""
Host context model

Carries the per-call data the surrounding site supplies to shortcode
handlers: site URL, default date format, timezone, the published
timestamp of the item being rendered and its custom fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Optional, Union

from ..config import appsettings


@dataclass
class HostContext:
    """
    Host-supplied values consulted by built-in handlers

    Attributes:
        site_url: Value returned by %%siteurl%%
        date_format: Default PHP-style format for %%date%% without a format
        timezone: Timezone name used when rendering timestamps
        published: Published timestamp (epoch seconds or datetime) of the
                   current item, used for the published sentinel
        fields: Custom fields of the current item; a time reference naming
                a non-empty field is parsed from the field's value
        slug_sanitizer: Callable used to re-sanitize slugs, defaults to
                        lib.slug.title_sanitize
    """
    site_url: str = ""
    date_format: str = "F j, Y"
    timezone: str = "UTC"
    published: Optional[Union[int, float, datetime]] = None
    fields: Dict[str, str] = field(default_factory=dict)
    slug_sanitizer: Optional[Callable[[str], str]] = None

    @classmethod
    def context_createFromSettings(cls, **overrides) -> "HostContext":
        """
        Create a HostContext seeded from application settings.

        Args:
            **overrides: Field values replacing the settings defaults

        Returns:
            HostContext instance
        """
        values = {
            "site_url": appsettings.site_url,
            "date_format": appsettings.date_format,
            "timezone": appsettings.timezone,
        }
        values.update(overrides)
        return cls(**values)
