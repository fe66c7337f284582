"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use SLICKCODE_ prefix (e.g., SLICKCODE_SITE_URL=https://example.org).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use SLICKCODE_ prefix.

    Examples:
        SLICKCODE_DATE_FORMAT="Y-m-d"
        SLICKCODE_TIMEZONE=Europe/London
        SLICKCODE_AUTOMATIC_SHORTCODES=false
    """

    model_config = SettingsConfigDict(
        env_prefix="SLICKCODE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Engine configuration
    hook_prefix: str = Field(
        default="shortcode_",
        description="Prefix joined to a shortcode name to form its filter hook",
    )

    colon_entity: str = Field(
        default="&#58;",
        description="Escape used for colons inside quoted attributes while splitting",
    )

    automatic_shortcodes: bool = Field(
        default=True,
        description="Apply shortcodes automatically for content, title and slug filter contexts",
    )

    # Host defaults
    site_url: str = Field(
        default="",
        description="Site URL returned by the %%siteurl%% shortcode",
    )

    date_format: str = Field(
        default="F j, Y",
        description="Default PHP-style date format used when a date shortcode omits one",
    )

    timezone: str = Field(
        default="UTC",
        description="Timezone name used to render timestamps",
    )

    published_sentinel: str = Field(
        default="post_date",
        description="Time reference that requests the context's published timestamp",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output during transformation",
    )

    def hookName_make(self, name: str) -> str:
        """
        Generate the filter hook key for a shortcode name.

        Args:
            name: Shortcode name (e.g., "date")

        Returns:
            Hook key (e.g., "shortcode_date")

        Example:
            >>> settings = AppSettings()
            >>> settings.hookName_make('date')
            'shortcode_date'
        """
        return f"{self.hook_prefix}{name}"

    def shortcodeName_extract(self, hook: str) -> str | None:
        """
        Extract the shortcode name from a filter hook key.

        Args:
            hook: Hook key to parse

        Returns:
            Shortcode name if hook carries the shortcode prefix, None otherwise

        Example:
            >>> settings = AppSettings()
            >>> settings.shortcodeName_extract('shortcode_siteurl')
            'siteurl'
        """
        if not hook.startswith(self.hook_prefix):
            return None

        name = hook[len(self.hook_prefix):]
        return name or None


# Singleton instance - import this in your code
appsettings = AppSettings()
