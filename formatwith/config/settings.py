"""
settings.py

This module provides configuration management for formatwith.

Features:
- Centralized configuration using Pydantic settings
- Environment overrides with the FMTW_ prefix
- An optional JSON configuration file in the user config directory
- Construction of the default FillOptions from the configured policies

Usage:
Import appsettings for configuration values, or options_default() for the
FillOptions used when a caller passes none.
"""

from pathlib import Path
from typing import Final
from appdirs import user_config_dir
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from formatwith.models.dataModel import (
    FillOptions,
    MalformedDelimiterPolicy,
    MissingKeyPolicy,
)

# Set up the configuration directory and file using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("formatwith", ""))
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"


class App(BaseSettings):
    """
    Library settings model.

    Settings can be overridden through environment variables with the FMTW_
    prefix, which take precedence over the JSON configuration file.

    Attributes:
        beQuiet: Suppress detailed logging output
        missingKey: Default policy for unresolved token keys
        malformedDelimiter: Default policy for lone close delimiters
        openDelimiter: Default token open character
        closeDelimiter: Default token close character
    """

    beQuiet: bool = False
    missingKey: MissingKeyPolicy = MissingKeyPolicy.THROW
    malformedDelimiter: MalformedDelimiterPolicy = (
        MalformedDelimiterPolicy.TREAT_AS_LITERAL
    )
    openDelimiter: str = "{"
    closeDelimiter: str = "}"

    model_config = SettingsConfigDict(
        env_prefix="FMTW_",
        case_sensitive=False,
        json_file=CONFIG_FILE,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            JsonConfigSettingsSource(settings_cls),
        )

    def options_build(self) -> FillOptions:
        """
        Build FillOptions from these settings.

        Raises:
            ValidationError: If a configured delimiter is not one character
        """
        return FillOptions(
            open_delimiter=self.openDelimiter,
            close_delimiter=self.closeDelimiter,
            missing_key=self.missingKey,
            malformed_delimiter=self.malformedDelimiter,
        )


def options_default() -> FillOptions:
    """
    The FillOptions used when a caller does not pass any.

    Returns:
        FillOptions: Options built from the current appsettings
    """
    return appsettings.options_build()


# Create the settings instance
appsettings: Final[App] = App()
