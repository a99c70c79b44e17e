"""
Configuration management for C# code generation.

Handles loading and merging settings from JSON files, providing
defaults and validation for the formatting and header conventions.
"""

import getpass
import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, fields

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass(frozen=True)
class WrapConfiguration:
    """Column budget used when wrapping documentation text."""

    use_tabs: bool = True
    tab_size: int = 4
    num_characters_per_line: int = 130

    def validate(self) -> None:
        """Reject widths the formatter cannot work with."""
        if self.tab_size <= 0:
            raise ConfigError(f"tab_size must be greater than zero: {self.tab_size}")
        if self.num_characters_per_line <= 0:
            raise ConfigError(
                "num_characters_per_line must be greater than zero: "
                f"{self.num_characters_per_line}"
            )


def _default_developer() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # No login name available (e.g. containers without a passwd entry)
        return ""


def _default_file_info_template() -> List[str]:
    return [
        "Filename:    <%filename%>",
        "Owner:       <%developer%>",
        "Description: <%description%>",
        "Generated using <%appname%> version <%appversion%> "
        "with <%libraryname%> version <%libraryversion%>.",
    ]


def _default_copyright_template() -> List[str]:
    return ["Copyright © <%developer%> <%year%>"]


def _default_license_template() -> List[str]:
    return [
        "You can add a license of your choice here by setting the license_template setting."
    ]


@dataclass
class CodeGenSettings:
    """Global settings for the generated C# files."""

    # Identification used by the header templates
    application_name: str = "cscodegen"
    application_version: str = ""
    library_name: str = "cscodegen"
    library_version: str = ""
    company_name: str = (
        "Specify your company name here by setting the company_name setting"
    )
    developer: str = field(default_factory=_default_developer)

    # Layout
    flower_box_character: Optional[str] = "*"
    tab_size: int = 4
    use_tabs: bool = True
    num_characters_per_line: int = 130
    line_ending: str = "\n"

    # File header templates
    file_info_template: List[str] = field(default_factory=_default_file_info_template)
    copyright_template: List[str] = field(default_factory=_default_copyright_template)
    license_template: List[str] = field(default_factory=_default_license_template)
    include_sub_header: bool = True

    # Unrecognized keys from settings files
    custom: Dict[str, Any] = field(default_factory=dict)

    def wrap_configuration(self) -> WrapConfiguration:
        """Return the read-only wrapping view of these settings."""
        return WrapConfiguration(
            use_tabs=self.use_tabs,
            tab_size=self.tab_size,
            num_characters_per_line=self.num_characters_per_line,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = {}
        for f in fields(self):
            if f.name == "custom":
                continue
            value = getattr(self, f.name)
            data[f.name] = list(value) if isinstance(value, list) else value
        data.update(self.custom)
        return data


class ConfigManager:
    """Manages settings loading, merging and export."""

    # Settings that are always taken from the library, never from files
    _READ_ONLY = {"library_name", "library_version"}

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load the library-provided defaults."""
        from ... import __version__

        self._defaults = {
            "application_version": __version__,
            "library_version": __version__,
        }

    def get_settings(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> CodeGenSettings:
        """
        Get complete settings.

        Args:
            custom_config: Setting overrides
            config_file: Path to JSON settings file

        Returns:
            Merged and validated settings
        """
        base_config = self._defaults.copy()

        if config_file:
            file_config = self._load_config_file(config_file)
            for key in self._READ_ONLY:
                file_config.pop(key, None)
            base_config.update(file_config)

        if custom_config:
            base_config.update(custom_config)

        settings = self._dict_to_settings(base_config)
        settings.wrap_configuration().validate()

        for warning in self.validate_settings(settings):
            logger.warning("Settings: %s", warning)

        return settings

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load settings from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded settings from %s", path)
        return config

    def _dict_to_settings(self, config_dict: Dict[str, Any]) -> CodeGenSettings:
        """Convert dictionary to CodeGenSettings instance."""
        known_fields = {f.name for f in fields(CodeGenSettings)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        for key in ("file_info_template", "copyright_template", "license_template"):
            value = config_args.get(key)
            if isinstance(value, str):
                config_args[key] = value.splitlines()
            elif value is None and key in config_args:
                config_args[key] = []

        for key in ("tab_size", "num_characters_per_line"):
            if key in config_args:
                try:
                    config_args[key] = int(config_args[key])
                except (TypeError, ValueError):
                    raise ConfigError(f"{key} must be an integer: {config_args[key]!r}")

        flower = config_args.get("flower_box_character")
        if flower == "":
            config_args["flower_box_character"] = None

        return CodeGenSettings(**config_args)

    def save_settings(
        self,
        settings: CodeGenSettings,
        output_path: Union[str, Path],
        overwrite: bool = False,
    ) -> Path:
        """Save settings to JSON file."""
        path = Path(output_path)

        if path.exists() and not overwrite:
            raise ConfigError(f"The file path specified ({path}) already exists.")

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

        logger.info("Settings exported to %s", path)
        return path

    def validate_settings(self, settings: CodeGenSettings) -> List[str]:
        """
        Validate settings.

        Returns:
            List of validation warnings
        """
        warnings = []

        flower = settings.flower_box_character
        if flower is not None and len(flower) != 1:
            warnings.append(
                f"flower_box_character should be a single character: {flower!r}"
            )

        if settings.num_characters_per_line < 40:
            warnings.append(
                f"num_characters_per_line is very narrow ({settings.num_characters_per_line}); "
                "long words will be hyphenated across many lines"
            )

        if settings.line_ending not in ("\n", "\r\n"):
            warnings.append(f"Unusual line_ending: {settings.line_ending!r}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_settings(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> CodeGenSettings:
    """
    Convenience function to load settings.

    Args:
        custom_config: Setting overrides
        config_file: Path to JSON settings file

    Returns:
        Merged settings
    """
    manager = get_config_manager()
    return manager.get_settings(custom_config, config_file)
