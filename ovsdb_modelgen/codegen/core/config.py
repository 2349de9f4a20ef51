"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import re
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, fields, asdict


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class ModelGenConfig:
    """Configuration for model generation."""

    # Output settings
    package_name: str = "ovsmodel"
    output_dir: str = "."
    dry_run: bool = False

    # Struct tag key, e.g. `ovs:"name"`
    tag_key: str = "ovs"

    # Import path of the package providing DBModel/NewDBModel
    model_import: str = "github.com/ovn-org/libovsdb/model"

    # Extra acronyms for name normalization
    acronyms: List[str] = field(default_factory=list)

    # Unrecognized settings
    custom: Dict[str, Any] = field(default_factory=dict)


_GO_PACKAGE_NAME = re.compile(r"^[a-z][a-z0-9]*$")


class ConfigManager:
    """Manages configuration loading and merging."""

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> ModelGenConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Defaults, then file settings, then overrides
        """
        base_config = asdict(ModelGenConfig())

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> ModelGenConfig:
        """Convert dictionary to ModelGenConfig instance."""
        known_fields = {f.name for f in fields(ModelGenConfig)}

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

        return ModelGenConfig(**config_args)

    def save_config(self, config: ModelGenConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: ModelGenConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not _GO_PACKAGE_NAME.match(config.package_name or ""):
            warnings.append(
                f"Package name should be a short lowercase Go identifier: "
                f"{config.package_name!r}"
            )

        if not config.tag_key or not config.tag_key.isidentifier():
            warnings.append(f"Invalid struct tag key: {config.tag_key!r}")

        for acronym in config.acronyms:
            if not acronym.isalnum():
                warnings.append(f"Invalid acronym: {acronym!r}")

        return warnings


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> ModelGenConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return ConfigManager().get_config(custom_config, config_file)

