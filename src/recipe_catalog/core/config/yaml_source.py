"""YAML settings source with environment-based file merging."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge override into base dict.

    Args:
        base: Base dictionary to merge into.
        override: Dictionary with values to override.

    Returns:
        New dictionary with merged values.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_dir(directory: Path) -> dict[str, Any]:
    """Merge every ``*.yaml`` file in a directory, in name order."""
    merged: dict[str, Any] = {}
    if not directory.is_dir():
        return merged
    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        merged = deep_merge(merged, data)
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load and merge the catalog's YAML files based on APP_ENV.

    Files are read in two stages:
    1. All base files from ``config/base/``
    2. Overrides from ``config/environments/{APP_ENV}/``

    ``RECIPE_CATALOG_CONFIG_DIR`` points the source at a different
    config directory (used by tests and packaged deployments).
    """

    def __init__(
        self,
        settings_cls: type[Any],
        config_dir: Path | None = None,
    ) -> None:
        super().__init__(settings_cls)
        self._config_dir = config_dir or self._find_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        self._yaml_data = self._load_yaml_files()

    @staticmethod
    def _find_config_dir() -> Path:
        override = os.getenv("RECIPE_CATALOG_CONFIG_DIR")
        if override:
            return Path(override)
        # src/recipe_catalog/core/config/yaml_source.py -> project root
        project_root = Path(__file__).resolve().parents[4]
        return project_root / "config"

    def _load_yaml_files(self) -> dict[str, Any]:
        merged = _load_yaml_dir(self._config_dir / "base")
        env_data = _load_yaml_dir(self._config_dir / "environments" / self._app_env)
        return deep_merge(merged, env_data)

    @property
    def config_dir(self) -> Path:
        """Directory the YAML files were read from."""
        return self._config_dir

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Get the value for a specific field from YAML data."""
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        """Return all merged YAML configuration data."""
        return self._yaml_data
