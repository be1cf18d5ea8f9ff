"""
Configuration manager for plot settings.

This module provides the ConfigLoader class for loading plot defaults from
YAML files, with optional environment-specific overrides.
"""
import dataclasses
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from benchplot.errors import ConfigError
from benchplot.models.plot_params import PlotParams
from benchplot.util.log_config import setup_logger

logger = setup_logger(__name__)

BASE_CONFIG_FILE = "config.yaml"
TEXT_SETTINGS = ("element_throughput_unit", "title", "x_label", "colormap", "legend_position")
SIZE_SETTINGS = ("width", "height", "dpi")


class ConfigLoader:

    def __init__(self, config_path: Optional[Path] = None, env: Optional[str] = None):
        self.config_path = Path(config_path) if config_path is not None else None
        self.env = env
        self.config_data = self._load_config()

    def _load_config(self) -> PlotParams:
        """
        Load plot settings from config.yaml in the config directory.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            PlotParams: Settings with file values applied over the defaults
        """
        if self.config_path is None:
            if self.env:
                raise ConfigError(f"Environment '{self.env}' given without a config directory")
            return PlotParams()

        # Load base YAML file
        data = self._read_yaml(self.config_path / BASE_CONFIG_FILE)

        # Load environment-specific override if specified
        if self.env:
            env_data = self._read_yaml(self.config_path / f"config_{self.env}.yaml")
            # dict.update() will overwrite existing keys
            data.update(env_data)
            logger.debug(f"Applied environment override: {self.env}")

        return self._to_params(data, PlotParams())

    @staticmethod
    def _read_yaml(config_file: Path) -> Dict[str, Any]:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

        # An empty file is a valid, empty configuration
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {config_file}, got {type(data).__name__}")
        return data

    @staticmethod
    def _to_params(data: Dict[str, Any], base: PlotParams) -> PlotParams:
        known = {f.name for f in dataclasses.fields(PlotParams)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        values = dict(data)
        if "output_path" in values:
            if not isinstance(values["output_path"], (str, Path)) or not str(values["output_path"]):
                raise ConfigError(f"'output_path' must be a non-empty path, got {values['output_path']!r}")
            values["output_path"] = Path(values["output_path"])
        for key in TEXT_SETTINGS:
            if key in values and not isinstance(values[key], str):
                raise ConfigError(f"'{key}' must be a string, got {values[key]!r}")
        for key in SIZE_SETTINGS:
            if key in values and (isinstance(values[key], bool) or not isinstance(values[key], int) or values[key] <= 0):
                raise ConfigError(f"'{key}' must be a positive integer, got {values[key]!r}")
        if "short_labels" in values and not isinstance(values["short_labels"], bool):
            raise ConfigError(f"'short_labels' must be true or false, got {values['short_labels']!r}")
        return dataclasses.replace(base, **values)

    def merged(self, overrides: Dict[str, Any]) -> PlotParams:
        """
        Apply command line overrides on top of the file configuration.

        Args:
            overrides: Setting name to value; None means "not given"

        Returns:
            PlotParams: A new instance, the loaded config is left untouched
        """
        given = {key: value for key, value in overrides.items() if value is not None}
        return self._to_params(given, self.config_data)
