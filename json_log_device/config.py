"""Configuration loading from env vars and an optional YAML mapping file."""

import logging
import os
from dataclasses import dataclass

import yaml

from json_log_device.formatter import DEFAULT_DATETIME_FORMAT
from json_log_device.mapping import DEFAULT_MAPPING

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class DeviceConfig:
    output: str = "stdout"
    pretty: bool = False
    utc: bool = False
    datetime_format: str = DEFAULT_DATETIME_FORMAT
    mapping_file: str | None = None
    log_level: str = "WARNING"


def load_config() -> DeviceConfig:
    """Build DeviceConfig from environment variables with sensible defaults."""
    return DeviceConfig(
        output=os.environ.get("JSON_LOG_OUTPUT", DeviceConfig.output),
        pretty=_parse_bool(os.environ.get("JSON_LOG_PRETTY", "false")),
        utc=_parse_bool(os.environ.get("JSON_LOG_UTC", "false")),
        datetime_format=os.environ.get(
            "JSON_LOG_DATETIME_FORMAT", DeviceConfig.datetime_format
        ),
        mapping_file=os.environ.get("JSON_LOG_MAPPING_FILE") or None,
        log_level=os.environ.get("JSON_LOG_LEVEL", DeviceConfig.log_level).upper(),
    )


def load_mapping(path: str | None) -> dict:
    """Load a field mapping from a YAML file.

    The file holds either a top-level ``mapping:`` section or the mapping
    itself. Returns the default mapping when no path is given or the file
    does not exist.
    """
    if not path:
        return dict(DEFAULT_MAPPING)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Mapping file %s not found, using default mapping", path)
        return dict(DEFAULT_MAPPING)

    if not isinstance(data, dict):
        raise ValueError(f"Mapping file {path} must contain a mapping")
    mapping = data.get("mapping", data)
    if not isinstance(mapping, dict):
        raise ValueError(f"'mapping' in {path} must be a mapping, got {type(mapping).__name__}")

    logger.info("Loaded mapping with %d fields from %s", len(mapping), path)
    return {str(k): v for k, v in mapping.items()}
