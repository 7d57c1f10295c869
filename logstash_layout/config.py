"""Configuration loading from env vars and an optional YAML file."""

import codecs
import logging
import os
from dataclasses import dataclass

import yaml

from logstash_layout.errors import ConfigError

logger = logging.getLogger(__name__)

# layout attribute names as they appear in YAML -> dataclass field names
_ATTRIBUTE_ALIASES = {
    "locationInfo": "location_info",
    "eventEol": "event_eol",
}

_ENV_VARS = {
    "location_info": "LAYOUT_LOCATION_INFO",
    "charset": "LAYOUT_CHARSET",
    "properties": "LAYOUT_PROPERTIES",
    "complete": "LAYOUT_COMPLETE",
    "compact": "LAYOUT_COMPACT",
    "event_eol": "LAYOUT_EVENT_EOL",
    "hostname": "LAYOUT_HOSTNAME",
}

_BOOL_FIELDS = ("location_info", "properties", "complete", "compact", "event_eol")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class EncoderConfig:
    location_info: bool = False
    charset: str = "UTF-8"
    # accepted for compatibility with other layouts, no effect on encoding
    properties: bool = False
    complete: bool = False
    compact: bool = False
    event_eol: bool = False
    hostname: str | None = None  # None -> resolved when the encoder is built

    def __post_init__(self):
        try:
            codecs.lookup(self.charset)
        except LookupError:
            raise ConfigError(f"Unknown charset: {self.charset!r}") from None


def load_yaml_config(path: str | None) -> dict:
    """Return the ``layout`` mapping from a YAML file, or an empty dict."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, e)
        return {}

    section = data.get("layout", {}) if isinstance(data, dict) else {}
    if not isinstance(section, dict):
        logger.warning("Ignoring non-mapping 'layout' section in %s", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return {_ATTRIBUTE_ALIASES.get(k, k): v for k, v in section.items()}


def load_config(yaml_data: dict | None = None) -> EncoderConfig:
    """Build EncoderConfig from defaults, YAML data, then env vars (highest precedence)."""
    values = {}
    for name, value in (yaml_data or {}).items():
        if name not in _ENV_VARS:
            logger.warning("Unknown layout option %r ignored", name)
            continue
        values[name] = value

    for name, env_var in _ENV_VARS.items():
        raw = os.environ.get(env_var)
        if raw is not None:
            values[name] = raw

    for name in _BOOL_FIELDS:
        if name in values:
            values[name] = _parse_bool(values[name])
    if "charset" in values:
        values["charset"] = str(values["charset"])
    if values.get("hostname") is not None:
        values["hostname"] = str(values["hostname"])

    return EncoderConfig(**values)
