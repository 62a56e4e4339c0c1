"""Configuration loader for docfeed.toml."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .codec.engine import FORMATS
from .errors import ConfigurationError

log = logging.getLogger(__name__)

CONFIG_NAME = "docfeed.toml"


@dataclass
class CodecConfig:
    """Wire codec configuration."""
    indent: int | None = 2
    sort_keys: bool = False
    format: str = "json"


@dataclass
class AnchorConfig:
    """Link extraction configuration."""
    base_url: str | None = None
    skip_fragments: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class DocfeedConfig:
    """Complete docfeed configuration."""
    codec: CodecConfig = field(default_factory=CodecConfig)
    anchors: AnchorConfig = field(default_factory=AnchorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Path | None = None


def load_config(config_path: Path | None = None) -> DocfeedConfig:
    """
    Load configuration from docfeed.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/docfeed.toml

    Args:
        config_path: Explicit path to config file

    Returns:
        DocfeedConfig with resolved settings

    Raises:
        ConfigurationError: if the file is not valid TOML or holds bad values
    """
    toml_data: dict[str, Any] = {}
    source = None

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            try:
                with open(path, "rb") as f:
                    toml_data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(f"Invalid config file {path}: {e}") from e
            source = path
            log.debug("Loaded config from %s", path)
            break

    codec_data = toml_data.get("codec", {})
    codec_config = CodecConfig(
        indent=codec_data.get("indent", 2),
        sort_keys=codec_data.get("sort_keys", False),
        format=codec_data.get("format", "json"),
    )
    if codec_config.format not in FORMATS:
        raise ConfigurationError(
            f"codec.format must be one of {', '.join(FORMATS)}, got {codec_config.format!r}"
        )

    anchor_data = toml_data.get("anchors", {})
    anchor_config = AnchorConfig(
        base_url=anchor_data.get("base_url"),
        skip_fragments=anchor_data.get("skip_fragments", True),
    )

    logging_data = toml_data.get("logging", {})
    logging_config = LoggingConfig(
        level=str(logging_data.get("level", "WARNING")).upper()
    )

    return DocfeedConfig(
        codec=codec_config,
        anchors=anchor_config,
        logging=logging_config,
        source=source,
    )
