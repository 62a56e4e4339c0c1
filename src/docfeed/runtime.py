"""Runtime wiring helper for CLI applications."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .codec.engine import JsonCodec
from .config import DocfeedConfig, load_config
from .core.identity import register_type_adapters


@dataclass
class Runtime:
    """Container for all wired components."""
    config: DocfeedConfig
    codec: JsonCodec


def build_codec(config: DocfeedConfig) -> JsonCodec:
    """A codec configured from ``config`` with the identity adapters registered."""
    codec = JsonCodec(
        indent=config.codec.indent,
        sort_keys=config.codec.sort_keys,
        fmt=config.codec.format,
    )
    return register_type_adapters(codec)


def build_runtime(config_path: Path | None = None) -> Runtime:
    """Build and wire all components."""
    config = load_config(config_path=config_path)

    logging.basicConfig(
        level=getattr(logging, config.logging.level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    return Runtime(config=config, codec=build_codec(config))
