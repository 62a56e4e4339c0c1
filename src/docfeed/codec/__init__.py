"""Wire codec and proxy type adapters."""

from .engine import FORMATS, JsonCodec
from .proxy import ProxyTypeAdapter, make_adapter

__all__ = [
    "FORMATS",
    "JsonCodec",
    "ProxyTypeAdapter",
    "make_adapter",
]
