"""Generic JSON-model codec with per-type adapters."""

from __future__ import annotations

import dataclasses
import functools
import io
import json
import logging
import types
from typing import Any, Literal, Union, get_args, get_origin, get_type_hints

import yaml

from ..core.ports import TypeAdapter
from ..errors import ConfigurationError, InvalidArgument
from .proxy import make_adapter

log = logging.getLogger(__name__)

WireFormat = Literal["json", "yaml"]
FORMATS: tuple[str, ...] = ("json", "yaml")

_SCALARS = (str, int, float, bool)


@functools.lru_cache(maxsize=None)
def _hints(cls: type) -> dict[str, Any]:
    return get_type_hints(cls)


def _wire_name(f: dataclasses.Field) -> str:
    return f.metadata.get("json", f.name)


def _has_default(f: dataclasses.Field) -> bool:
    return f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING


class JsonCodec:
    """
    Encodes values to JSON-compatible structures and back.

    Types with a registered adapter are handed to it; dataclasses are
    encoded field by field (a ``"json"`` entry in a field's metadata
    overrides its wire name); containers and scalars map onto their JSON
    counterparts. Decoding is driven by the declared type.

    Register adapters during setup. After that the codec is only read and
    can be shared freely.
    """

    def __init__(self, indent: int | None = 2, sort_keys: bool = False, fmt: WireFormat = "json"):
        if fmt not in FORMATS:
            raise ConfigurationError(f"Unknown wire format: {fmt}")
        self.indent = indent
        self.sort_keys = sort_keys
        self.fmt = fmt
        self._adapters: dict[type, TypeAdapter] = {}

    def register(self, tp: type, adapter: TypeAdapter) -> "JsonCodec":
        log.debug("Registering adapter for %s: %r", tp.__name__, adapter)
        self._adapters[tp] = adapter
        return self

    def register_proxy(self, domain_type: type, proxy_type: type, to_proxy=None) -> "JsonCodec":
        return self.register(domain_type, make_adapter(domain_type, proxy_type, to_proxy))

    def adapter_for(self, tp: Any) -> TypeAdapter | None:
        return self._adapters.get(tp) if isinstance(tp, type) else None

    # Encoding

    def to_wire(self, value: Any, tp: Any = None) -> Any:
        if value is None or isinstance(value, _SCALARS):
            return value

        adapter = self._adapters.get(type(value)) or self.adapter_for(tp)
        if adapter is not None:
            return adapter.serialize(value, self)

        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            hints = _hints(type(value))
            return {
                _wire_name(f): self.to_wire(getattr(value, f.name), hints.get(f.name))
                for f in dataclasses.fields(value)
            }

        if isinstance(value, dict):
            item_type = _item_type(tp, 1)
            out = {}
            for k, v in value.items():
                if not isinstance(k, str):
                    raise InvalidArgument(f"Object keys must be strings, got {k!r}")
                out[k] = self.to_wire(v, item_type)
            return out

        if isinstance(value, (set, frozenset)):
            items = sorted(value) if all(isinstance(v, str) for v in value) else list(value)
            return [self.to_wire(v, _item_type(tp, 0)) for v in items]

        if isinstance(value, (list, tuple)):
            return [self.to_wire(v, _item_type(tp, 0)) for v in value]

        raise InvalidArgument(f"Cannot encode value of type {type(value).__name__}")

    # Decoding

    def from_wire(self, wire: Any, tp: Any) -> Any:
        # null decodes to None for any declared type; build() decides if that is valid
        if wire is None or tp is None or tp is Any:
            return wire

        adapter = self.adapter_for(tp)
        if adapter is not None:
            return adapter.deserialize(wire, self)

        origin = get_origin(tp)
        args = get_args(tp)

        if origin is Union or origin is types.UnionType:
            options = [a for a in args if a is not type(None)]
            if len(options) != 1:
                raise ConfigurationError(f"Cannot decode ambiguous union {tp}")
            return self.from_wire(wire, options[0])

        if origin in (list, set, frozenset, tuple) or tp in (list, set, frozenset, tuple):
            container = origin or tp
            if not isinstance(wire, list):
                raise InvalidArgument(f"Expected a list for {tp}, got {type(wire).__name__}")
            if container is tuple and args and args[-1] is not Ellipsis:
                if len(args) != len(wire):
                    raise InvalidArgument(f"Expected {len(args)} items for {tp}, got {len(wire)}")
                return tuple(self.from_wire(w, a) for w, a in zip(wire, args))
            item_type = args[0] if args else None
            return container(self.from_wire(w, item_type) for w in wire)

        if origin is dict or tp is dict:
            if not isinstance(wire, dict):
                raise InvalidArgument(f"Expected an object for {tp}, got {type(wire).__name__}")
            item_type = args[1] if len(args) == 2 else None
            return {k: self.from_wire(v, item_type) for k, v in wire.items()}

        if isinstance(tp, type) and dataclasses.is_dataclass(tp):
            return self._decode_dataclass(wire, tp)

        if tp in _SCALARS:
            return _decode_scalar(wire, tp)

        raise ConfigurationError(f"No way to decode type {tp!r}")

    def _decode_dataclass(self, wire: Any, tp: type) -> Any:
        if not isinstance(wire, dict):
            raise InvalidArgument(f"Expected an object for {tp.__name__}, got {type(wire).__name__}")
        hints = _hints(tp)
        kwargs: dict[str, Any] = {}
        for f in dataclasses.fields(tp):
            if not f.init:
                continue
            key = _wire_name(f)
            if key in wire:
                kwargs[f.name] = self.from_wire(wire[key], hints.get(f.name))
            elif not _has_default(f):
                kwargs[f.name] = None
        return tp(**kwargs)

    # Text

    def dumps(self, value: Any, tp: Any = None, fmt: WireFormat | None = None) -> str:
        wire = self.to_wire(value, tp)
        if (fmt or self.fmt) == "yaml":
            buf = io.StringIO()
            yaml.safe_dump(wire, buf, sort_keys=self.sort_keys, allow_unicode=True)
            return buf.getvalue()
        return json.dumps(wire, indent=self.indent, sort_keys=self.sort_keys, ensure_ascii=False)

    def loads(self, text: str, tp: Any, fmt: WireFormat | None = None) -> Any:
        if (fmt or self.fmt) == "yaml":
            try:
                wire = yaml.safe_load(io.StringIO(text))
            except yaml.YAMLError as e:
                raise InvalidArgument(f"Malformed YAML: {e}") from e
        else:
            try:
                wire = json.loads(text)
            except json.JSONDecodeError as e:
                raise InvalidArgument(f"Malformed JSON: {e}") from e
        return self.from_wire(wire, tp)


def _item_type(tp: Any, position: int) -> Any:
    args = get_args(tp)
    if len(args) > position and args[position] is not Ellipsis:
        return args[position]
    return None


def _decode_scalar(wire: Any, tp: type) -> Any:
    if tp is float and isinstance(wire, int) and not isinstance(wire, bool):
        return float(wire)
    if tp is int and isinstance(wire, bool):
        raise InvalidArgument("Expected int, got bool")
    if not isinstance(wire, tp):
        raise InvalidArgument(f"Expected {tp.__name__}, got {type(wire).__name__}")
    return wire
