"""Type adapter that serializes a type through a proxy class."""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..core.ports import TypeProxy, WireCodec
from ..errors import ConfigurationError

log = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P", bound=TypeProxy)


class ProxyTypeAdapter(Generic[T, P]):
    """
    Serializes a type by way of a proxy class.

    An instance is serialized by converting it to a proxy with ``to_proxy``
    and handing the proxy to the codec. An instance is deserialized by
    decoding a proxy and calling its ``build()``. The domain type carries no
    serialization knowledge of its own.

    Adapters hold no mutable state and may be shared between threads.
    """

    def __init__(self, domain_type: type[T], proxy_type: type[P], to_proxy: Callable[[T], P]):
        self.domain_type = domain_type
        self.proxy_type = proxy_type
        self._to_proxy = to_proxy

    def __repr__(self) -> str:
        return f"ProxyTypeAdapter({self.domain_type.__name__} via {self.proxy_type.__name__})"

    def serialize(self, instance: T, codec: WireCodec) -> Any:
        return codec.to_wire(self._to_proxy(instance), self.proxy_type)

    def deserialize(self, wire: Any, codec: WireCodec) -> T:
        proxy: P = codec.from_wire(wire, self.proxy_type)
        return proxy.build()


def make_adapter(
    domain_type: type[T],
    proxy_type: type[P],
    to_proxy: Callable[[T], P] | None = None,
) -> ProxyTypeAdapter[T, P]:
    """
    Get an adapter for ``domain_type`` that serializes through ``proxy_type``.

    Args:
        domain_type: The type the adapter serializes.
        proxy_type: A dataclass with a ``build()`` method returning ``domain_type``.
        to_proxy: Converts a domain value to a proxy. Defaults to the proxy's
            ``from_domain`` classmethod.

    Raises:
        ConfigurationError: if no usable conversion or build is available.
            This is a setup-time failure, never deferred to serialize().
    """
    if not isinstance(domain_type, type):
        raise ConfigurationError(f"domain type must be a class, got {domain_type!r}")
    if not isinstance(proxy_type, type) or not dataclasses.is_dataclass(proxy_type):
        raise ConfigurationError(f"proxy type for {domain_type.__name__} must be a dataclass")
    if not callable(getattr(proxy_type, "build", None)):
        raise ConfigurationError(f"{proxy_type.__name__} has no build() method")

    if to_proxy is None:
        to_proxy = getattr(proxy_type, "from_domain", None)
        if to_proxy is None:
            raise ConfigurationError(
                f"{proxy_type.__name__} has no from_domain() and no to_proxy was given"
            )
    if not callable(to_proxy):
        raise ConfigurationError(f"conversion for {proxy_type.__name__} is not callable")
    try:
        inspect.signature(to_proxy).bind(object())
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"conversion for {proxy_type.__name__} must take exactly one domain value: {e}"
        ) from e

    log.debug("Binding %s to proxy %s", domain_type.__name__, proxy_type.__name__)
    return ProxyTypeAdapter(domain_type, proxy_type, to_proxy)
