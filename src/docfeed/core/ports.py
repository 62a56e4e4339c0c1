from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class TypeProxy(Protocol[T_co]):
    """
    Serialization stand-in for a domain type. The codec encodes the proxy's
    fields; build() is the only place a domain value gets made.
    """

    def build(self) -> T_co:
        pass


class TypeAdapter(Protocol[T]):
    """
    Converts one type to and from JSON-compatible wire values.
    """

    def serialize(self, instance: T, codec: "WireCodec") -> Any:
        pass

    def deserialize(self, wire: Any, codec: "WireCodec") -> T:
        pass


class WireCodec(Protocol):
    """
    Generic engine that adapters delegate nested encoding to.
    """

    def to_wire(self, value: Any, tp: Any = None) -> Any:
        pass

    def from_wire(self, wire: Any, tp: Any) -> Any:
        pass


class AnchorSink(Protocol):
    """
    Anything that records discovered links: an AnchorMap or a response.
    """

    def add_anchor(self, uri: str, text: str | None = None) -> None:
        pass


class LinkExtractor(Protocol):
    """
    Find links in document content and report them to a sink, in document order.
    """

    def extract(self, content: str, sink: AnchorSink) -> int:
        pass
