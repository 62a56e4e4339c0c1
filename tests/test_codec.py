"""Tests for the generic wire codec."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from docfeed.codec.engine import JsonCodec
from docfeed.errors import ConfigurationError, InvalidArgument


@dataclass
class Link:
    href: str
    label: str | None = field(default=None, metadata={"json": "text"})


@dataclass
class Page:
    url: str
    links: list[Link] = field(default_factory=list)
    tags: frozenset[str] = frozenset()
    extra: dict[str, Any] = field(default_factory=dict)
    size: float = 0.0
    hits: int = 0


def test_dataclass_to_wire_uses_wire_names():
    """Test field-by-field encoding with metadata name overrides."""
    codec = JsonCodec()
    wire = codec.to_wire(Link("http://a/", "A"))
    assert wire == {"href": "http://a/", "text": "A"}


def test_nested_round_trip():
    """Test nested dataclasses, lists, sets and dicts."""
    codec = JsonCodec()
    page = Page(
        url="http://a/",
        links=[Link("http://b/", "B"), Link("http://c/")],
        tags=frozenset({"y", "x"}),
        extra={"k": [1, 2]},
        size=1.5,
        hits=3,
    )
    wire = codec.to_wire(page)
    assert wire["tags"] == ["x", "y"]
    assert wire["links"][1] == {"href": "http://c/", "text": None}
    assert codec.from_wire(wire, Page) == page


def test_missing_fields_use_defaults():
    """Test that absent keys fall back to dataclass defaults."""
    codec = JsonCodec()
    page = codec.from_wire({"url": "http://a/"}, Page)
    assert page == Page(url="http://a/")


def test_missing_required_field_is_none():
    """Test that a required field absent from the wire decodes as None."""
    codec = JsonCodec()
    link = codec.from_wire({}, Link)
    assert link.href is None


def test_unknown_keys_ignored():
    """Test that extra wire keys are dropped."""
    codec = JsonCodec()
    assert codec.from_wire({"href": "h", "bogus": 1}, Link) == Link("h")


def test_int_accepted_for_float():
    """Test that JSON integers decode into float fields."""
    codec = JsonCodec()
    page = codec.from_wire({"url": "u", "size": 2}, Page)
    assert page.size == 2.0
    assert isinstance(page.size, float)


def test_wrong_shape_rejected():
    """Test that mismatched wire shapes raise InvalidArgument."""
    codec = JsonCodec()
    with pytest.raises(InvalidArgument):
        codec.from_wire([], Page)
    with pytest.raises(InvalidArgument):
        codec.from_wire({"url": "u", "links": "nope"}, Page)
    with pytest.raises(InvalidArgument):
        codec.from_wire({"url": "u", "hits": True}, Page)
    with pytest.raises(InvalidArgument):
        codec.from_wire({"url": 7}, Page)


def test_fixed_tuple():
    """Test fixed-length tuple decoding."""
    codec = JsonCodec()
    assert codec.from_wire([1, "a"], tuple[int, str]) == (1, "a")
    with pytest.raises(InvalidArgument):
        codec.from_wire([1], tuple[int, str])


def test_ambiguous_union_rejected():
    """Test that unions of several concrete types are not guessed at."""
    codec = JsonCodec()
    with pytest.raises(ConfigurationError):
        codec.from_wire(1, int | str)


def test_unencodable_value():
    """Test that arbitrary objects are refused."""
    codec = JsonCodec()
    with pytest.raises(InvalidArgument):
        codec.to_wire(object())
    with pytest.raises(InvalidArgument):
        codec.to_wire({1: "a"})


def test_dumps_options():
    """Test indent and key sorting."""
    codec = JsonCodec(indent=None, sort_keys=True)
    assert codec.dumps(Link("h", "t")) == '{"href": "h", "text": "t"}'
    codec = JsonCodec(indent=None)
    assert codec.dumps(Link("h")) == '{"href": "h", "text": null}'


def test_yaml_output():
    """Test YAML rendering keeps field order."""
    codec = JsonCodec(fmt="yaml")
    text = codec.dumps(Link("h", "t"))
    assert text == "href: h\ntext: t\n"
    assert codec.loads(text, Link) == Link("h", "t")


def test_malformed_text():
    """Test that unparsable text raises InvalidArgument."""
    codec = JsonCodec()
    with pytest.raises(InvalidArgument):
        codec.loads("{not json", Link)
    with pytest.raises(InvalidArgument):
        codec.loads("a: [", Link, fmt="yaml")


def test_unknown_format():
    """Test that only json and yaml are accepted."""
    with pytest.raises(ConfigurationError):
        JsonCodec(fmt="xml")


def test_later_registration_wins():
    """Test that re-registering a type replaces its adapter."""

    class Upper:
        def serialize(self, value, codec):
            return value.href.upper()

        def deserialize(self, wire, codec):
            return Link(wire.lower())

    codec = JsonCodec()
    codec.register(Link, Upper())
    assert codec.to_wire(Link("abc")) == "ABC"
    assert codec.from_wire("ABC", Link) == Link("abc")
