"""Tests for identity values and their wire proxies."""

import pytest

from docfeed.codec.engine import JsonCodec
from docfeed.core.identity import (
    GroupMemberships,
    Password,
    Principal,
    register_type_adapters,
)
from docfeed.errors import InvalidArgument


@pytest.fixture
def codec():
    return register_type_adapters(JsonCodec())


@pytest.mark.parametrize(
    "value",
    [
        Principal("alice"),
        Principal("alice", "CORP"),
        Password("s3cret"),
        Password(""),
        GroupMemberships(frozenset({"eng", "ops"}), 1700000000000),
        GroupMemberships(frozenset()),
    ],
)
def test_round_trip(codec, value):
    """Test that every identity value survives encode/decode."""
    assert codec.loads(codec.dumps(value), type(value)) == value


def test_principal_wire_shape(codec):
    """Test the principal's wire field names."""
    assert codec.to_wire(Principal("bob", "example.com")) == {
        "name": "bob",
        "activeDirectoryDomain": "example.com",
    }


def test_password_wire_shape(codec):
    """Test that the password is written under its wire name."""
    assert codec.to_wire(Password("pw")) == {"password": "pw"}


def test_groups_wire_shape_sorted(codec):
    """Test that groups are written in sorted order."""
    wire = codec.to_wire(GroupMemberships({"b", "c", "a"}, 5))
    assert wire == {"groups": ["a", "b", "c"], "timestamp": 5}


def test_principal_missing_name(codec):
    """Test that a principal without a name fails in build()."""
    with pytest.raises(InvalidArgument):
        codec.from_wire({"activeDirectoryDomain": "CORP"}, Principal)


def test_password_missing(codec):
    """Test that an absent password fails in build()."""
    with pytest.raises(InvalidArgument):
        codec.from_wire({}, Password)


def test_groups_null(codec):
    """Test that null groups fail in build()."""
    with pytest.raises(InvalidArgument):
        codec.from_wire({"groups": None}, GroupMemberships)


def test_groups_negative_timestamp(codec):
    """Test domain validation of the timestamp."""
    with pytest.raises(InvalidArgument):
        codec.from_wire({"groups": [], "timestamp": -1}, GroupMemberships)


def test_groups_bad_member(codec):
    """Test that non-string group names are rejected while decoding."""
    with pytest.raises(InvalidArgument):
        codec.from_wire({"groups": ["a", 1]}, GroupMemberships)


def test_nested_in_list(codec):
    """Test that proxied values nest inside containers."""
    principals = [Principal("a"), Principal("b", "D")]
    wire = codec.to_wire(principals)
    assert codec.from_wire(wire, list[Principal]) == principals


@pytest.mark.parametrize(
    "text,expected",
    [
        ("CORP\\alice", Principal("alice", "CORP")),
        ("corp/alice", Principal("alice", "corp")),
        ("alice@corp.example", Principal("alice", "corp.example")),
        ("alice", Principal("alice")),
    ],
)
def test_principal_parse(text, expected):
    """Test splitting user/domain strings."""
    assert Principal.parse(text) == expected


def test_principal_joined():
    assert Principal("alice", "corp").joined() == "alice@corp"
    assert Principal("alice").joined() == "alice"


def test_verifiable():
    """Test that empty names and passwords are not verifiable."""
    assert Principal("a").is_verifiable()
    assert not Principal("").is_verifiable()
    assert not Password("").is_verifiable()


def test_password_repr_hides_secret():
    assert "s3cret" not in repr(Password("s3cret"))


def test_domain_types_validate():
    """Test constructor validation on the domain types."""
    with pytest.raises(InvalidArgument):
        Principal(None)
    with pytest.raises(InvalidArgument):
        Password(None)
    with pytest.raises(InvalidArgument):
        GroupMemberships("eng")
    with pytest.raises(InvalidArgument):
        GroupMemberships(frozenset(), True)


def test_domain_types_immutable():
    """Test that the domain values are frozen."""
    principal = Principal("a")
    with pytest.raises(AttributeError):
        principal.name = "b"
