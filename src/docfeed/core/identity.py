"""Identity values carried in connector state, with their wire proxies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..errors import InvalidArgument

if TYPE_CHECKING:
    from ..codec.engine import JsonCodec


@dataclass(frozen=True)
class Principal:
    """A user name with an optional Active Directory domain."""

    name: str
    domain: str | None = None

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise InvalidArgument("principal name must be a string")
        if self.domain is not None and not isinstance(self.domain, str):
            raise InvalidArgument("principal domain must be a string or None")

    @classmethod
    def parse(cls, text: str) -> "Principal":
        """
        Split a combined user/domain string.

        Accepts ``DOMAIN\\user``, ``domain/user``, ``user@domain`` and a bare
        ``user``.

        Examples:
            >>> Principal.parse("CORP\\\\alice")
            Principal(name='alice', domain='CORP')
            >>> Principal.parse("bob@example.com")
            Principal(name='bob', domain='example.com')
        """
        if text is None:
            raise InvalidArgument("cannot parse None as a principal")
        slash = text.find("\\")
        if slash == -1:
            slash = text.find("/")
        if slash >= 0:
            return cls(text[slash + 1 :], text[:slash])
        at = text.find("@")
        if at >= 0:
            return cls(text[:at], text[at + 1 :])
        return cls(text)

    def joined(self) -> str:
        return f"{self.name}@{self.domain}" if self.domain else self.name

    def is_verifiable(self) -> bool:
        return bool(self.name)


@dataclass(frozen=True)
class Password:
    text: str

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise InvalidArgument("password text is required")

    def __repr__(self) -> str:
        return "Password(***)"

    def is_verifiable(self) -> bool:
        return bool(self.text)


@dataclass(frozen=True)
class GroupMemberships:
    """Groups a user belongs to, as of ``timestamp`` (epoch millis)."""

    groups: frozenset[str]
    timestamp: int = 0

    def __post_init__(self):
        if self.groups is None or isinstance(self.groups, str):
            raise InvalidArgument("groups must be a collection of names")
        object.__setattr__(self, "groups", frozenset(self.groups))
        if not all(isinstance(g, str) for g in self.groups):
            raise InvalidArgument("group names must be strings")
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int) or self.timestamp < 0:
            raise InvalidArgument(f"invalid timestamp: {self.timestamp!r}")


@dataclass
class _PrincipalProxy:
    name: str | None = None
    domain: str | None = field(default=None, metadata={"json": "activeDirectoryDomain"})

    @classmethod
    def from_domain(cls, principal: Principal) -> "_PrincipalProxy":
        return cls(principal.name, principal.domain)

    def build(self) -> Principal:
        if self.name is None:
            raise InvalidArgument("principal is missing its name")
        return Principal(self.name, self.domain)


@dataclass
class _PasswordProxy:
    text: str | None = field(default=None, metadata={"json": "password"})

    @classmethod
    def from_domain(cls, password: Password) -> "_PasswordProxy":
        return cls(password.text)

    def build(self) -> Password:
        return Password(self.text)


@dataclass
class _GroupMembershipsProxy:
    groups: list[str] = field(default_factory=list)
    timestamp: int = 0

    @classmethod
    def from_domain(cls, memberships: GroupMemberships) -> "_GroupMembershipsProxy":
        return cls(sorted(memberships.groups), memberships.timestamp)

    def build(self) -> GroupMemberships:
        if self.groups is None:
            raise InvalidArgument("group memberships are missing their groups")
        return GroupMemberships(frozenset(self.groups), self.timestamp)


def register_type_adapters(codec: JsonCodec) -> JsonCodec:
    codec.register_proxy(Principal, _PrincipalProxy)
    codec.register_proxy(Password, _PasswordProxy)
    codec.register_proxy(GroupMemberships, _GroupMembershipsProxy)
    return codec
