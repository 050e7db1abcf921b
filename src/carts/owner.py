"""Cart owner identity: a guest token or a signed-in user's id."""

from dataclasses import dataclass
from enum import Enum

from carts.errors import InvalidOwner


class OwnerKind(Enum):
    GUEST = "guest"
    USER = "user"


@dataclass(frozen=True)
class CartOwner:
    kind: OwnerKind
    ref: str

    def __post_init__(self):
        if not isinstance(self.ref, str) or not self.ref.strip():
            raise InvalidOwner(f"{self.kind.value} identifier must be a non-empty string")
        if self.ref != self.ref.strip():
            raise InvalidOwner(f"{self.kind.value} identifier must not carry surrounding whitespace")

    @classmethod
    def guest(cls, token: str) -> "CartOwner":
        return cls(OwnerKind.GUEST, token)

    @classmethod
    def user(cls, user_id: str) -> "CartOwner":
        return cls(OwnerKind.USER, user_id)

    @classmethod
    def parse(cls, key: str) -> "CartOwner":
        """Rebuild an owner from its storage key (``guest:<token>`` / ``user:<id>``)."""
        kind, sep, ref = (key or "").partition(":")
        if not sep:
            raise InvalidOwner(f"Malformed owner key: {key!r}")
        try:
            return cls(OwnerKind(kind), ref)
        except ValueError:
            raise InvalidOwner(f"Unknown owner kind: {kind!r}") from None

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.ref}"

    @property
    def is_guest(self) -> bool:
        return self.kind is OwnerKind.GUEST

    def __str__(self) -> str:
        return self.key
