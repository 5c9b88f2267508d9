"""Credential store - answers "do these credentials belong to a user?"."""

import hmac
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CredentialRecord:
    """A user record. Passwords are compared as-is; nothing is hashed."""

    id: int
    username: str
    password: str


# Demo accounts
DEFAULT_USERS: tuple[CredentialRecord, ...] = (
    CredentialRecord(id=1, username="Max", password="777"),
    CredentialRecord(id=2, username="Hello", password="123"),
    CredentialRecord(id=3, username="World", password="456"),
    CredentialRecord(id=4, username="Gray", password="890"),
)


class CredentialStore(Protocol):
    """Anything that can check a username/password pair."""

    def verify(self, username: str, password: str) -> int | None:
        """Return the user id for matching credentials, else None."""
        ...


class InMemoryCredentialStore:
    """Read-only credential store backed by a list of records."""

    def __init__(self, records: Iterable[CredentialRecord] = DEFAULT_USERS):
        self._records = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def verify(self, username: str, password: str) -> int | None:
        # Walk every record so lookup time does not depend on where the match is
        matched: int | None = None
        for record in self._records:
            user_ok = hmac.compare_digest(record.username.encode(), username.encode())
            password_ok = hmac.compare_digest(record.password.encode(), password.encode())
            if user_ok and password_ok and matched is None:
                matched = record.id
        return matched
