"""Requested profile mutations.

Every field is three-valued: `UNSET` leaves the stored value alone, `None`
clears an optional value, anything else replaces it. Request serializers
only put keys the client actually sent into `validated_data`, so
`from_data` maps "absent" to `UNSET` and keeps explicit nulls.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class ProfileChanges:
    """Fields every identity kind accepts.

    `email` starts an email-change flow instead of being written directly;
    `phone_verification_token` carries the verified phone to switch to.
    """

    email: Any = UNSET
    phone_verification_token: Any = UNSET
    full_name: Any = UNSET
    photo_url: Any = UNSET
    country_code: Any = UNSET

    @classmethod
    def from_data(cls, data: Mapping):
        names = {f.name for f in fields(cls)}
        unknown = set(data) - names
        if unknown:
            raise TypeError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        return cls(**{name: data[name] for name in names if name in data})

    def provided(self, names) -> dict:
        """Return the given fields that were supplied (including explicit None)."""
        return {name: getattr(self, name) for name in names if getattr(self, name) is not UNSET}

    @property
    def has_phone_token(self) -> bool:
        return self.phone_verification_token not in (UNSET, None, "")
