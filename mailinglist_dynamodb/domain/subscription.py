"""
Subscription - a single mailing-list address and its confirmation state.

Timestamps are unix seconds. ``confirmed == 0`` means the address has not
confirmed yet.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any


class SubscriptionStatus(IntEnum):
    ENABLED = 0
    DISABLED = 1
    BLOCKED = 2


def now_ts() -> int:
    return int(time.time())


def normalize_address(addr: str) -> str:
    a = str(addr or "").strip().lower()
    if not a or "@" not in a:
        raise ValueError("address is required")
    return a


def _int_attr(v: Any) -> int:
    # Resource items come back as Decimal.
    if v is None or v == "":
        return 0
    return int(v)


@dataclass(frozen=True)
class Subscription:
    address: str
    created: int = 0
    confirmed: int = 0
    lastmodified: int = 0
    status: SubscriptionStatus = SubscriptionStatus.ENABLED

    def __post_init__(self) -> None:
        # The address is the table key; every instance carries its normalized form.
        object.__setattr__(self, "address", normalize_address(self.address))

    @classmethod
    def new(cls, address: str, *, now: int | None = None) -> Subscription:
        ts = now_ts() if now is None else int(now)
        return cls(address=address, created=ts, lastmodified=ts)

    def is_confirmed(self) -> bool:
        return self.confirmed > 0

    def is_enabled(self) -> bool:
        return self.status == SubscriptionStatus.ENABLED

    def confirm(self, *, now: int | None = None) -> Subscription:
        ts = now_ts() if now is None else int(now)
        return replace(self, confirmed=ts, lastmodified=ts)

    def unconfirm(self, *, now: int | None = None) -> Subscription:
        ts = now_ts() if now is None else int(now)
        return replace(self, confirmed=0, lastmodified=ts)

    def touch(self, *, now: int | None = None) -> Subscription:
        ts = now_ts() if now is None else int(now)
        return replace(self, lastmodified=ts)

    def to_item(self) -> dict[str, Any]:
        """Attribute map for the boto3 table resource."""
        return {
            "address": self.address,
            "created": int(self.created),
            "confirmed": int(self.confirmed),
            "lastmodified": int(self.lastmodified),
            "status": int(self.status),
        }

    @classmethod
    def from_item(cls, item: dict[str, Any] | None) -> Subscription | None:
        if not item:
            return None
        addr = str(item.get("address") or "").strip()
        if not addr:
            return None
        return cls(
            address=addr,
            created=_int_attr(item.get("created")),
            confirmed=_int_attr(item.get("confirmed")),
            lastmodified=_int_attr(item.get("lastmodified")),
            status=SubscriptionStatus(_int_attr(item.get("status"))),
        )
