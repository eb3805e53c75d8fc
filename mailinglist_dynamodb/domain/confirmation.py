from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any, Literal

from ..settings import settings
from .subscription import _int_attr, normalize_address, now_ts

ConfirmationAction = Literal["subscribe", "unsubscribe"]

ACTIONS: tuple[str, ...] = ("subscribe", "unsubscribe")


def new_code() -> str:
    return secrets.token_urlsafe(24)


@dataclass(frozen=True)
class Confirmation:
    """A pending subscribe/unsubscribe request, keyed by its one-time code."""

    code: str
    address: str
    action: ConfirmationAction
    created: int = 0

    @classmethod
    def new(cls, address: str, action: str, *, now: int | None = None) -> Confirmation:
        act = str(action or "").strip().lower()
        if act not in ACTIONS:
            raise ValueError(f"Invalid confirmation action: {action!r}")
        ts = now_ts() if now is None else int(now)
        return cls(code=new_code(), address=normalize_address(address), action=act, created=ts)  # type: ignore[arg-type]

    def is_expired(self, ttl_seconds: int | None = None, *, now: int | None = None) -> bool:
        """Defaults to CONFIRMATION_TTL_SECONDS when no TTL is given."""
        ttl = settings.confirmation_ttl_seconds if ttl_seconds is None else int(ttl_seconds)
        ts = now_ts() if now is None else int(now)
        return ts - int(self.created) > ttl

    def to_item(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "address": self.address,
            "action": self.action,
            "created": int(self.created),
        }

    @classmethod
    def from_item(cls, item: dict[str, Any] | None) -> Confirmation | None:
        if not item:
            return None
        code = str(item.get("code") or "").strip()
        if not code:
            return None
        return cls(
            code=code,
            address=str(item.get("address") or "").strip(),
            action=str(item.get("action") or "subscribe"),  # type: ignore[arg-type]
            created=_int_attr(item.get("created")),
        )
