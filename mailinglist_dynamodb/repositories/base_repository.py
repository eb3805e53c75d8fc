"""
Storage-agnostic database interfaces.

Mailing-list code depends on these; the DynamoDB classes implement them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from ..domain.confirmation import Confirmation
from ..domain.subscription import Subscription

ListSubscriptionsFunc = Callable[[Subscription], None]
ListConfirmationsFunc = Callable[[Confirmation], None]


class SubscriptionsDatabase(ABC):
    """Subscriptions keyed by address."""

    @abstractmethod
    def get_subscription_with_address(self, addr: str) -> Subscription:
        """Return the subscription for ``addr`` or raise NoRecordError."""

    @abstractmethod
    def add_subscription(self, sub: Subscription) -> None:
        """Insert ``sub``; raise RecordExistsError if the address is already stored."""

    @abstractmethod
    def update_subscription(self, sub: Subscription) -> None:
        pass

    @abstractmethod
    def remove_subscription(self, sub: Subscription) -> None:
        pass

    @abstractmethod
    def list_subscriptions(self, callback: ListSubscriptionsFunc) -> None:
        """Invoke ``callback`` once per stored subscription."""

    @abstractmethod
    def list_subscriptions_confirmed(self, callback: ListSubscriptionsFunc) -> None:
        pass

    @abstractmethod
    def list_subscriptions_unconfirmed(self, callback: ListSubscriptionsFunc) -> None:
        pass


class ConfirmationsDatabase(ABC):
    """Pending confirmations keyed by code."""

    @abstractmethod
    def get_confirmation_with_code(self, code: str) -> Confirmation:
        pass

    @abstractmethod
    def add_confirmation(self, conf: Confirmation) -> None:
        pass

    @abstractmethod
    def remove_confirmation(self, conf: Confirmation) -> None:
        pass

    @abstractmethod
    def list_confirmations(self, callback: ListConfirmationsFunc) -> None:
        pass
