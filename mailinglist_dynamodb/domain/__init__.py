from .confirmation import Confirmation
from .subscription import Subscription, SubscriptionStatus

__all__ = ["Confirmation", "Subscription", "SubscriptionStatus"]
