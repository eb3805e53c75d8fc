from .base_repository import ConfirmationsDatabase, SubscriptionsDatabase
from .confirmations_repo import (
    DynamoDBConfirmationsDatabase,
    DynamoDBConfirmationsDatabaseOptions,
    new_confirmations_database_with_dsn,
    new_confirmations_database_with_session,
)
from .subscriptions_repo import (
    DynamoDBSubscriptionsDatabase,
    DynamoDBSubscriptionsDatabaseOptions,
    new_subscriptions_database_with_dsn,
    new_subscriptions_database_with_session,
)

__all__ = [
    "ConfirmationsDatabase",
    "DynamoDBConfirmationsDatabase",
    "DynamoDBConfirmationsDatabaseOptions",
    "DynamoDBSubscriptionsDatabase",
    "DynamoDBSubscriptionsDatabaseOptions",
    "SubscriptionsDatabase",
    "new_confirmations_database_with_dsn",
    "new_confirmations_database_with_session",
    "new_subscriptions_database_with_dsn",
    "new_subscriptions_database_with_session",
]
