"""DynamoDB-backed subscription and confirmation storage for mailing lists."""

from .db.dynamodb.errors import (
    DatabaseError,
    InvalidDSNError,
    NoRecordError,
    RecordExistsError,
    is_exists,
    is_not_exist,
)
from .domain import Confirmation, Subscription, SubscriptionStatus
from .repositories import (
    ConfirmationsDatabase,
    DynamoDBConfirmationsDatabase,
    DynamoDBConfirmationsDatabaseOptions,
    DynamoDBSubscriptionsDatabase,
    DynamoDBSubscriptionsDatabaseOptions,
    SubscriptionsDatabase,
    new_confirmations_database_with_dsn,
    new_confirmations_database_with_session,
    new_subscriptions_database_with_dsn,
    new_subscriptions_database_with_session,
)

__version__ = "0.1.0"

__all__ = [
    "Confirmation",
    "ConfirmationsDatabase",
    "DatabaseError",
    "DynamoDBConfirmationsDatabase",
    "DynamoDBConfirmationsDatabaseOptions",
    "DynamoDBSubscriptionsDatabase",
    "DynamoDBSubscriptionsDatabaseOptions",
    "InvalidDSNError",
    "NoRecordError",
    "RecordExistsError",
    "Subscription",
    "SubscriptionStatus",
    "SubscriptionsDatabase",
    "is_exists",
    "is_not_exist",
    "new_confirmations_database_with_dsn",
    "new_confirmations_database_with_session",
    "new_subscriptions_database_with_dsn",
    "new_subscriptions_database_with_session",
]
