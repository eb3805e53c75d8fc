from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr

from ..db.dynamodb.client import dynamodb_resource
from ..db.dynamodb.errors import NoRecordError, RecordExistsError
from ..db.dynamodb.session import Connection, new_connection_with_dsn
from ..db.dynamodb.table import DynamoTable
from ..domain.subscription import Subscription, normalize_address
from ..observability.logging import get_logger
from ..settings import SUBSCRIPTIONS_DEFAULT_TABLENAME
from .base_repository import ListSubscriptionsFunc, SubscriptionsDatabase

log = get_logger(__name__)

HASH_KEY = "address"

CONFIRMED_FILTER = Attr("confirmed").gt(0)
UNCONFIRMED_FILTER = Attr("confirmed").not_exists() | Attr("confirmed").eq(0)


@dataclass
class DynamoDBSubscriptionsDatabaseOptions:
    table_name: str = SUBSCRIPTIONS_DEFAULT_TABLENAME
    billing_mode: str = "PAY_PER_REQUEST"
    create_table: bool = False


def default_subscriptions_database_options() -> DynamoDBSubscriptionsDatabaseOptions:
    return DynamoDBSubscriptionsDatabaseOptions()


def subscription_key(addr: str) -> dict[str, str]:
    return {HASH_KEY: normalize_address(addr)}


def create_subscriptions_table(resource: Any, opts: DynamoDBSubscriptionsDatabaseOptions) -> bool:
    t = DynamoTable(table_name=opts.table_name, resource=resource)
    return t.ensure(hash_key=HASH_KEY, billing_mode=opts.billing_mode)


class DynamoDBSubscriptionsDatabase(SubscriptionsDatabase):
    def __init__(self, *, resource: Any, options: DynamoDBSubscriptionsDatabaseOptions):
        self.options = options
        self._table = DynamoTable(table_name=options.table_name, resource=resource)

    @property
    def table_name(self) -> str:
        return self._table.table_name

    def get_subscription_with_address(self, addr: str) -> Subscription:
        key = subscription_key(addr)
        sub = Subscription.from_item(self._table.get_item(key=key))
        if sub is None:
            raise NoRecordError(operation="GetItem", table_name=self.table_name, key=key)
        return sub

    def add_subscription(self, sub: Subscription) -> None:
        # Check-then-put; two concurrent adds for the same address can both pass the check.
        try:
            existing: Subscription | None = self.get_subscription_with_address(sub.address)
        except NoRecordError:
            existing = None

        if existing is not None:
            raise RecordExistsError(
                message="Subscription already exists",
                operation="AddSubscription",
                table_name=self.table_name,
                key=subscription_key(sub.address),
            )

        self._put(sub)
        log.info("subscription_added", table_name=self.table_name, address=sub.address)

    def update_subscription(self, sub: Subscription) -> None:
        self._put(sub)

    def remove_subscription(self, sub: Subscription) -> None:
        self._table.delete_item(key=subscription_key(sub.address))
        log.info("subscription_removed", table_name=self.table_name, address=sub.address)

    def list_subscriptions(self, callback: ListSubscriptionsFunc) -> None:
        self._scan(callback, filter_expression=None)

    def list_subscriptions_confirmed(self, callback: ListSubscriptionsFunc) -> None:
        self._scan(callback, filter_expression=CONFIRMED_FILTER)

    def list_subscriptions_unconfirmed(self, callback: ListSubscriptionsFunc) -> None:
        self._scan(callback, filter_expression=UNCONFIRMED_FILTER)

    def _put(self, sub: Subscription) -> None:
        self._table.put_item(item=sub.to_item())

    def _scan(self, callback: ListSubscriptionsFunc, *, filter_expression: Any | None) -> None:
        for item in self._table.scan_all(filter_expression=filter_expression):
            sub = Subscription.from_item(item)
            if sub is None:
                raise NoRecordError(
                    message="Scanned item has no address", operation="Scan", table_name=self.table_name
                )
            callback(sub)


def new_subscriptions_database_with_connection(
    conn: Connection, opts: DynamoDBSubscriptionsDatabaseOptions
) -> DynamoDBSubscriptionsDatabase:
    resource = dynamodb_resource(conn)
    if opts.create_table:
        create_subscriptions_table(resource, opts)
    return DynamoDBSubscriptionsDatabase(resource=resource, options=opts)


def new_subscriptions_database_with_session(
    session: boto3.session.Session,
    opts: DynamoDBSubscriptionsDatabaseOptions,
    *,
    endpoint_url: str | None = None,
) -> DynamoDBSubscriptionsDatabase:
    return new_subscriptions_database_with_connection(
        Connection(session=session, endpoint_url=endpoint_url), opts
    )


def new_subscriptions_database_with_dsn(
    dsn: str, opts: DynamoDBSubscriptionsDatabaseOptions
) -> DynamoDBSubscriptionsDatabase:
    return new_subscriptions_database_with_connection(new_connection_with_dsn(dsn), opts)
