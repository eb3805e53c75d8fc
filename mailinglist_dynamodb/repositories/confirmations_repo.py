from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import boto3

from ..db.dynamodb.client import dynamodb_resource
from ..db.dynamodb.errors import NoRecordError, RecordExistsError
from ..db.dynamodb.session import Connection, new_connection_with_dsn
from ..db.dynamodb.table import DynamoTable
from ..domain.confirmation import Confirmation
from ..observability.logging import get_logger
from ..settings import CONFIRMATIONS_DEFAULT_TABLENAME
from .base_repository import ConfirmationsDatabase, ListConfirmationsFunc

log = get_logger(__name__)

HASH_KEY = "code"


@dataclass
class DynamoDBConfirmationsDatabaseOptions:
    table_name: str = CONFIRMATIONS_DEFAULT_TABLENAME
    billing_mode: str = "PAY_PER_REQUEST"
    create_table: bool = False


def default_confirmations_database_options() -> DynamoDBConfirmationsDatabaseOptions:
    return DynamoDBConfirmationsDatabaseOptions()


def confirmation_key(code: str) -> dict[str, str]:
    c = str(code or "").strip()
    if not c:
        raise ValueError("code is required")
    return {HASH_KEY: c}


def create_confirmations_table(resource: Any, opts: DynamoDBConfirmationsDatabaseOptions) -> bool:
    t = DynamoTable(table_name=opts.table_name, resource=resource)
    return t.ensure(hash_key=HASH_KEY, billing_mode=opts.billing_mode)


class DynamoDBConfirmationsDatabase(ConfirmationsDatabase):
    def __init__(self, *, resource: Any, options: DynamoDBConfirmationsDatabaseOptions):
        self.options = options
        self._table = DynamoTable(table_name=options.table_name, resource=resource)

    @property
    def table_name(self) -> str:
        return self._table.table_name

    def get_confirmation_with_code(self, code: str) -> Confirmation:
        key = confirmation_key(code)
        conf = Confirmation.from_item(self._table.get_item(key=key))
        if conf is None:
            raise NoRecordError(operation="GetItem", table_name=self.table_name, key=key)
        return conf

    def add_confirmation(self, conf: Confirmation) -> None:
        try:
            existing: Confirmation | None = self.get_confirmation_with_code(conf.code)
        except NoRecordError:
            existing = None

        if existing is not None:
            raise RecordExistsError(
                message="Confirmation already exists",
                operation="AddConfirmation",
                table_name=self.table_name,
                key=confirmation_key(conf.code),
            )

        self._table.put_item(item=conf.to_item())
        log.info("confirmation_added", table_name=self.table_name, action=conf.action)

    def remove_confirmation(self, conf: Confirmation) -> None:
        self._table.delete_item(key=confirmation_key(conf.code))

    def list_confirmations(self, callback: ListConfirmationsFunc) -> None:
        for item in self._table.scan_all():
            conf = Confirmation.from_item(item)
            if conf is None:
                raise NoRecordError(
                    message="Scanned item has no code", operation="Scan", table_name=self.table_name
                )
            callback(conf)


def new_confirmations_database_with_connection(
    conn: Connection, opts: DynamoDBConfirmationsDatabaseOptions
) -> DynamoDBConfirmationsDatabase:
    resource = dynamodb_resource(conn)
    if opts.create_table:
        create_confirmations_table(resource, opts)
    return DynamoDBConfirmationsDatabase(resource=resource, options=opts)


def new_confirmations_database_with_session(
    session: boto3.session.Session,
    opts: DynamoDBConfirmationsDatabaseOptions,
    *,
    endpoint_url: str | None = None,
) -> DynamoDBConfirmationsDatabase:
    return new_confirmations_database_with_connection(
        Connection(session=session, endpoint_url=endpoint_url), opts
    )


def new_confirmations_database_with_dsn(
    dsn: str, opts: DynamoDBConfirmationsDatabaseOptions
) -> DynamoDBConfirmationsDatabase:
    return new_confirmations_database_with_connection(new_connection_with_dsn(dsn), opts)
