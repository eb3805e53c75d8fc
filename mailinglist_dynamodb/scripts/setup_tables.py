#!/usr/bin/env python3
"""
Ensure the mailing-list DynamoDB tables exist.

Creates the subscriptions and confirmations tables if they are missing and
leaves existing tables untouched, so it is safe to run on every deploy.

Usage:
    mailinglist-setup-tables --dsn "region=us-east-1 credentials=env:" \
        [--subscriptions-table NAME] [--confirmations-table NAME] \
        [--billing-mode PAY_PER_REQUEST|PROVISIONED]
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from botocore.exceptions import BotoCoreError, ClientError

from ..db.dynamodb.errors import DatabaseError
from ..db.dynamodb.session import new_connection_with_dsn
from ..observability.context import bind_run_id
from ..observability.logging import configure_logging, get_logger
from ..repositories.confirmations_repo import (
    DynamoDBConfirmationsDatabaseOptions,
    new_confirmations_database_with_connection,
)
from ..repositories.subscriptions_repo import (
    DynamoDBSubscriptionsDatabaseOptions,
    new_subscriptions_database_with_connection,
)
from ..settings import BILLING_MODES, settings

log = get_logger("setup_tables")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mailinglist-setup-tables",
        description="Create the mailing-list DynamoDB tables if they do not exist.",
    )
    parser.add_argument(
        "--subscriptions-table",
        default=settings.subscriptions_table_name,
        help="Name of the subscriptions table (default: %(default)s)",
    )
    parser.add_argument(
        "--confirmations-table",
        default=settings.confirmations_table_name,
        help="Name of the confirmations table (default: %(default)s)",
    )
    parser.add_argument(
        "--billing-mode",
        default=None,
        type=str.upper,
        choices=BILLING_MODES,
        help="Billing mode for newly created tables (default: DDB_BILLING_MODE or PAY_PER_REQUEST)",
    )
    parser.add_argument(
        "--dsn",
        default=settings.default_dsn(),
        help='Connection string, e.g. "region=us-east-1 credentials=env:"',
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.billing_mode is None:
        try:
            args.billing_mode = settings.normalized_billing_mode()
        except ValueError as e:
            parser.error(str(e))
    configure_logging(level=settings.log_level)

    with bind_run_id():
        try:
            conn = new_connection_with_dsn(args.dsn)
        except DatabaseError as e:
            log.error("invalid_dsn", error=str(e))
            return 2

        subscribe_opts = DynamoDBSubscriptionsDatabaseOptions(
            table_name=args.subscriptions_table,
            billing_mode=args.billing_mode,
            create_table=True,
        )
        confirm_opts = DynamoDBConfirmationsDatabaseOptions(
            table_name=args.confirmations_table,
            billing_mode=args.billing_mode,
            create_table=True,
        )

        failed = 0

        try:
            new_subscriptions_database_with_connection(conn, subscribe_opts)
        except (ClientError, BotoCoreError) as e:
            failed += 1
            log.error("table_setup_failed", table_name=subscribe_opts.table_name, error=str(e))

        try:
            new_confirmations_database_with_connection(conn, confirm_opts)
        except (ClientError, BotoCoreError) as e:
            failed += 1
            log.error("table_setup_failed", table_name=confirm_opts.table_name, error=str(e))

        if failed:
            return 1

        log.info(
            "tables_ready",
            subscriptions_table=subscribe_opts.table_name,
            confirmations_table=confirm_opts.table_name,
        )
        return 0


if __name__ == "__main__":
    sys.exit(main())
