"""Shared DynamoDB utilities.

This package centralizes:
- DSN parsing into boto3 sessions
- boto3 client/resource configuration
- the table wrapper used by the repositories
- the record-level error kinds callers branch on

"""

from __future__ import annotations

from functools import lru_cache

from botocore import UNSIGNED
from botocore.config import Config

from .session import Connection


@lru_cache(maxsize=2)
def botocore_config(*, unsigned: bool = False) -> Config:
    # botocore's standard retry mode is the only retry layer.
    cfg = Config(
        retries={"max_attempts": 5, "mode": "standard"},
        connect_timeout=2,
        read_timeout=10,
    )
    if unsigned:
        cfg = cfg.merge(Config(signature_version=UNSIGNED))
    return cfg


def dynamodb_resource(conn: Connection):
    return conn.session.resource(
        "dynamodb",
        endpoint_url=conn.endpoint_url,
        config=botocore_config(unsigned=conn.unsigned),
    )
