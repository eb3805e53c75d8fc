"""DSN-driven boto3 sessions.

A DSN is a space-separated list of ``key=value`` pairs::

    region=us-east-1 credentials=env:
    region=us-west-2 credentials=my-profile
    region=us-west-2 credentials=/path/to/credentials:my-profile
    region=us-east-1 credentials=anon: endpoint=http://localhost:8000

Credential specs:

- ``env:``  read ``AWS_ACCESS_KEY_ID`` / ``AWS_SECRET_ACCESS_KEY`` (and
  optionally ``AWS_SESSION_TOKEN``) from the environment
- ``iam:``  botocore's default chain (instance / task role, SSO, ...)
- ``anon:`` unsigned requests, for local DynamoDB
- ``<profile>`` a named profile from the shared credentials file
- ``<path>:<profile>`` a named profile from a specific credentials file
"""

from __future__ import annotations

from dataclasses import dataclass

import boto3
import botocore.session
from botocore.credentials import EnvProvider

from .errors import InvalidDSNError


_REQUIRED_KEYS = ("region", "credentials")
_OPTIONAL_KEYS = ("endpoint",)


@dataclass(frozen=True, slots=True)
class Connection:
    session: boto3.session.Session
    endpoint_url: str | None = None
    unsigned: bool = False

    @property
    def region(self) -> str | None:
        return self.session.region_name


def parse_dsn(dsn: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for part in str(dsn or "").split():
        k, sep, v = part.partition("=")
        k = k.strip().lower()
        v = v.strip()
        if not sep or not k:
            raise InvalidDSNError(message=f"Invalid DSN component {part!r}", operation="ParseDSN")
        if k not in _REQUIRED_KEYS and k not in _OPTIONAL_KEYS:
            raise InvalidDSNError(message=f"Unsupported DSN key {k!r}", operation="ParseDSN")
        out[k] = v

    for k in _REQUIRED_KEYS:
        if not out.get(k):
            raise InvalidDSNError(message=f"DSN is missing {k!r}", operation="ParseDSN")
    return out


def _session_for_credentials(*, region: str, credentials: str) -> tuple[boto3.session.Session, bool]:
    if credentials == "env:":
        creds = EnvProvider().load()
        if creds is None:
            raise InvalidDSNError(
                message="credentials=env: but AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY are not set",
                operation="NewSession",
            )
        frozen = creds.get_frozen_credentials()
        sess = boto3.session.Session(
            aws_access_key_id=frozen.access_key,
            aws_secret_access_key=frozen.secret_key,
            aws_session_token=frozen.token,
            region_name=region,
        )
        return sess, False

    if credentials == "iam:":
        return boto3.session.Session(region_name=region), False

    if credentials == "anon:":
        return boto3.session.Session(region_name=region), True

    path, sep, profile = credentials.rpartition(":")
    if sep and path:
        if not profile:
            raise InvalidDSNError(
                message=f"Invalid credentials spec {credentials!r}", operation="NewSession"
            )
        core = botocore.session.Session()
        core.set_config_variable("credentials_file", path)
        return boto3.session.Session(botocore_session=core, profile_name=profile, region_name=region), False

    return boto3.session.Session(profile_name=credentials, region_name=region), False


def new_connection_with_dsn(dsn: str) -> Connection:
    cfg = parse_dsn(dsn)
    sess, unsigned = _session_for_credentials(region=cfg["region"], credentials=cfg["credentials"])
    endpoint = cfg.get("endpoint") or None
    return Connection(session=sess, endpoint_url=endpoint, unsigned=unsigned)
