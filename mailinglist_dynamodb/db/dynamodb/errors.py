from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class DatabaseError(Exception):
    """Base error for mailing-list database operations.

    Only the record-level conditions callers branch on are modelled here.
    Provider failures (botocore ``ClientError`` / ``BotoCoreError``) are
    raised unmodified.
    """

    message: str
    operation: str | None = None
    table_name: str | None = None
    key: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class NoRecordError(DatabaseError):
    message: str = "Record not found"


@dataclass(slots=True)
class RecordExistsError(DatabaseError):
    message: str = "Record already exists"


@dataclass(slots=True)
class InvalidDSNError(DatabaseError):
    pass


def is_not_exist(err: BaseException | None) -> bool:
    return isinstance(err, NoRecordError)


def is_exists(err: BaseException | None) -> bool:
    return isinstance(err, RecordExistsError)
