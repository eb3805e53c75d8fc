from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from ...observability.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

_PROVISIONED_THROUGHPUT = {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5}


@dataclass(slots=True)
class Page:
    items: list[dict[str, Any]]
    last_evaluated_key: dict[str, Any] | None


def _err_code(e: ClientError) -> str | None:
    return (e.response or {}).get("Error", {}).get("Code")


def ddb_call(
    operation: str,
    fn: Callable[[], T],
    *,
    table_name: str | None = None,
    key: dict[str, Any] | None = None,
) -> T:
    """Run a single DynamoDB request.

    Failures are logged with the operation context and re-raised unchanged.
    """
    try:
        return fn()
    except ClientError as e:
        log.warning(
            "ddb_call_failed",
            operation=operation,
            table_name=table_name,
            key=key,
            code=_err_code(e),
            aws_request_id=(e.response or {}).get("ResponseMetadata", {}).get("RequestId"),
        )
        raise
    except BotoCoreError as e:
        log.warning(
            "ddb_call_failed",
            operation=operation,
            table_name=table_name,
            key=key,
            error=str(e),
        )
        raise


class DynamoTable:
    def __init__(self, *, table_name: str, resource: Any):
        self.table_name = str(table_name)
        self._table = resource.Table(self.table_name)
        self._client = resource.meta.client

    # --- basic operations ---

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any] | None:
        def _op():
            resp = self._table.get_item(Key=key)
            return resp.get("Item")

        return ddb_call("GetItem", _op, table_name=self.table_name, key=key)

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]:
        def _op():
            return self._table.put_item(Item=item)

        return ddb_call("PutItem", _op, table_name=self.table_name)

    def delete_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        def _op():
            return self._table.delete_item(Key=key)

        return ddb_call("DeleteItem", _op, table_name=self.table_name, key=key)

    # --- scan/pagination ---

    def scan_page(
        self,
        *,
        filter_expression: Any | None = None,
        exclusive_start_key: dict[str, Any] | None = None,
        limit: int | None = None,
    ) -> Page:
        def _op():
            kwargs: dict[str, Any] = {}
            if filter_expression is not None:
                kwargs["FilterExpression"] = filter_expression
            if limit:
                kwargs["Limit"] = int(limit)
            # Important: only pass ExclusiveStartKey when present.
            if isinstance(exclusive_start_key, dict) and exclusive_start_key:
                kwargs["ExclusiveStartKey"] = exclusive_start_key
            return self._table.scan(**kwargs)

        resp = ddb_call("Scan", _op, table_name=self.table_name)
        return Page(items=resp.get("Items") or [], last_evaluated_key=resp.get("LastEvaluatedKey"))

    def scan_all(
        self,
        *,
        filter_expression: Any | None = None,
        page_size: int | None = None,
    ) -> Iterator[dict[str, Any]]:
        """Yield every item in the table, following LastEvaluatedKey until exhausted."""
        lek: dict[str, Any] | None = None
        pages = 0
        while True:
            page = self.scan_page(
                filter_expression=filter_expression,
                exclusive_start_key=lek,
                limit=page_size,
            )
            pages += 1
            yield from page.items
            lek = page.last_evaluated_key
            if not lek:
                break
        log.debug("ddb_scan_complete", table_name=self.table_name, pages=pages)

    # --- table management ---

    def exists(self) -> bool:
        try:
            self._client.describe_table(TableName=self.table_name)
        except ClientError as e:
            if _err_code(e) == "ResourceNotFoundException":
                return False
            raise
        return True

    def ensure(self, *, hash_key: str, billing_mode: str = "PAY_PER_REQUEST") -> bool:
        """Create the table with a single string hash key unless it already exists.

        Returns True if the table was created.
        """
        if self.exists():
            log.info("ddb_table_exists", table_name=self.table_name)
            return False

        kwargs: dict[str, Any] = {
            "TableName": self.table_name,
            "KeySchema": [{"AttributeName": hash_key, "KeyType": "HASH"}],
            "AttributeDefinitions": [{"AttributeName": hash_key, "AttributeType": "S"}],
            "BillingMode": billing_mode,
        }
        if billing_mode == "PROVISIONED":
            kwargs["ProvisionedThroughput"] = dict(_PROVISIONED_THROUGHPUT)

        try:
            ddb_call("CreateTable", lambda: self._client.create_table(**kwargs), table_name=self.table_name)
        except ClientError as e:
            # Another caller created it after our describe.
            if _err_code(e) != "ResourceInUseException":
                raise
            self._client.get_waiter("table_exists").wait(TableName=self.table_name)
            log.info("ddb_table_exists", table_name=self.table_name)
            return False

        self._client.get_waiter("table_exists").wait(TableName=self.table_name)
        log.info("ddb_table_created", table_name=self.table_name, billing_mode=billing_mode)
        return True
