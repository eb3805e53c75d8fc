"""In-memory stand-ins for the boto3 DynamoDB resource used by the repositories."""

from __future__ import annotations

import copy
from decimal import Decimal
from typing import Any

from botocore.exceptions import ClientError


def client_error(code: str, operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": code, "Message": code}, "ResponseMetadata": {"RequestId": "req-1"}},
        operation,
    )


def _to_ddb(v: Any) -> Any:
    # The resource layer hands numbers back as Decimal.
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return Decimal(str(v))
    return v


def _matches(cond: Any, item: dict[str, Any]) -> bool:
    expr = cond.get_expression()
    op = expr["operator"]
    vals = expr["values"]
    if op == "AND":
        return _matches(vals[0], item) and _matches(vals[1], item)
    if op == "OR":
        return _matches(vals[0], item) or _matches(vals[1], item)
    if op == "NOT":
        return not _matches(vals[0], item)
    if op == "attribute_exists":
        return vals[0].name in item
    if op == "attribute_not_exists":
        return vals[0].name not in item

    left = item.get(vals[0].name)
    right = vals[1]
    if left is None:
        return False
    if op == "=":
        return left == right
    if op == "<>":
        return left != right
    if op == ">":
        return left > right
    if op == ">=":
        return left >= right
    if op == "<":
        return left < right
    if op == "<=":
        return left <= right
    raise AssertionError(f"unsupported operator in fake: {op}")


class FakeTable:
    def __init__(self, resource: FakeDynamoResource, name: str):
        self._resource = resource
        self.name = name

    def _state(self) -> dict[str, Any]:
        st = self._resource.tables.get(self.name)
        if st is None:
            raise client_error("ResourceNotFoundException", "GetItem")
        return st

    def get_item(self, *, Key: dict[str, Any]) -> dict[str, Any]:
        st = self._state()
        it = st["items"].get(Key[st["hash_key"]])
        return {"Item": copy.deepcopy(it)} if it is not None else {}

    def put_item(self, *, Item: dict[str, Any]) -> dict[str, Any]:
        st = self._state()
        if self._resource.fail_puts:
            raise self._resource.fail_puts
        st["items"][Item[st["hash_key"]]] = {k: _to_ddb(v) for k, v in Item.items()}
        return {}

    def delete_item(self, *, Key: dict[str, Any]) -> dict[str, Any]:
        st = self._state()
        st["items"].pop(Key[st["hash_key"]], None)
        return {}

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        st = self._state()
        self._resource.scan_calls.append(dict(kwargs))
        hk = st["hash_key"]
        keys = list(st["items"].keys())

        start = 0
        esk = kwargs.get("ExclusiveStartKey")
        if esk:
            start = keys.index(esk[hk]) + 1

        size = kwargs.get("Limit") or self._resource.page_size
        window = keys[start : start + size]
        flt = kwargs.get("FilterExpression")
        items = [
            copy.deepcopy(st["items"][k])
            for k in window
            if flt is None or _matches(flt, st["items"][k])
        ]

        resp: dict[str, Any] = {"Items": items, "Count": len(items), "ScannedCount": len(window)}
        if start + size < len(keys):
            resp["LastEvaluatedKey"] = {hk: window[-1]}
        return resp


class FakeWaiter:
    def __init__(self, client: FakeClient):
        self._client = client

    def wait(self, *, TableName: str) -> None:
        self._client.waited.append(TableName)


class FakeClient:
    def __init__(self, resource: FakeDynamoResource):
        self._resource = resource
        self.created: list[dict[str, Any]] = []
        self.waited: list[str] = []
        self.fail_create: dict[str, ClientError] = {}

    def describe_table(self, *, TableName: str) -> dict[str, Any]:
        if TableName not in self._resource.tables:
            raise client_error("ResourceNotFoundException", "DescribeTable")
        return {"Table": {"TableName": TableName, "TableStatus": "ACTIVE"}}

    def create_table(self, **kwargs: Any) -> dict[str, Any]:
        name = kwargs["TableName"]
        if name in self.fail_create:
            raise self.fail_create[name]
        self.created.append(kwargs)
        hk = kwargs["KeySchema"][0]["AttributeName"]
        self._resource.tables[name] = {"hash_key": hk, "items": {}}
        return {"TableDescription": {"TableName": name, "TableStatus": "CREATING"}}

    def get_waiter(self, name: str) -> FakeWaiter:
        assert name == "table_exists"
        return FakeWaiter(self)


class _Meta:
    def __init__(self, client: FakeClient):
        self.client = client


class FakeDynamoResource:
    """Mimics ``boto3.resource("dynamodb")``: ``.Table(name)`` and ``.meta.client``."""

    def __init__(self, *, tables: dict[str, str] | None = None, page_size: int = 100):
        self.tables: dict[str, dict[str, Any]] = {
            name: {"hash_key": hk, "items": {}} for name, hk in (tables or {}).items()
        }
        self.page_size = page_size
        self.scan_calls: list[dict[str, Any]] = []
        self.fail_puts: ClientError | None = None
        self.meta = _Meta(FakeClient(self))

    def Table(self, name: str) -> FakeTable:  # noqa: N802
        return FakeTable(self, name)
