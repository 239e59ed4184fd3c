from __future__ import annotations

import json

import pytest
from botocore.exceptions import ClientError

from health_log.skill.core.errors import StorageError
from health_log.skill.metrics.record import MetricRecord
from health_log.skill.storage.backends import DynamoDbMetricStore, InMemoryMetricStore, SqliteMetricStore
from health_log.skill.storage.gateway import StorageGateway, decode_record, encode_record


class FakeTable:
    """Stands in for a boto3 DynamoDB Table resource."""

    def __init__(self, fail: bool = False) -> None:
        self.items: dict[str, dict] = {}
        self.fail = fail

    def _maybe_fail(self, operation: str) -> None:
        if self.fail:
            raise ClientError({"Error": {"Code": "ResourceNotFoundException", "Message": "no table"}}, operation)

    def get_item(self, Key):
        self._maybe_fail("GetItem")
        item = self.items.get(Key["CustomerId"])
        return {"Item": item} if item else {}

    def put_item(self, Item):
        self._maybe_fail("PutItem")
        self.items[Item["CustomerId"]] = dict(Item)


def _record() -> MetricRecord:
    return MetricRecord(users=["Sam", "Alex"], weights={"Alex": 150, "Sam": 120}, heights={"Sam": 64})


@pytest.fixture(params=["memory", "sqlite", "dynamodb"])
def gateway(request, tmp_path) -> StorageGateway:
    if request.param == "sqlite":
        return StorageGateway(SqliteMetricStore(tmp_path / "nested" / "health_log.db"))
    if request.param == "dynamodb":
        return StorageGateway(DynamoDbMetricStore(FakeTable()))
    return StorageGateway(InMemoryMetricStore())


def test_load_returns_none_when_nothing_stored(gateway):
    assert gateway.load("nobody") is None
    assert gateway.load_aggregate("nobody") is None


def test_save_then_load_keeps_order_and_values(gateway):
    gateway.save("user-1", _record())

    loaded = gateway.load("user-1")

    assert loaded == _record()
    assert loaded.users == ["Sam", "Alex"]


def test_save_overwrites_previous_record(gateway):
    gateway.save("user-1", _record())
    gateway.save("user-1", MetricRecord.empty())

    assert gateway.load("user-1") == MetricRecord.empty()


def test_records_are_kept_per_identity(gateway):
    gateway.save("user-1", _record())
    gateway.save("user-2", MetricRecord(users=["Kim"]))

    assert gateway.load("user-1").users == ["Sam", "Alex"]
    assert gateway.load_aggregate("user-2").record.users == ["Kim"]


def test_encoding_is_a_json_object():
    data = json.loads(encode_record(_record()))
    assert data == {"users": ["Sam", "Alex"], "weights": {"Alex": 150, "Sam": 120}, "heights": {"Sam": 64}}


@pytest.mark.parametrize(
    "blob",
    [
        "not json",
        "[]",
        '{"users": "Alex"}',
        '{"weights": {"Alex": "heavy"}}',
        '{"weights": {"Alex": "150"}}',
        '{"weights": {"Alex": 150.7}}',
        '{"heights": {"Alex": true}}',
        '{"heights": {"Alex": null}}',
    ],
)
def test_undecodable_blob_raises_storage_error(blob):
    with pytest.raises(StorageError):
        decode_record(blob)


def test_dynamodb_failures_surface_as_storage_error():
    gateway = StorageGateway(DynamoDbMetricStore(FakeTable(fail=True)))

    with pytest.raises(StorageError):
        gateway.load("user-1")
    with pytest.raises(StorageError):
        gateway.save("user-1", _record())


def test_dynamodb_item_layout():
    table = FakeTable()
    StorageGateway(DynamoDbMetricStore(table)).save("user-1", _record())

    item = table.items["user-1"]
    assert item["CustomerId"] == "user-1"
    assert json.loads(item["Data"])["users"] == ["Sam", "Alex"]
