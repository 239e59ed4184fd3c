"""Key-value stores holding one encoded metric record per identity."""

from __future__ import annotations

import os
import sqlite3
from contextlib import closing
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from health_log.skill.core.errors import StorageError


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class InMemoryMetricStore:
    """Process-local store; contents are lost on restart."""

    name: str = "memory"
    items: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.items.get(key)

    def put(self, key: str, value: str) -> None:
        self.items[key] = value


class SqliteMetricStore:
    name = "sqlite"

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = str(db_path)
        parent = os.path.dirname(self.db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with closing(self._connect()) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS health_log_user_data (
                    customer_id TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    ts_updated TEXT NOT NULL
                );
                """
            )
            conn.commit()

    def _connect(self) -> sqlite3.Connection:
        # One connection per call so the store can be shared across server threads.
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Unable to open {self.db_path}: {e}") from e

    def get(self, key: str) -> str | None:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT data FROM health_log_user_data WHERE customer_id = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Unable to load metric data: {e}") from e
        if not row:
            return None
        return row[0]

    def put(self, key: str, value: str) -> None:
        try:
            with closing(self._connect()) as conn:
                conn.execute(
                    """
                    INSERT INTO health_log_user_data (customer_id, data, ts_updated)
                    VALUES (?, ?, ?)
                    ON CONFLICT(customer_id) DO UPDATE SET data = excluded.data, ts_updated = excluded.ts_updated
                    """,
                    (key, value, utc_now_iso()),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Unable to save metric data: {e}") from e


class DynamoDbMetricStore:
    """Items keyed by `CustomerId` with the encoded record in the `Data` attribute."""

    name = "dynamodb"

    KEY_ATTRIBUTE = "CustomerId"
    DATA_ATTRIBUTE = "Data"

    def __init__(self, table: Any) -> None:
        self.table = table

    @classmethod
    def from_table_name(cls, table_name: str, region_name: str | None = None) -> "DynamoDbMetricStore":
        resource = boto3.resource("dynamodb", region_name=region_name)
        return cls(resource.Table(table_name))

    def get(self, key: str) -> str | None:
        try:
            response = self.table.get_item(Key={self.KEY_ATTRIBUTE: key})
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Unable to load metric data: {e}") from e
        item = response.get("Item")
        if not item:
            return None
        return item.get(self.DATA_ATTRIBUTE)

    def put(self, key: str, value: str) -> None:
        try:
            self.table.put_item(Item={self.KEY_ATTRIBUTE: key, self.DATA_ATTRIBUTE: value})
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Unable to save metric data: {e}") from e
