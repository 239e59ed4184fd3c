"""Load and save metric records through a key-value store."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from health_log.skill.core.errors import StorageError
from health_log.skill.metrics.aggregate import MetricsAggregate
from health_log.skill.metrics.record import MetricRecord


logger = logging.getLogger(__name__)


class MetricStore(Protocol):
    """A string blob per identity. Returns None from `get` when nothing is stored."""

    name: str

    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...


def encode_record(record: MetricRecord) -> str:
    return json.dumps(record.to_dict(), ensure_ascii=True)


def decode_record(blob: str) -> MetricRecord:
    try:
        return MetricRecord.from_dict(json.loads(blob))
    except (TypeError, ValueError) as e:
        raise StorageError(f"Unable to decode metric data: {e}") from e


@dataclass
class StorageGateway:
    store: MetricStore

    def load(self, identity: str) -> MetricRecord | None:
        blob = self.store.get(identity)
        if blob is None:
            return None
        return decode_record(blob)

    def save(self, identity: str, record: MetricRecord) -> None:
        self.store.put(identity, encode_record(record))
        logger.debug("saved metric record users=%d store=%s", len(record.users), self.store.name)

    def load_aggregate(self, identity: str) -> MetricsAggregate | None:
        record = self.load(identity)
        if record is None:
            return None
        return MetricsAggregate(identity=identity, record=record)

    def save_aggregate(self, aggregate: MetricsAggregate) -> None:
        self.save(aggregate.identity, aggregate.record)
