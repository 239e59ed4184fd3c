from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from health_log.skill.metrics.record import MetricRecord


class RankedEntry(NamedTuple):
    name: str
    value: int


def rank(values: dict[str, int], users: list[str]) -> list[RankedEntry]:
    """Order users by value, highest first, ties broken by name.

    Users without a value count as 0. Works on a copy; `values` is not touched.
    """

    view = dict.fromkeys(users, 0)
    view.update(values)
    ordered = sorted(view.items(), key=lambda item: (-item[1], item[0]))
    return [RankedEntry(name, value) for name, value in ordered]


@dataclass
class MetricsAggregate:
    """A MetricRecord bound to the identity that owns it for one request."""

    identity: str
    record: MetricRecord = field(default_factory=MetricRecord.empty)

    def has_users(self) -> bool:
        return bool(self.record.users)

    def user_count(self) -> int:
        return len(self.record.users)

    def add_user(self, name: str) -> bool:
        """Append a user. A name already on the log is not added twice."""

        if self.has_user(name):
            return False
        self.record.users.append(name)
        return True

    def has_user(self, name: str) -> bool:
        return name in self.record.users

    def has_weights(self) -> bool:
        return bool(self.record.weights)

    def has_heights(self) -> bool:
        return bool(self.record.heights)

    def set_weight(self, name: str, weight: int) -> bool:
        if not self.has_user(name):
            return False
        self.record.weights[name] = int(weight)
        return True

    def set_height(self, name: str, height: int) -> bool:
        if not self.has_user(name):
            return False
        self.record.heights[name] = int(height)
        return True

    def weight_of(self, name: str) -> int:
        return self.record.weights[name]

    def height_of(self, name: str) -> int:
        return self.record.heights[name]

    def ranked_weights(self) -> list[RankedEntry]:
        return rank(self.record.weights, self.record.users)

    def ranked_heights(self) -> list[RankedEntry]:
        return rank(self.record.heights, self.record.users)

    def reset_weights(self) -> None:
        for name in self.record.users:
            self.record.weights[name] = 0

    def reset_heights(self) -> None:
        for name in self.record.users:
            self.record.heights[name] = 0
