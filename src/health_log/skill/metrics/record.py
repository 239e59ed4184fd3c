from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class MetricRecord:
    """Users and their measurements as stored for one identity.

    `users` keeps insertion order; `weights` (pounds) and `heights` (inches)
    are keyed by user name.
    """

    users: list[str] = field(default_factory=list)
    weights: dict[str, int] = field(default_factory=dict)
    heights: dict[str, int] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "MetricRecord":
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "users": list(self.users),
            "weights": dict(self.weights),
            "heights": dict(self.heights),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MetricRecord":
        if not isinstance(data, dict):
            raise ValueError("metric data must be an object")

        users = data.get("users") or []
        weights = data.get("weights") or {}
        heights = data.get("heights") or {}
        if not isinstance(users, list) or not all(isinstance(u, str) for u in users):
            raise ValueError("users must be a list of strings")
        if not isinstance(weights, dict) or not isinstance(heights, dict):
            raise ValueError("weights and heights must be objects")

        return cls(
            users=list(users),
            weights=_int_values(weights, "weights"),
            heights=_int_values(heights, "heights"),
        )


def _int_values(values: dict[Any, Any], label: str) -> dict[str, int]:
    for name, value in values.items():
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"{label} for {name!r} must be an integer, got {value!r}")
    return {str(name): value for name, value in values.items()}
