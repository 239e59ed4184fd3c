from __future__ import annotations

from dataclasses import dataclass

from health_log.skill.core.models import Card
from health_log.skill.metrics.aggregate import RankedEntry


METRICS_CARD_TITLE = "Health Metrics"


@dataclass(frozen=True)
class Measurement:
    """Wording for one kind of measurement."""

    name: str
    slot: str
    unit_singular: str
    unit_plural: str
    verb: str
    single_user_suffix: str

    def unit(self, value: int) -> str:
        return self.unit_singular if value == 1 else self.unit_plural


WEIGHT = Measurement(
    name="weight",
    slot="WeightNumber",
    unit_singular="pound",
    unit_plural="pounds",
    verb="weighs",
    single_user_suffix="pounds in weight.",
)

HEIGHT = Measurement(
    name="height",
    slot="HeightNumber",
    unit_singular="inch",
    unit_plural="inches",
    verb="is",
    single_user_suffix="inches tall.",
)


def ranking_as_speech(ranking: list[RankedEntry], measurement: Measurement) -> str:
    # e.g. "Alex weighs 150 pounds, Sam weighs 120 pounds,  and Kim weighs 1 pound, "
    parts: list[str] = []
    last = len(ranking) - 1
    for index, entry in enumerate(ranking):
        if len(ranking) > 1 and index == last:
            parts.append(" and ")
        parts.append(f"{entry.name} {measurement.verb} {entry.value} {measurement.unit(entry.value)}, ")
    return "".join(parts)


def ranking_as_card(ranking: list[RankedEntry]) -> Card:
    lines = [f"No. {index} - {entry.name} : {entry.value}\n" for index, entry in enumerate(ranking, start=1)]
    return Card(title=METRICS_CARD_TITLE, content="".join(lines))


def users_phrase(count: int) -> str:
    return f"{count} user" if count == 1 else f"{count} users"
