"""Intent handlers: decide what to say for each request."""

from __future__ import annotations

import re
from dataclasses import dataclass

from health_log.skill.conversation.speech import (
    HEIGHT,
    WEIGHT,
    Measurement,
    ranking_as_card,
    ranking_as_speech,
    users_phrase,
)
from health_log.skill.core import text_util
from health_log.skill.core.models import IntentEvent, SkillResponse
from health_log.skill.metrics.aggregate import MetricsAggregate, RankedEntry
from health_log.skill.storage.gateway import StorageGateway


SLOT_USER_NAME = "UserName"

# Above this many users, setting a measurement only reads back that user's value.
MAX_USERS_FOR_SPEECH = 3

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER_SLOT = re.compile(r"[+-]?\d+", re.ASCII)


def _parse_int(raw: str | None) -> int | None:
    """Parse a spoken number slot: ASCII digits with an optional sign, 32-bit range."""

    if raw is None or not _INTEGER_SLOT.fullmatch(raw):
        return None
    value = int(raw)
    if not INT32_MIN <= value <= INT32_MAX:
        return None
    return value


def _ranking(aggregate: MetricsAggregate, measurement: Measurement) -> list[RankedEntry]:
    if measurement is WEIGHT:
        return aggregate.ranked_weights()
    return aggregate.ranked_heights()


@dataclass
class ConversationManager:
    gateway: StorageGateway
    max_users_for_speech: int = MAX_USERS_FOR_SPEECH

    def launch(self, event: IntentEvent) -> SkillResponse:
        aggregate = self.gateway.load_aggregate(event.identity)

        if aggregate is None or not aggregate.has_users():
            return SkillResponse.ask(
                "HealthLog, Let's start your metrics. Who's your first user?",
                "Please tell me who is your first user?",
            )

        if not aggregate.has_weights():
            speech = (
                f"HealthLog, you have {users_phrase(aggregate.user_count())} in the log."
                " You can give a user metrics, add another user, reset all user data or exit."
                " Which would you like?"
            )
            return SkillResponse.ask(speech, text_util.COMPLETE_HELP)

        return SkillResponse.ask("HealthLog, What can I do for you?", text_util.NEXT_HELP)

    def add_user(self, event: IntentEvent) -> SkillResponse:
        name = text_util.sanitize_user_name(event.slot(SLOT_USER_NAME))
        if name is None:
            speech = "OK. Who do you want to add?"
            return SkillResponse.ask(speech, speech)

        aggregate = self.gateway.load_aggregate(event.identity) or MetricsAggregate(identity=event.identity)
        aggregate.add_user(name)
        self.gateway.save_aggregate(aggregate)

        speech = f"{name} has been added your log. You can now keep track of their health metrics!"
        if not event.needs_more_help:
            return SkillResponse.tell(speech)

        if aggregate.user_count() == 1:
            speech += " You can say, I am done adding users. Now who's your next user?"
        else:
            speech += " Who is your next user?"
        return SkillResponse.ask(speech, text_util.NEXT_HELP)

    def set_weight(self, event: IntentEvent) -> SkillResponse:
        return self._set_measurement(event, WEIGHT)

    def set_height(self, event: IntentEvent) -> SkillResponse:
        return self._set_measurement(event, HEIGHT)

    def _set_measurement(self, event: IntentEvent, measurement: Measurement) -> SkillResponse:
        name = text_util.sanitize_user_name(event.slot(SLOT_USER_NAME))
        if name is None:
            speech = "Sorry, I did not hear the user name. Please say again?"
            return SkillResponse.ask(speech, speech)

        value = _parse_int(event.slot(measurement.slot))
        if value is None:
            speech = f"Sorry, I did not hear the {measurement.name}. Please say again?"
            return SkillResponse.ask(speech, speech)

        aggregate = self.gateway.load_aggregate(event.identity)
        if aggregate is None:
            return SkillResponse.tell("A health log has not been started.")

        if aggregate.user_count() == 0:
            speech = "Sorry, no users are on the health log. Try adding a user?"
            return SkillResponse.ask(speech, speech)

        setter = aggregate.set_weight if measurement is WEIGHT else aggregate.set_height
        if not setter(name, value):
            speech = f"Sorry, {name} is not on this log. What else?"
            return SkillResponse.ask(speech, speech)

        self.gateway.save_aggregate(aggregate)

        speech = f"{value} {measurement.unit_plural} for {name}. "
        if aggregate.user_count() > self.max_users_for_speech:
            stored = aggregate.weight_of(name) if measurement is WEIGHT else aggregate.height_of(name)
            speech += f"{name} is {stored} {measurement.single_user_suffix}"
        else:
            speech += ranking_as_speech(_ranking(aggregate, measurement), measurement)

        return SkillResponse.tell(speech)

    def tell_weight(self, event: IntentEvent) -> SkillResponse:
        return self._tell_measurement(event, WEIGHT)

    def tell_height(self, event: IntentEvent) -> SkillResponse:
        return self._tell_measurement(event, HEIGHT)

    def _tell_measurement(self, event: IntentEvent, measurement: Measurement) -> SkillResponse:
        aggregate = self.gateway.load_aggregate(event.identity)
        if aggregate is None or not aggregate.has_users():
            return SkillResponse.tell("Nobody is on the health log. Try adding a user first.")

        ranking = _ranking(aggregate, measurement)
        return SkillResponse.tell(ranking_as_speech(ranking, measurement), card=ranking_as_card(ranking))

    def reset_users(self, event: IntentEvent) -> SkillResponse:
        # Replaces the whole record, users included.
        self.gateway.save_aggregate(MetricsAggregate(identity=event.identity))

        speech = "New health log started without users. Who do you want to add first?"
        return SkillResponse.ask(speech, speech)

    def help(self, event: IntentEvent) -> SkillResponse:
        if event.needs_more_help:
            return SkillResponse.ask(text_util.COMPLETE_HELP + " So, how can I help?", text_util.NEXT_HELP)
        return SkillResponse.tell(text_util.COMPLETE_HELP)

    def exit(self, event: IntentEvent) -> SkillResponse:
        if event.needs_more_help:
            return SkillResponse.tell(
                "Okay. Whenever you're ready, you can start tracking your weight using health log."
            )
        return SkillResponse.tell("")
