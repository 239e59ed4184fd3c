from __future__ import annotations

from dataclasses import dataclass, field


SESSION_CARD_TITLE = "Session"


@dataclass(frozen=True)
class IntentEvent:
    identity: str
    intent_name: str | None = None
    slots: dict[str, str | None] = field(default_factory=dict)
    needs_more_help: bool = False
    request_id: str | None = None
    session_id: str | None = None

    @property
    def is_launch(self) -> bool:
        return self.intent_name is None

    def slot(self, name: str) -> str | None:
        return self.slots.get(name)


@dataclass(frozen=True)
class Card:
    title: str
    content: str


@dataclass(frozen=True)
class SkillResponse:
    speech: str
    reprompt: str | None = None
    card: Card | None = None

    @property
    def should_end_session(self) -> bool:
        return self.reprompt is None

    @classmethod
    def ask(cls, speech: str, reprompt: str) -> "SkillResponse":
        """Keep the session open, mirroring the speech on a simple card."""

        return cls(speech=speech, reprompt=reprompt, card=Card(SESSION_CARD_TITLE, speech))

    @classmethod
    def tell(cls, speech: str, card: Card | None = None) -> "SkillResponse":
        """End the session. Without an explicit card the speech is mirrored."""

        return cls(speech=speech, reprompt=None, card=card or Card(SESSION_CARD_TITLE, speech))
