"""Request envelope handling: turn a platform request into an IntentEvent and back."""

from __future__ import annotations

import logging
from typing import Any

from health_log.skill.core.errors import EnvelopeError
from health_log.skill.core.models import IntentEvent, SkillResponse
from health_log.skill.factory import HealthLogSkill


logger = logging.getLogger(__name__)

LAUNCH_REQUEST = "LaunchRequest"
INTENT_REQUEST = "IntentRequest"
SESSION_ENDED_REQUEST = "SessionEndedRequest"

NEEDS_MORE_HELP_ATTRIBUTE = "needsMoreHelp"
RESPONSE_VERSION = "1.0"


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _parse_slots(intent: dict[str, Any]) -> dict[str, str | None]:
    slots: dict[str, str | None] = {}
    for name, slot in _as_dict(intent.get("slots")).items():
        value = _as_dict(slot).get("value")
        slots[str(name)] = None if value is None else str(value)
    return slots


def parse_envelope(payload: dict[str, Any]) -> IntentEvent | None:
    """Build the IntentEvent for a request envelope.

    Returns None for a session-ended notification, which needs no answer.

    The onboarding-help flag starts off for a new session, is switched on by a
    launch, and is otherwise read back from the session attributes.
    """

    session = _as_dict(payload.get("session"))
    request = _as_dict(payload.get("request"))
    request_type = request.get("type")
    request_id = request.get("requestId")
    session_id = session.get("sessionId")

    if not request_type:
        raise EnvelopeError("request.type is missing")

    if session.get("new"):
        logger.info("onSessionStarted requestId=%s sessionId=%s", request_id, session_id)

    if request_type == SESSION_ENDED_REQUEST:
        logger.info("onSessionEnded requestId=%s sessionId=%s", request_id, session_id)
        return None

    identity = _as_dict(session.get("user")).get("userId")
    if not identity:
        raise EnvelopeError("session.user.userId is missing")

    if request_type == LAUNCH_REQUEST:
        return IntentEvent(
            identity=str(identity),
            intent_name=None,
            needs_more_help=True,
            request_id=request_id,
            session_id=session_id,
        )

    if request_type != INTENT_REQUEST:
        raise EnvelopeError(f"unsupported request type: {request_type}")

    intent = _as_dict(request.get("intent"))
    if not intent.get("name"):
        raise EnvelopeError("request.intent.name is missing")

    attributes = _as_dict(session.get("attributes"))
    needs_more_help = False if session.get("new") else bool(attributes.get(NEEDS_MORE_HELP_ATTRIBUTE, False))

    return IntentEvent(
        identity=str(identity),
        intent_name=str(intent["name"]),
        slots=_parse_slots(intent),
        needs_more_help=needs_more_help,
        request_id=request_id,
        session_id=session_id,
    )


def _plain_text(text: str) -> dict[str, str]:
    return {"type": "PlainText", "text": text}


def render_response(response: SkillResponse, event: IntentEvent) -> dict[str, Any]:
    body: dict[str, Any] = {
        "outputSpeech": _plain_text(response.speech),
        "shouldEndSession": response.should_end_session,
    }
    if response.card is not None:
        body["card"] = {"type": "Simple", "title": response.card.title, "content": response.card.content}
    if response.reprompt is not None:
        body["reprompt"] = {"outputSpeech": _plain_text(response.reprompt)}

    return {
        "version": RESPONSE_VERSION,
        "sessionAttributes": {NEEDS_MORE_HELP_ATTRIBUTE: event.needs_more_help},
        "response": body,
    }


def handle_skill_request(payload: dict[str, Any], skill: HealthLogSkill) -> dict[str, Any]:
    """Handle one request envelope and return the response envelope.

    Raises EnvelopeError for malformed input, UnrecognizedIntentError for an
    intent the skill does not know and StorageError when the store fails.
    """

    event = parse_envelope(payload)
    if event is None:
        return {"version": RESPONSE_VERSION, "response": {}}

    response = skill.dispatcher.dispatch(event)
    return render_response(response, event)
