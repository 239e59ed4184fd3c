from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from health_log.skill.conversation.manager import ConversationManager
from health_log.skill.core.errors import UnrecognizedIntentError
from health_log.skill.core.models import IntentEvent, SkillResponse


logger = logging.getLogger(__name__)

Handler = Callable[[IntentEvent], SkillResponse]

ADD_USER_INTENT = "AddUserIntent"
SET_WEIGHT_INTENT = "SetWeightIntent"
SET_HEIGHT_INTENT = "SetHeightIntent"
TELL_WEIGHT_INTENT = "TellWeightIntent"
TELL_HEIGHT_INTENT = "TellHeightIntent"
RESET_USERS_INTENT = "ResetUsersIntent"
HELP_INTENT = "AMAZON.HelpIntent"
CANCEL_INTENT = "AMAZON.CancelIntent"
STOP_INTENT = "AMAZON.StopIntent"


@dataclass
class IntentDispatcher:
    """Routes an intent event to the matching ConversationManager handler."""

    manager: ConversationManager

    def handlers(self) -> dict[str, Handler]:
        m = self.manager
        return {
            ADD_USER_INTENT: m.add_user,
            SET_WEIGHT_INTENT: m.set_weight,
            SET_HEIGHT_INTENT: m.set_height,
            TELL_WEIGHT_INTENT: m.tell_weight,
            TELL_HEIGHT_INTENT: m.tell_height,
            RESET_USERS_INTENT: m.reset_users,
            HELP_INTENT: m.help,
            CANCEL_INTENT: m.exit,
            STOP_INTENT: m.exit,
        }

    def dispatch(self, event: IntentEvent) -> SkillResponse:
        if event.is_launch:
            logger.info("onLaunch requestId=%s sessionId=%s", event.request_id, event.session_id)
            return self.manager.launch(event)

        logger.info(
            "onIntent requestId=%s sessionId=%s intent=%s",
            event.request_id,
            event.session_id,
            event.intent_name,
        )
        handler = self.handlers().get(event.intent_name or "")
        if handler is None:
            raise UnrecognizedIntentError(event.intent_name)
        return handler(event)
