"""Health Log voice skill backend."""

from health_log.chat.handler import handle_skill_request

__all__ = ["handle_skill_request"]
