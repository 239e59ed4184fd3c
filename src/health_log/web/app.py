import logging

from flask import Flask, jsonify, request

from health_log.chat.handler import handle_skill_request
from health_log.config import Settings, load_settings
from health_log.skill.core.errors import EnvelopeError, StorageError, UnrecognizedIntentError
from health_log.skill.factory import HealthLogSkill, build_skill


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, skill: HealthLogSkill | None = None) -> Flask:
    settings = settings or load_settings()
    # Built once here and shared by every request.
    skill = skill or build_skill(settings)

    app = Flask(__name__)

    @app.get("/health")
    def health():
        return jsonify({"ok": True, "store": skill.store_name})

    # receives a skill request envelope, dispatches it, returns the response envelope
    @app.post("/api/skill")
    def api_skill():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"ok": False, "error": "Request body must be a JSON object."}), 400

        try:
            return jsonify(handle_skill_request(payload, skill))
        except (EnvelopeError, UnrecognizedIntentError) as e:
            logger.warning("rejected skill request: %s", e)
            return jsonify({"ok": False, "error": str(e)}), 400
        except StorageError as e:
            logger.exception("storage failure while handling skill request")
            return jsonify({"ok": False, "error": f"Storage error: {e}"}), 500

    return app


if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)
