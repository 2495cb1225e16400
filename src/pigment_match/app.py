from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from .colorspace import hex_to_rgb
from .config import GameConfig
from .errors import InvalidInputError, SessionStateError, UnknownPigmentError
from .pigments import get_catalog
from .scoring import calculate_color_score, score_category
from .session import GameSession
from .stats import best_match
from .storage import JsonFileStore, MemoryStore
from .strokes import StrokePoint, stroke_volume

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "CATALOG": "default",
    "RESET_ON_NEW_TARGET": True,
    "LOCK_AFTER_MIX": False,
    "HISTORY_LIMIT": 10,
    "SEED": None,
    "STATS_PATH": None,
    "LOG_LEVEL": "INFO",
}


def build_session(config: GameConfig) -> GameSession:
    if config.stats_path:
        store = JsonFileStore(config.stats_path, history_limit=config.history_limit)
    else:
        store = MemoryStore(config.history_limit)
    return GameSession(config, catalog=get_catalog(config.catalog), store=store)


def _session() -> GameSession:
    return current_app.extensions["pigment_match"]


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise InvalidInputError("request body must be a JSON object")
    return body


def _parse_stroke(body: Mapping[str, Any]) -> tuple[str, float]:
    pigment_id = body.get("pigment_id")
    if not isinstance(pigment_id, str) or not pigment_id:
        raise InvalidInputError("pigment_id is required")
    if pigment_id not in _session().catalog:
        # reject at the boundary; the session treats this as a bug
        raise InvalidInputError(f"unknown pigment {pigment_id!r}")

    if "volume" in body:
        if isinstance(body["volume"], bool):
            raise InvalidInputError("volume must be a number")
        try:
            return pigment_id, float(body["volume"])
        except (TypeError, ValueError):
            raise InvalidInputError("volume must be a number") from None

    try:
        points = [
            StrokePoint(
                float(p["x"]),
                float(p["y"]),
                None if p.get("pressure") is None else float(p["pressure"]),
            )
            for p in body.get("points") or []
        ]
        radius = float(body.get("brush_radius", 16))
    except (TypeError, ValueError, KeyError, AttributeError):
        raise InvalidInputError("points must be objects with numeric x and y") from None
    return pigment_id, stroke_volume(points, radius)


# ----------------------------- Flask app ----------------------------------


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("PIGMENT_MATCH")
    if config:
        app.config.from_mapping(config)

    logging.basicConfig(
        level=str(app.config["LOG_LEVEL"]).upper(), format="%(levelname)s: %(message)s"
    )
    app.extensions["pigment_match"] = build_session(GameConfig.from_mapping(app.config))

    @app.errorhandler(InvalidInputError)
    def bad_request(exc: InvalidInputError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(SessionStateError)
    def conflict(exc: SessionStateError):
        return jsonify({"error": str(exc)}), 409

    @app.errorhandler(UnknownPigmentError)
    def unknown_pigment(exc: UnknownPigmentError):
        log.error("Catalog and session are out of sync: %s", exc)
        return jsonify({"error": str(exc)}), 500

    @app.errorhandler(Exception)
    def unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        log.exception("Unhandled API error")
        return jsonify({"error": str(exc)}), 500

    @app.route("/api/pigments")
    def pigments():
        session = _session()
        return jsonify(
            {"catalog": session.catalog.name, "pigments": [p.to_dict() for p in session.catalog]}
        )

    @app.route("/api/state")
    def state():
        return jsonify(_session().to_dict())

    @app.route("/api/strokes", methods=["POST"])
    def add_stroke():
        pigment_id, volume = _parse_stroke(_json_body())
        session = _session()
        session.add_stroke(pigment_id, volume)
        return jsonify(session.to_dict())

    @app.route("/api/undo", methods=["POST"])
    def undo():
        session = _session()
        session.undo()
        return jsonify(session.to_dict())

    @app.route("/api/clear", methods=["POST"])
    def clear():
        session = _session()
        session.clear()
        return jsonify(session.to_dict())

    @app.route("/api/mix", methods=["POST"])
    def mix():
        session = _session()
        result = session.mix()
        if result is None:
            return jsonify({"error": "nothing to mix; add some paint first"}), 409
        return jsonify({"result": result.to_dict(), "stats": session.stats.to_dict()})

    @app.route("/api/target", methods=["POST"])
    def new_target():
        session = _session()
        session.new_target()
        return jsonify(session.to_dict())

    @app.route("/api/stats")
    def stats():
        session = _session()
        best = best_match(session.history)
        return jsonify(
            {
                "stats": session.stats.to_dict(),
                "history": session.history.to_dict()["matches"],
                "best": best.to_dict() if best else None,
            }
        )

    @app.route("/api/stats", methods=["DELETE"])
    def reset_stats():
        session = _session()
        session.reset_stats()
        return jsonify({"stats": session.stats.to_dict(), "history": []})

    @app.route("/api/score")
    def score():
        target = hex_to_rgb(request.args.get("target", ""))
        mixed = hex_to_rgb(request.args.get("mixed", ""))
        result = calculate_color_score(target, mixed)
        return jsonify(
            {
                "score": result.score,
                "deltaE": result.distance,
                "category": score_category(result.score),
            }
        )

    return app


if __name__ == "__main__":
    create_app().run(debug=False)
