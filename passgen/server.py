import secrets

from flask import Flask, current_app, jsonify, request

from .config import DB_PATH, EVENTS_LOG, SETTINGS
from .errors import EmptyPoolError, HistoryItemNotFound, StorageUnavailable
from .generator import CHARSETS, entropy, evaluate, generate, normalize_options
from .stats import compute_stats
from .storage import HistoryStore
from .utils import log_event, parse_length, parse_limit, parse_options


def create_app(settings=None, db_path=None, events_log=None, rng=None):
    app = Flask(__name__)

    app.config["PASSGEN"] = {**SETTINGS, **(settings or {})}
    app.config["EVENTS_LOG"] = events_log or EVENTS_LOG
    app.config["RNG"] = rng or secrets
    app.extensions["history"] = HistoryStore(
        db_path or DB_PATH, cap=app.config["PASSGEN"]["history_cap"]
    )

    register_routes(app)
    return app


def _store() -> HistoryStore:
    return current_app.extensions["history"]


def _log(event, **fields):
    log_event(current_app.config["EVENTS_LOG"], event, **fields)


def register_routes(app):
    @app.errorhandler(StorageUnavailable)
    def storage_unavailable(e):
        current_app.logger.error("history storage unavailable: %s", e)
        return jsonify({"error": "storage_unavailable", "retryable": True}), 503

    @app.route("/api/generate", methods=["POST"])
    def generate_password():
        settings = current_app.config["PASSGEN"]
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        try:
            length = parse_length(
                data.get("length"),
                settings["default_length"],
                settings["min_length"],
                settings["max_length"],
            )
        except ValueError as e:
            return jsonify({"error": "invalid_length", "detail": str(e)}), 400

        try:
            raw_options = parse_options(
                data.get("options"), settings["default_options"], CHARSETS
            )
        except ValueError as e:
            return jsonify({"error": "invalid_options", "detail": str(e)}), 400
        options = normalize_options(raw_options)

        try:
            result = generate(length, options, rng=current_app.config["RNG"])
        except EmptyPoolError as e:
            _log("empty_pool", length=length, options=options)
            return jsonify({"error": "empty_pool", "detail": str(e)}), 400

        strength = evaluate(result.password, result.pool_size)
        item = _store().record(
            result.password, strength, length, options, result.response_time
        )

        _log(
            "generate",
            id=item.id,
            strength=strength,
            length=length,
            options=options,
            latency_ms=result.response_time,
        )

        return jsonify(
            {
                "id": item.id,
                "password": result.password,
                "strength": strength,
                "length": length,
                "pool_size": result.pool_size,
                "entropy": round(entropy(length, result.pool_size), 2),
                "response_time": result.response_time,
            }
        )

    @app.route("/api/history", methods=["GET"])
    def list_history():
        try:
            limit = parse_limit(request.args.get("limit"))
        except ValueError as e:
            return jsonify({"error": "invalid_limit", "detail": str(e)}), 400

        items = _store().list(limit)
        return jsonify({"items": [item.to_dict() for item in items]})

    @app.route("/api/history/<item_id>", methods=["DELETE"])
    def delete_history_item(item_id):
        try:
            _store().delete_one(item_id)
        except HistoryItemNotFound:
            return jsonify({"error": "not_found"}), 404

        _log("delete", id=item_id)
        return jsonify({"status": "OK"})

    @app.route("/api/history", methods=["DELETE"])
    def clear_history():
        removed = _store().clear()
        _log("clear", removed=removed)
        return jsonify({"status": "OK", "removed": removed})

    @app.route("/api/stats", methods=["GET"])
    def get_stats():
        store = _store()
        return jsonify(compute_stats(store.snapshot(), history_cap=store.cap))


if __name__ == "__main__":
    create_app().run("127.0.0.1", 5000, debug=False, threaded=True)
