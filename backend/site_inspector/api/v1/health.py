"""Health check endpoint."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from site_inspector.api.deps import json_response, timing
from site_inspector.core.extensions import db, get_redis

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Report database and Redis reachability plus build metadata.

    Answers 503 when a configured dependency is down; Redis reports
    ``disabled`` when ``REDIS_URL`` is unset.
    """

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    client = get_redis()
    redis_status = "disabled"
    if client is not None:
        try:
            client.ping()
            redis_status = "ok"
        except RedisError:
            current_app.logger.exception("healthcheck.redis_error")
            redis_status = "fail"

    healthy = db_status == "ok" and redis_status != "fail"
    payload = {
        "success": healthy,
        "message": "Service healthy" if healthy else "Service degraded",
        "data": {
            "db": db_status,
            "redis": redis_status,
            "version": current_app.config.get("APP_VERSION", "dev"),
            "commit": current_app.config.get("APP_COMMIT", "unknown"),
        },
        "errors": [],
    }
    return json_response(payload, status=HTTPStatus.OK if healthy else HTTPStatus.SERVICE_UNAVAILABLE)
