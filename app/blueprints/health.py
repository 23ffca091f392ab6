"""Health check blueprint."""

from flask import Blueprint, Response, jsonify

from app.config import get_global_settings

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with status and whether narrative reports are configured
    """
    settings = get_global_settings()
    return jsonify(
        {
            "status": "ok",
            "narrativeReports": settings.gemini_api_key is not None,
        }
    )
