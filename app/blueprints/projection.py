"""
Projection blueprint for net worth stress tests.

This module provides API endpoints for the sample profile and its schema,
net worth from a balance sheet, scenario projections, and the narrative
analysis of a projection.
"""

from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from app.config import get_global_settings
from app.models.profile import create_sample_profile
from app.models.scenario import ScenarioType
from app.models.schema_generator import generate_profile_schema
from app.models.simulation.engine import ProjectionOptions
from app.services.narrative_service import NarrativeReportService
from app.services.projection_service import ProjectionService

projection_bp = Blueprint("projection", __name__, url_prefix="/api")


def _projection_service() -> ProjectionService:
    settings = get_global_settings()
    return ProjectionService(
        ProjectionOptions(
            retirement_income_threshold=settings.retirement_income_threshold
        )
    )


def _split_payload(data: Dict[str, Any]) -> Tuple[Dict[str, Any], Optional[Dict[str, Any]]]:
    """Accept either a bare profile or ``{"profile": ..., "options": ...}``."""
    if "profile" in data:
        return data["profile"], data.get("options")
    return data, None


def _invalid(e: ValidationError, message: str = "Invalid profile") -> Any:
    return (
        jsonify(
            {
                "error": message,
                "details": [
                    {"loc": list(err["loc"]), "msg": err["msg"]}
                    for err in e.errors()
                ],
            }
        ),
        400,
    )


@projection_bp.route("/profiles/sample", methods=["GET"])
def get_sample_profile() -> Any:
    """Get the sample profile used for first-run screens.

    Returns:
        JSON profile with camelCase keys
    """
    profile = create_sample_profile()
    return jsonify(profile.model_dump(mode="json", by_alias=True)), 200


@projection_bp.route("/profiles/schema", methods=["GET"])
def get_profile_schema() -> Any:
    """Get the JSON schema for profile payloads."""
    return jsonify(generate_profile_schema()), 200


@projection_bp.route("/profiles/net-worth", methods=["POST"])
def get_net_worth() -> Any:
    """Calculate net worth for a posted profile.

    Returns:
        JSON response with the balance-sheet net worth
    """
    try:
        profile_data, _ = _split_payload(request.get_json(silent=True) or {})
        profile = _projection_service().parse_profile(profile_data)
        return jsonify({"netWorth": profile.net_worth}), 200

    except ValidationError as e:
        return _invalid(e)
    except Exception as e:
        current_app.logger.error(f"Error calculating net worth: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/projections", methods=["POST"])
def run_projections() -> Any:
    """Run BASE, WORST and BEST projections for a posted profile.

    Returns:
        JSON response with per-scenario results and the comparison series
    """
    try:
        service = _projection_service()
        profile_data, options_data = _split_payload(request.get_json(silent=True) or {})
        profile = service.parse_profile(profile_data)

        try:
            options = service.parse_options(options_data)
        except ValidationError as e:
            return _invalid(e, "Invalid options")

        results = service.run_projection(profile, options)
        return jsonify(service.build_response(profile, results)), 200

    except ValidationError as e:
        return _invalid(e)
    except Exception as e:
        current_app.logger.error(f"Error running projections: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/projections/<string:scenario_name>", methods=["POST"])
def run_single_projection(scenario_name: str) -> Any:
    """Run one scenario for a posted profile.

    Args:
        scenario_name: Scenario tag (base, worst or best)

    Returns:
        JSON response with the scenario result
    """
    try:
        scenario = ScenarioType.parse(scenario_name)
    except ValueError:
        return jsonify({"error": "Scenario not found"}), 404

    try:
        service = _projection_service()
        profile_data, options_data = _split_payload(request.get_json(silent=True) or {})
        profile = service.parse_profile(profile_data)

        try:
            options = service.parse_options(options_data)
        except ValidationError as e:
            return _invalid(e, "Invalid options")

        result = service.run_scenario(profile, scenario, options)
        return jsonify(result.to_dict()), 200

    except ValidationError as e:
        return _invalid(e)
    except Exception as e:
        current_app.logger.error(f"Error running {scenario_name} projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/analysis", methods=["POST"])
def generate_analysis() -> Any:
    """Generate a narrative analysis of the three scenario projections.

    Returns:
        JSON response with the analysis text (or an "unavailable" message)
    """
    try:
        service = _projection_service()
        profile_data, options_data = _split_payload(request.get_json(silent=True) or {})
        profile = service.parse_profile(profile_data)

        try:
            options = service.parse_options(options_data)
        except ValidationError as e:
            return _invalid(e, "Invalid options")

        results = service.run_projection(profile, options)
        narrative = NarrativeReportService.from_settings(get_global_settings())
        analysis = narrative.generate(results.values(), profile)
        return jsonify({"analysis": analysis}), 200

    except ValidationError as e:
        return _invalid(e)
    except Exception as e:
        current_app.logger.error(f"Error generating analysis: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500
