from flask import Blueprint, current_app, jsonify

status_bp = Blueprint("status", __name__)

@status_bp.route("/", methods=["GET"])
def landing_page():
    """Service descriptor with the list of available endpoints."""
    endpoints = sorted(
        f"{method} {rule.rule}"
        for rule in current_app.url_map.iter_rules()
        if rule.endpoint != "static"
        for method in rule.methods - {"HEAD", "OPTIONS"}
    )
    return jsonify({
        "service": "Festival Registration API",
        "status": "running",
        "endpoints": endpoints,
    }), 200
