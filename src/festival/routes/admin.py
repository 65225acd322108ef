from flask import Blueprint, jsonify
from festival.services import compute_statistics, delete_registration, list_registrations

admin_bp = Blueprint("admin", __name__)

@admin_bp.route("/users", methods=["GET"])
def get_users():
    """List every registration (admin view)."""
    return jsonify([r.to_dict() for r in list_registrations()]), 200


@admin_bp.route("/stats", methods=["GET"])
def get_stats():
    """
    Aggregate counts for the admin dashboard.
    Returns:
      - JSON object with total, male, female, beginners, competition and workshop.
    """
    return jsonify(compute_statistics().to_dict()), 200


@admin_bp.route("/users/<registration_id>", methods=["DELETE"])
def delete_user(registration_id):
    delete_registration(registration_id)
    return jsonify({"message": "User deleted successfully"}), 200
