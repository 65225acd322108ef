# src/festival/routes/registration.py
from flask import Blueprint, request, jsonify
from festival.services import register_participant

registration_bp = Blueprint("registration", __name__)

@registration_bp.route("/register", methods=["POST"])
def register():
    """
    Accepts a festival registration as form-data (with an optional
    ``paymentScreenshot`` image) or as JSON.

    Returns:
        200 with a success message and the new id,
        400 on missing fields, duplicate email or a rejected upload.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not payload:
        payload = request.form.to_dict(flat=True)

    screenshot = request.files.get("paymentScreenshot")
    registration = register_participant(payload, screenshot)

    return jsonify({
        "message": "Registration successful! See you at the festival!",
        "id": registration.id,
    }), 200
