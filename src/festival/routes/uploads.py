from flask import Blueprint, current_app, send_from_directory

uploads_bp = Blueprint("uploads", __name__)

@uploads_bp.route("/uploads/<path:filename>", methods=["GET"])
def get_upload(filename):
    """Serve a stored payment screenshot by its generated filename."""
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)
