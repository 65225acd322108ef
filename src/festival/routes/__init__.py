from festival.routes.registration import registration_bp
from festival.routes.admin import admin_bp
from festival.routes.uploads import uploads_bp
from festival.routes.status import status_bp

def register_blueprints(app):
    """Register all app routes."""
    app.register_blueprint(registration_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(uploads_bp)
    app.register_blueprint(status_bp)
