from flask import Flask
from flask_cors import CORS
from typing import Optional


def create_app(config_object: Optional[str] = None) -> Flask:
    """Application factory for creating Flask app instances.

    Registers blueprints, loads configuration and sets up the per-request
    API client and the per-session view store.
    """
    app = Flask(__name__)

    # Load configuration
    if config_object:
        app.config.from_object(config_object)
    else:
        app.config.from_object("config.Config")

    CORS(app, resources={r"/edit/paths": {"origins": app.config["CORS_ORIGINS"]}})

    from .services.api_client import close_api_client
    from .services.view_store import ViewStore

    app.extensions["view_store"] = ViewStore(limit=app.config["VIEW_STORE_LIMIT"])
    app.teardown_appcontext(close_api_client)

    # Import and register blueprints
    from .controllers.health_controller import health_bp
    from .controllers.user_controller import user_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(user_bp)

    return app
