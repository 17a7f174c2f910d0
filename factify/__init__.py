from typing import Mapping, Optional
import logging

from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_compress import Compress
from flask_cors import CORS
from dotenv import load_dotenv

# Load environment variables early so config is available for app creation
load_dotenv()

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()
cors = CORS()


def create_app(overrides: Optional[Mapping] = None) -> Flask:
    """
    Application factory for the Factify API.
    Loads configuration from the environment, applies ``overrides``,
    initializes extensions and registers the API blueprints.
    """
    from factify.config import Config
    config = Config()
    config.validate()

    app = Flask(__name__)
    app.config.update(config.to_flask())
    if overrides:
        app.config.update(overrides)

    # Connection pool settings only apply to server databases
    if not app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
        })

    app.config["COMPRESS_MIMETYPES"] = ["application/json"]
    app.config["COMPRESS_MIN_SIZE"] = 500

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")), logging.INFO))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    compress.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        allow_headers=["Content-Type", "Authorization"],
    )

    from factify.security import init_security
    init_security(app)

    @login_manager.user_loader
    def load_user(user_id):
        from factify.auth.models import User
        try:
            return db.session.get(User, int(user_id))
        except (ValueError, TypeError):
            return None

    @login_manager.request_loader
    def load_user_from_request(req):
        """Resolve ``Authorization: Bearer <token>`` to a user."""
        from factify.auth.models import User
        from factify.auth.tokens import decode_jwt_token
        from factify.security import SecurityLogger

        header = req.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None

        claims = decode_jwt_token(token.strip())
        if claims is None:
            SecurityLogger.log_invalid_token(req.path)
            return None
        try:
            return db.session.get(User, int(claims["sub"]))
        except (KeyError, ValueError, TypeError):
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"message": "Authentication required"}), 401

    @app.route("/")
    def index():
        return jsonify({"status": "ok", "message": "Factify API is running"}), 200

    # Register blueprints
    from factify.auth import account_bp
    app.register_blueprint(account_bp)

    from factify.quiz import quiz_bp, take_quiz_bp
    app.register_blueprint(quiz_bp)
    app.register_blueprint(take_quiz_bp)

    @app.errorhandler(404)
    def handle_404(e):
        app.logger.warning(f"404 error: {request.method} {request.path}")
        return jsonify({
            "message": f"Route not found: {request.method} {request.path}",
            "path": request.path,
            "method": request.method
        }), 404

    @app.errorhandler(405)
    def handle_405(e):
        app.logger.warning(f"405 error: {request.method} {request.path}")
        return jsonify({
            "message": f"Method not allowed: {request.method} {request.path}",
            "path": request.path,
            "method": request.method
        }), 405

    @app.errorhandler(500)
    def handle_500(e):
        db.session.rollback()
        app.logger.error(f"500 error: {request.method} {request.path}")
        return jsonify({"message": "An unexpected error occurred"}), 500

    # Create tables if they do not exist
    with app.app_context():
        from factify.auth.models import User  # noqa: F401
        from factify.quiz.models import Quiz, Question, AnswerOption  # noqa: F401
        db.create_all()

        if app.config.get("SEED_DEMO_QUIZ"):
            from factify.quiz.seed import seed_demo_quiz
            seed_demo_quiz()

    return app
