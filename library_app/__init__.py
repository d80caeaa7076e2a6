from flask import Flask, jsonify
from library_app.config import Config
from library_app.extensions import db, migrate, jwt, mail
from library_app.errors import register_error_handlers
from library_app.utils.policy import init_jwt_callbacks


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    app.json.sort_keys = False

    # 1) Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)
    init_jwt_callbacks(jwt)

    # 2) JSON error responses
    register_error_handlers(app)

    # 3) API blueprints, all under /api
    from library_app.controllers.auth_controller import auth_bp
    from library_app.controllers.author_controller import author_bp
    from library_app.controllers.book_controller import book_bp
    from library_app.controllers.borrowing_controller import borrowing_bp
    from library_app.controllers.rating_controller import rating_bp
    from library_app.controllers.user_controller import user_bp
    from library_app.controllers.dashboard_controller import dashboard_bp
    from library_app.controllers.notification_controller import notif_bp
    for bp in (auth_bp, author_bp, book_bp, borrowing_bp, rating_bp, user_bp, dashboard_bp, notif_bp):
        app.register_blueprint(bp, url_prefix="/api" + (bp.url_prefix or ""))

    @app.get("/api/health")
    def health():
        return jsonify({"ok": True})

    # 4) CLI
    from library_app.commands import register_commands
    register_commands(app)

    return app
