from flask import Flask, jsonify
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from .errors import HirePathError
from .extensions import db, login_manager, rq

migrate = Migrate()

BLUEPRINTS = (
    ("auth", "/auth"),
    ("jobs", "/jobs"),
    ("applications", "/applications"),
    ("interviews", "/interviews"),
    ("hr", "/hr"),
    ("notifications", "/notifications"),
)


def create_app(config_object='config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    rq.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Login required"}), 401

    from importlib import import_module
    for name, prefix in BLUEPRINTS:
        module = import_module(f".blueprints.{name}", __name__)
        app.register_blueprint(module.bp, url_prefix=prefix)

    @app.errorhandler(HirePathError)
    def handle_hirepath_error(e):
        if e.status_code >= 500:
            app.logger.error('%s: %s', type(e).__name__, e.message)
        else:
            app.logger.warning('%s: %s', type(e).__name__, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.get('/health')
    def health():
        return jsonify({"status": "ok"})

    return app
