import logging
import os
from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from config import config_dict, ProdConfig
from models import db
from classes.content_cache import ContentCache
from classes.errors import PortalError
from manage import register_commands
from routes.authentication import auth_bp
from routes.section_admin import section_admin_bp
from routes.content_admin import content_admin_bp
from routes.public import public_bp
from utils.log_config import configure_logging

logger = logging.getLogger(__name__)
migrate = Migrate()


def register_error_handlers(app):
    @app.errorhandler(PortalError)
    def handle_portal_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception("Unhandled database error")
        return jsonify({"error": "Internal server error"}), 500


def create_app(config_name=None, overrides=None):
    app = Flask(__name__)

    env = config_name or os.environ.get("FLASK_ENV", "production")
    app.config.from_object(config_dict.get(env, ProdConfig))
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    logger.info("Environment: %s", env)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)

    db.init_app(app)
    migrate.init_app(app, db)
    app.extensions["content_cache"] = ContentCache(ttl=app.config["CONTENT_CACHE_TTL"])

    @app.route('/')
    def home():
        return "Welcome to the Course Portal API!"

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(section_admin_bp, url_prefix='/api/section-admin')
    app.register_blueprint(content_admin_bp, url_prefix='/api/section-admin')
    app.register_blueprint(public_bp, url_prefix='/api')

    register_error_handlers(app)
    register_commands(app)

    return app


app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config['DEBUG'])
