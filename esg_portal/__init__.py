# -*- coding: utf-8 -*-
"""
ESG Portal - Application initialisation
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from werkzeug.exceptions import HTTPException

from config import Config, APP_CONFIG, LOGGING_CONFIG

db = SQLAlchemy()

logger = logging.getLogger(__name__)


def configure_logging(app: Flask) -> None:
    """Apply LOGGING_CONFIG to the root logger (console, plus rotating file outside tests)"""
    level = getattr(logging, str(LOGGING_CONFIG['level']).upper(), logging.INFO)
    formatter = logging.Formatter(LOGGING_CONFIG['format'], LOGGING_CONFIG['date_format'])

    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    if app.config.get('LOG_TO_FILE', True) and not app.testing:
        os.makedirs(os.path.dirname(LOGGING_CONFIG['file']), exist_ok=True)
        file_handler = RotatingFileHandler(
            LOGGING_CONFIG['file'],
            maxBytes=LOGGING_CONFIG['max_bytes'],
            backupCount=LOGGING_CONFIG['backup_count'],
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        logging.getLogger('esg_portal').addHandler(file_handler)


def register_error_handlers(app: Flask) -> None:
    """Map the error taxonomy to JSON responses"""
    from esg_portal.errors import ESGPortalError

    @app.errorhandler(ESGPortalError)
    def handle_portal_error(error):
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception(f"Unhandled error: {error}")
        return jsonify({'error': 'Internal server error'}), 500


def create_app(config_class=Config):
    """Flask application factory"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    db.init_app(app)
    CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

    # Models must be imported before create_all()
    from esg_portal import models  # noqa: F401

    from esg_portal.api.routes import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    from esg_portal.api.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    from esg_portal.api.responses import responses_bp
    app.register_blueprint(responses_bp, url_prefix='/api/responses')

    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    logger.info(f"{APP_CONFIG['APP_NAME']} {APP_CONFIG['VERSION']} initialised")
    return app
