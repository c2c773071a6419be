"""Flask application factory."""

import os
from flask import Flask, current_app
from .config import config
from .extensions import db, migrate


def create_app(config_name=None, test_config=None):
    """Create and configure the Flask application.

    test_config, when given, is applied on top of the selected config class.
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config['CONFIG_NAME'] = config_name
    if test_config:
        app.config.update(test_config)

    # Logging first so extension setup is logged too
    from .logging_config import setup_logging
    setup_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Storage service bound to the request-scoped session
    from .storage import DatabaseStorage
    app.extensions['storage'] = DatabaseStorage(db.session)

    # Register models so db.create_all() and migrations see every table
    from . import models  # noqa: F401

    return app


def get_storage():
    """Storage service of the current application."""
    return current_app.extensions['storage']
