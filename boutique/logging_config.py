"""
Logging configuration for the storefront application
"""
import logging
import sys
from flask import has_request_context, request
from flask.logging import default_handler


class RequestFormatter(logging.Formatter):
    """Formatter that adds request context to log records when there is one"""

    def format(self, record):
        if has_request_context():
            record.url = request.url
            record.method = request.method
            record.remote_addr = request.remote_addr
        else:
            record.url = 'N/A'
            record.method = 'N/A'
            record.remote_addr = 'N/A'

        return super().format(record)


def setup_logging(app):
    """
    Setup logging configuration for the Flask app

    app.logger is named after the import name ('boutique'), so it is also the
    parent of every logging.getLogger(__name__) logger inside the package.
    """
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)

    formatter = RequestFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - '
        '[%(method)s %(url)s] - '
        '[IP: %(remote_addr)s] - '
        '%(message)s'
    )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # create_app may run more than once per process
    app.logger.removeHandler(default_handler)
    for handler in list(app.logger.handlers):
        if isinstance(handler.formatter, RequestFormatter):
            app.logger.removeHandler(handler)

    app.logger.setLevel(level)
    app.logger.addHandler(console_handler)

    app.logger.info('Application logging configured', extra={
        'event_type': 'app_startup',
        'config': app.config.get('CONFIG_NAME', 'unknown')
    })

    return app.logger
