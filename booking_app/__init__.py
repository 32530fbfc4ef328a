import logging

from flask import Flask

from .config import Config
from .controllers.bookings import bp as bookings_bp
from .controllers.errors import register_error_handlers
from .controllers.vehicles import bp as vehicles_bp
from .controllers.views import bp as views_bp
from .models.store import Store
from .services.common import STORE_KEY
from .utils.dates import valid_timezone

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging(level: str):
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("booking_app").setLevel(level.upper())


def create_app(config=None, store: Store | None = None):
    """
    App factory.
    `config` may be a config class or a mapping of overrides; `store` lets
    tests hand in a prepared Store instead of building one from DATABASE_URL.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(config, dict):
        app.config.update(config)
    elif config is not None:
        app.config.from_object(config)

    _configure_logging(app.config["LOG_LEVEL"])

    if not valid_timezone(app.config["APP_TIMEZONE"]):
        raise ValueError(f"Unknown APP_TIMEZONE: {app.config['APP_TIMEZONE']!r}")

    if store is None:
        store = Store(app.config["DATABASE_URL"], echo=app.config["SQL_ECHO"])
        store.create_schema()
    app.extensions[STORE_KEY] = store

    app.register_blueprint(views_bp)
    app.register_blueprint(vehicles_bp)
    app.register_blueprint(bookings_bp)
    register_error_handlers(app)

    return app
