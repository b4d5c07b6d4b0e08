"""Numbers-lottery settlement simulation with a Flask reporting API."""

from __future__ import annotations

from dotenv import load_dotenv
from flask import Flask


def create_app(config_object: object | None = None) -> Flask:
    """Application factory.

    Args:
        config_object: Optional config class/object; defaults to the one
            selected by ``APP_ENV``.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from lottery.config import get_config
    from lottery.error_handlers import register_error_handlers
    from lottery.logging_config import configure_logging
    from lottery.routes.draws import draws_bp
    from lottery.routes.health import health_bp
    from lottery.routes.ledger import ledger_bp
    from lottery.routes.outlets import outlets_bp
    from lottery.routes.simulation import simulation_bp
    from lottery.runtime import init_lottery

    app = Flask(__name__)
    app.config.from_object(config_object or get_config())

    configure_logging(app)
    init_lottery(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(draws_bp)
    app.register_blueprint(ledger_bp)
    app.register_blueprint(outlets_bp)
    app.register_blueprint(simulation_bp)

    return app
