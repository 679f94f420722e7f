"""Application factory for the advent expedition web API."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from flask import Flask

from expedition.infrastructure.logger import setup_logger

from .blueprints.advent.routes import bp as advent_bp
from .dao import db as db_module


DEFAULT_CONFIG: dict[str, Any] = {
    "SECRET_KEY": "dev",
    "LOG_LEVEL": "INFO",
    "LOG_FILE": None,
}


def create_app(config: dict[str, Any] | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("EXPEDITION")

    if config:
        app.config.update(config)

    setup_logger(level=app.config["LOG_LEVEL"], log_file=app.config.get("LOG_FILE"))

    database_path = app.config.get(
        "DATABASE",
        Path(app.instance_path) / "expedition.sqlite",
    )
    if isinstance(database_path, Path):
        database_path = str(database_path)
    app.config["DATABASE"] = database_path

    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    db_module.init_app(app)
    db_module.ensure_schema(app)

    app.register_blueprint(advent_bp)

    @app.get("/healthz")
    def healthcheck() -> tuple[str, int]:
        return "OK", 200

    return app
