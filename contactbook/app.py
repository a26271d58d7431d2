# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import importlib
from typing import Any, Protocol, cast

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from contactbook.infrastructure.container import Container
from contactbook.infrastructure.db import init_db
from contactbook.shared.config import AppConfig, load_config
from contactbook.shared.logging import logger, setup_logging
from contactbook.shared.middleware.error_handler import configure_error_handling
from contactbook.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(
        level="DEBUG" if config.debug_logging else config.log_level,
        log_file=config.log_file,
    )

    container = Container(config)
    init_db(container.engine)

    app = Flask(__name__)
    if config.security.trusted_proxies:
        hops = config.security.trusted_proxies
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)  # type: ignore[method-assign]
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {
        "origins": config.security.allowed_origins,
        "allow_headers": ["Authorization", "Content-Type", "X-Request-ID"],
        "expose_headers": ["X-Request-ID"],
    }
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.profile_controller.as_blueprint())
    app.register_blueprint(container.contacts_controller.as_blueprint())
    app.extensions["contactbook"] = container

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
