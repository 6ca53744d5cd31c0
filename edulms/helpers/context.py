# helpers/context.py — g.user 바인딩, 공통 컨텍스트, 에러핸들러
from __future__ import annotations
import logging

from flask import g, request, render_template

from edulms.helpers.auth import load_session_user

logger = logging.getLogger(__name__)


def register_context_hooks(app):
    @app.before_request
    def _bind_user_to_g():
        g.user = load_session_user()

    @app.context_processor
    def inject_helpers():
        def active_prefix(path_prefix: str):
            return request.path.startswith(path_prefix)

        def has_role(role: str) -> bool:
            u = g.get("user")
            return bool(u and u["role"] == role)

        def any_role(*roles: str) -> bool:
            u = g.get("user")
            return bool(u and u["role"] in roles)

        return dict(
            active_prefix=active_prefix,
            has_role=has_role,
            any_role=any_role,
            current_user=g.get("user"),
        )

    @app.errorhandler(404)
    def not_found(e):
        return render_template("404.html", e=e), 404

    @app.errorhandler(403)
    def forbidden(e):
        return render_template("403.html", e=e), 403

    @app.errorhandler(500)
    def server_error(e):
        logger.error("server error on %s: %r", request.path, getattr(e, "original_exception", e))
        return render_template("500.html", e=e), 500
