# app.py — 앱 팩토리 + 블루프린트 등록
import logging
import os

from flask import Flask, redirect, url_for, request, g, render_template

from edulms.config import config
from edulms.extensions import db
from edulms.helpers.utils import register_jinja_filters
from edulms.helpers.context import register_context_hooks
from edulms.services.exceptions import NotFoundError

# 블루프린트 import
from edulms.blueprints.auth.routes import bp as auth_bp
from edulms.blueprints.dashboard.routes import bp as dashboard_bp
from edulms.blueprints.users.routes import bp as users_bp
from edulms.blueprints.courses.routes import bp as courses_bp
from edulms.blueprints.materials.routes import bp as materials_bp
from edulms.blueprints.quizzes.routes import bp as quizzes_bp
from edulms.blueprints.students.routes import bp as students_bp
from edulms.blueprints.forum.routes import bp as forum_bp
from edulms.blueprints.grades.routes import bp as grades_bp

logger = logging.getLogger(__name__)


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("edulms").setLevel(level)
    app.logger.setLevel(level)


def create_app(config_name=None, **overrides) -> Flask:
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_object(config.get(config_name, config["default"]))
    app.config.update(overrides)

    _configure_logging(app)

    # 스키마 선언용 (패널에서는 사용하지 않음)
    db.init_app(app)

    # Jinja 필터/컨텍스트
    register_jinja_filters(app)
    register_context_hooks(app)

    # 1) 로그인/인증 블루프린트 먼저
    app.register_blueprint(auth_bp)

    # 2) 역할별 화면
    app.register_blueprint(dashboard_bp)          # "/" (역할별 분기)
    app.register_blueprint(users_bp)
    app.register_blueprint(courses_bp)
    app.register_blueprint(materials_bp)
    app.register_blueprint(quizzes_bp)
    app.register_blueprint(students_bp)
    app.register_blueprint(forum_bp)
    app.register_blueprint(grades_bp)

    # --- 전역 가드: auth.* / static 제외 모두 로그인 필요 ---
    @app.before_request
    def _require_login_globally():
        ep = (request.endpoint or "").strip()
        if ep == "static" or ep.startswith("auth."):
            return
        if not g.get("user"):
            nxt = request.full_path if request.query_string else request.path
            return redirect(url_for("auth.home", next=nxt))

    @app.errorhandler(NotFoundError)
    def _record_not_found(e):
        return render_template("404.html", e=e), 404

    @app.cli.command("create-schema")
    def create_schema():
        """선언된 테이블을 SQLALCHEMY_DATABASE_URI 에 생성"""
        with app.app_context():
            db.create_all()
        logger.info("schema created on %s", app.config["SQLALCHEMY_DATABASE_URI"])
        print("Schema created.")

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, port=5004, use_reloader=False)
