# config.py — 환경설정
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY") or os.environ.get("SECRET_KEY") or "dev-secret"

    # DB (스키마만 선언, 패널에서는 사용하지 않음)
    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("SQLALCHEMY_DATABASE_URI")
        or os.environ.get("DATABASE_URL")
        or "sqlite:///lms.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 세션
    SESSION_USER_KEY = "lms_user"
    SESSION_WORKSPACE_KEY = "lms_ws"
    DEMO_PASSWORD = os.environ.get("DEMO_PASSWORD", "password123")

    # 세션별 데모 데이터 사본 개수 상한
    MAX_WORKSPACES = int(os.environ.get("MAX_WORKSPACES", 500))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # 업로드 파일은 저장하지 않고 메타데이터만 보관
    UPLOAD_URL_PREFIX = "/uploads"


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    MAX_WORKSPACES = 20


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
