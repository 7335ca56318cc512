"""Application configuration loaded from the environment."""

import os

from dotenv import load_dotenv

load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///projectsmanager.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # TODO: Fail at startup when SECRET_KEY is unset outside of development
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    WTF_CSRF_ENABLED = os.environ.get("WTF_CSRF_ENABLED", "true").lower() not in {"0", "false", "no"}
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    PROJECTS_PER_PAGE = _int_from_env("PROJECTS_PER_PAGE", 30)
    PROJECTS_MAX_PER_PAGE = _int_from_env("PROJECTS_MAX_PER_PAGE", 100)
