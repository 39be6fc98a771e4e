"""Tests for Settings"""
import logging

from app.config import Settings


def test_sqlalchemy_url_uses_psycopg_driver():
    s = Settings(DATABASE_URL="postgresql://u:p@db:5432/subs")
    assert s.get_sqlalchemy_url() == "postgresql+psycopg://u:p@db:5432/subs"


def test_sqlalchemy_url_left_alone_for_other_drivers():
    s = Settings(DATABASE_URL="sqlite:///./subs.db")
    assert s.get_sqlalchemy_url() == "sqlite:///./subs.db"


def test_log_level():
    assert Settings(LOG_LEVEL="debug").get_log_level() == logging.DEBUG
    assert Settings(LOG_LEVEL="nonsense").get_log_level() == logging.INFO


def test_defaults_from_env(monkeypatch):
    monkeypatch.setenv("SERVER_PORT", "9090")
    assert Settings().SERVER_PORT == 9090
