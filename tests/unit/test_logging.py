"""Tests for logging configuration."""

import logging

import structlog

from api.config import Settings
from api.logging import resolve_log_level, setup_logging


def test_level_from_settings() -> None:
    assert resolve_log_level(Settings(_env_file=None, log_level="debug")) == logging.DEBUG


def test_unknown_level_falls_back_to_info() -> None:
    assert resolve_log_level(Settings(_env_file=None, log_level="chatty")) == logging.INFO


def test_quiet_raises_level() -> None:
    settings = Settings(_env_file=None, log_level="DEBUG")
    assert resolve_log_level(settings, quiet=True) == logging.WARNING

    settings = Settings(_env_file=None, log_level="ERROR")
    assert resolve_log_level(settings, quiet=True) == logging.ERROR


def test_production_renders_json(settings) -> None:
    production = Settings(_env_file=None, env="production")
    try:
        setup_logging(production)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    finally:
        setup_logging(settings)


def test_development_renders_console(settings) -> None:
    try:
        setup_logging(Settings(_env_file=None, env="development"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
    finally:
        setup_logging(settings)
