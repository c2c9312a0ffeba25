from __future__ import annotations

import json
import logging

import pytest

from svc_uploads.app.core.env import Env
from svc_uploads.app.core.logging import JsonFormatter, setup_logging


class _Buffer:
    def __init__(self):
        self.data = ""

    def write(self, s):
        self.data += s

    def flush(self):
        pass


def test_json_formatter_includes_upload_context():
    logger = logging.getLogger("test.json")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    buf = _Buffer()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(JsonFormatter())
    logger.handlers[:] = [handler]

    logger.info(
        "stored",
        extra={"tenant": "acme/products/42", "path": "/uploads/acme/x.png", "size": 12},
    )

    payload = json.loads(buf.data)
    assert payload["message"] == "stored"
    assert payload["level"] == "INFO"
    assert payload["context"] == {"tenant": "acme/products/42", "path": "/uploads/acme/x.png", "size": 12}


def test_json_formatter_includes_error():
    logger = logging.getLogger("test.json.error")
    logger.propagate = False
    buf = _Buffer()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(JsonFormatter())
    logger.handlers[:] = [handler]

    try:
        raise OSError("disk full")
    except OSError:
        logger.error("backup failed", exc_info=True)

    payload = json.loads(buf.data)
    assert payload["error"]["type"] == "OSError"
    assert payload["error"]["message"] == "disk full"
    assert "Traceback" in payload["error"]["stack"]


@pytest.mark.parametrize(
    "env, level, formatter_cls",
    [
        (Env.PROD, logging.INFO, JsonFormatter),
        (Env.LOCAL, logging.DEBUG, logging.Formatter),
    ],
)
def test_setup_logging_per_environment(monkeypatch, env, level, formatter_cls):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)

    setup_logging(env)

    root = logging.getLogger()
    assert root.level == level
    assert type(root.handlers[0].formatter) is formatter_cls


def test_log_level_override(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_FORMAT", "json")

    setup_logging(Env.LOCAL)

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
