from __future__ import annotations

import pytest
from loguru import logger

from babel_julia import logging_utils
from babel_julia.logging_utils import bind_session, configure_logging, current_session, unbind_session


def test_session_context_is_injected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_utils, "_CONFIGURED_PROFILE", None)
    configure_logging(profile="default", level="DEBUG")
    messages: list[str] = []
    handler_id = logger.add(messages.append, format="{extra[session]} {message}")
    try:
        token = bind_session("work")
        try:
            logger.info("transport.sent")
        finally:
            unbind_session(token)
        logger.info("idle")
    finally:
        logger.remove(handler_id)

    assert [message.strip() for message in messages] == ["work transport.sent", "- idle"]
    assert current_session() == "-"


def test_configure_is_idempotent_per_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_utils, "_CONFIGURED_PROFILE", None)
    configure_logging(profile="cli")
    configure_logging(profile="cli")

    assert logging_utils._CONFIGURED_PROFILE == "cli"
