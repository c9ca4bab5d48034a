from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import pytest
from loguru import logger

from workbench.editing.log import setup_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logger.remove()
    logger.add(sys.stderr)


def test_stdlib_records_reach_loguru(restore_logging: None) -> None:
    setup_logging("debug")
    messages: list[str] = []
    logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")

    logging.getLogger("workbench.test").warning("folder %s added", "a")

    assert "folder a added" in messages
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
    assert logging.getLogger("watchfiles.main").level == logging.WARNING
