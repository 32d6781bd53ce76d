from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.checkout import CheckoutBuilder


@pytest.fixture
def checkout(tmp_path: Path) -> CheckoutBuilder:
    """Provide a throwaway component checkout rooted at the pytest tmp_path."""
    return CheckoutBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_uidocs_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("uidocs")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
