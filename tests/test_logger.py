"""
Tests for library logging.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import ez_opendata
from ez_opendata.infrastructure.sources.overpass_client import OverpassClient
from ez_opendata.utils.logger import LOGGER_NAME, get_logger, setup_logger


@pytest.fixture
def package_logger():
    log = logging.getLogger(LOGGER_NAME)
    level = log.level
    yield log
    for h in [h for h in log.handlers if getattr(h, "_ez_opendata", False)]:
        h.close()
        log.removeHandler(h)
    log.setLevel(level)


def test_get_logger_nests_under_package() -> None:
    assert get_logger().name == "ez_opendata"
    assert get_logger("ez_opendata.infrastructure.http").name == "ez_opendata.infrastructure.http"
    assert get_logger("scripts").name == "ez_opendata.scripts"


def test_import_is_silent_without_configuration(
    package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    assert ez_opendata.__name__ == LOGGER_NAME
    assert any(isinstance(h, logging.NullHandler) for h in package_logger.handlers)
    # Cut off root handlers so only the package's own handlers count.
    monkeypatch.setattr(package_logger, "propagate", False)

    get_logger("ez_opendata.infrastructure.http").warning("Overpass request failed")

    assert capsys.readouterr().err == ""


def test_debug_request_lines_reach_configured_handler(package_logger: logging.Logger) -> None:
    out = io.StringIO()
    setup_logger(level=logging.DEBUG, stream=out)

    mock_response = MagicMock()
    mock_response.json.return_value = {"elements": []}
    session = MagicMock()
    session.post.return_value = mock_response
    OverpassClient(session=session).get_pois("1,2,3,4", [("amenity", "cafe")])

    text = out.getvalue()
    assert "| DEBUG | ez_opendata.infrastructure.http | Overpass POST https://overpass-api.de/api/interpreter" in text
    assert "Overpass fetched 0 POIs" in text


def test_setup_logger_is_idempotent(package_logger: logging.Logger, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "opendata.log"
    log = setup_logger(level=logging.INFO, log_file=log_file)
    again = setup_logger(level=logging.WARNING)

    assert again is log is package_logger
    assert len([h for h in log.handlers if getattr(h, "_ez_opendata", False)]) == 2
    assert log.level == logging.WARNING
    assert log_file.parent.is_dir()
