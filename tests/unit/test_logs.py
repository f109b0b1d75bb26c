import io
import json
import logging
from dataclasses import replace

from projreg.config import get_settings
from projreg.logs import configure_logging


def test_configure_logging_plain_text() -> None:
    stream = io.StringIO()
    settings = replace(get_settings(), log_level="INFO", log_json=False)

    logger = configure_logging(settings, stream=stream, force=True)
    logging.getLogger("projreg.core.registry").info("project created id=%s", 3)

    assert logger.name == "projreg"
    assert logger.propagate is False
    assert "INFO projreg.core.registry project created id=3" in stream.getvalue()


def test_configure_logging_json_lines() -> None:
    stream = io.StringIO()
    settings = replace(get_settings(), log_level="WARNING", log_json=True)

    configure_logging(settings, stream=stream, force=True)
    registry_logger = logging.getLogger("projreg.core.registry")
    registry_logger.info("suppressed")
    registry_logger.warning("create rejected", extra={"kind": "permission_denied"})

    lines = stream.getvalue().strip().splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "projreg.core.registry"
    assert payload["message"] == "create rejected"
    assert payload["kind"] == "permission_denied"


def test_configure_logging_is_idempotent() -> None:
    first = io.StringIO()
    second = io.StringIO()
    settings = replace(get_settings(), log_level="INFO", log_json=False)

    configure_logging(settings, stream=first, force=True)
    configure_logging(settings, stream=second)
    logging.getLogger("projreg").info("hello")

    assert "hello" in first.getvalue()
    assert second.getvalue() == ""
    assert len(logging.getLogger("projreg").handlers) == 1
