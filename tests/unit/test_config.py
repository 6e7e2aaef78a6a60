import logging
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest
from loguru import logger as loguru_logger
from pydantic import ValidationError

from pumpswap.core.config import Settings
from pumpswap.core.logger import LoguruHandler, get_logger, setup_logger

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class TestSettings:
    def test_level_is_upper_cased(self) -> None:
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_slippage_range(self) -> None:
        assert Settings(default_slippage=0).default_slippage == 0
        with pytest.raises(ValidationError):
            Settings(default_slippage=101)


class TestLogger:
    def test_component_is_bound(self) -> None:
        log = get_logger("tests")
        log.info("bound logger works", value=1)

    def test_stdlib_records_reach_loguru(self) -> None:
        messages = []
        sink_id = loguru_logger.add(messages.append, level="DEBUG", format="{message}")
        try:
            record = logging.LogRecord("pumpswap", logging.WARNING, __file__, 1, "pool depleted", None, None)
            LoguruHandler().emit(record)
        finally:
            loguru_logger.remove(sink_id)

        assert any("pool depleted" in str(m) for m in messages)

    def test_setup_rejects_unknown_level(self) -> None:
        root_handlers = list(logging.getLogger().handlers)
        with pytest.raises(ValueError):
            setup_logger("tests", level="verbose")
        assert logging.getLogger().handlers == root_handlers

    def test_import_keeps_host_logging(self) -> None:
        script = textwrap.dedent(
            """
            import logging
            import sys

            from loguru import logger

            messages = []
            logger.add(messages.append, format="{extra} {message}")
            handler = logging.StreamHandler(sys.stdout)
            logging.getLogger().addHandler(handler)

            import pumpswap
            import pumpswap.services.amm

            logger.info("host message")
            assert handler in logging.getLogger().handlers, "root handler removed"
            assert len(messages) == 1, messages
            assert str(messages[0]).startswith("{} host message"), messages
            """
        )
        result = subprocess.run(
            [sys.executable, "-c", script],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0, result.stderr
