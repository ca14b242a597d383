# -*- coding: utf-8 -*-
"""
Logging helper tests

Run: pytest tests/utils/test_logger.py -v
"""
import logging
import re
import sys
from pathlib import Path

# Project root (tests/utils/test_logger.py → 3 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.utils.logger import build_handlers, default_log_file


class TestLogger:
    """Tests for handler construction and log file naming."""

    def test_default_log_file_is_daily(self, tmp_path):
        path = default_log_file(tmp_path)

        assert path.parent == tmp_path
        assert re.fullmatch(r"ingestion_\d{8}\.log", path.name)

    def test_console_only(self):
        handlers = build_handlers(logging.INFO)

        assert len(handlers) == 1
        assert handlers[0].stream is sys.stdout
        assert handlers[0].level == logging.INFO

    def test_file_handler_writes_utf8(self, tmp_path):
        log_file = tmp_path / "logs" / "ingestion" / "run.log"
        handlers = build_handlers(logging.DEBUG, log_file)
        file_handler = handlers[1]

        record = logging.LogRecord(
            "test", logging.INFO, __file__, 1, "Loi relative à la procédure", None, None
        )
        file_handler.emit(record)
        file_handler.close()

        assert log_file.read_text(encoding="utf-8").rstrip().endswith(
            "INFO - Loi relative à la procédure"
        )
        assert all(h.level == logging.DEBUG for h in handlers)
