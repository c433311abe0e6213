"""Unit tests for session logging setup."""

import sys

import pytest
from loguru import logger

from toditox.contexts.extraction.logger import log_extraction_result, setup_extraction_logger
from toditox.contexts.extraction.records import ParseResult, Task
from toditox.utils.logger import LEVEL_COLORS, get_log_root, session_log_dir, setup_logger


@pytest.fixture
def restore_logger():
    """setup_logger() replaces every sink; put a plain stderr sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
class TestSetupLogger:
    def test_writes_provenance_to_file(self, tmp_path, restore_logger):
        log_file = setup_logger("extract", tmp_path / "session", extra_provenance={"Phase": "parse"})

        assert log_file == tmp_path / "session" / "extract.log"
        content = log_file.read_text()
        assert "Phase: parse" in content
        assert "Working directory:" in content

    def test_level_colors_default_untouched(self, tmp_path, restore_logger):
        before = dict(LEVEL_COLORS)
        setup_logger("extract", tmp_path, level_colors={"WARNING": "<magenta>"})
        setup_logger("extract", tmp_path)

        assert LEVEL_COLORS == before

    def test_extraction_logger_records_results(self, tmp_path, restore_logger):
        log_file = setup_extraction_logger(tmp_path, phase="render")
        log_extraction_result("notes.txt", ParseResult(tasks=[Task(title="A")]), "structured", 0.5)
        log_extraction_result("empty.txt", ParseResult(), "fallback", 0.1)

        content = log_file.read_text()
        assert "Phase: render" in content
        assert "[extract] notes.txt: 1 tasks, 0 project updates via structured" in content
        assert "[extract] empty.txt: nothing extracted via fallback" in content


@pytest.mark.unit
class TestLogDirectories:
    def test_log_root_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TODITOX_LOG_DIR", str(tmp_path))

        assert get_log_root() == tmp_path

    def test_session_dir_is_timestamped(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TODITOX_LOG_DIR", str(tmp_path))
        log_dir = session_log_dir("parse")

        assert log_dir.parent == tmp_path
        assert log_dir.name.startswith("parse_")
        assert len(log_dir.name) == len("parse_20250101_120000")
