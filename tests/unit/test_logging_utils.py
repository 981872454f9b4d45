"""Unit tests for category logging, cycle ids and perf timing."""

import json
import logging

import pytest

from src.utils.logging_setup import (
    JSONFormatter,
    get_category_for_module,
    get_logger,
    reset_session_run_number,
    setup_category_logging,
    shutdown_logging,
)
from src.utils.perf_logger import log_timing, set_perf_logger, timed
from src.utils.trace_context import (
    clear_cycle_id,
    get_cycle_counter,
    get_cycle_id,
    new_cycle,
    reset_cycle_counter,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def perf_records():
    logger = logging.getLogger("test.perf")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ListHandler()
    logger.addHandler(handler)
    set_perf_logger(logger)
    yield handler.records
    logger.removeHandler(handler)
    set_perf_logger(logging.getLogger("heatmap.perf"))


class TestTraceContext:
    """Tests for cycle id propagation."""

    def test_no_cycle(self):
        clear_cycle_id()
        assert get_cycle_id() == "------"

    def test_nested_cycles_restore_outer_id(self):
        reset_cycle_counter()
        with new_cycle() as outer:
            assert len(outer) == 6
            with new_cycle() as inner:
                assert get_cycle_id() == inner
            assert get_cycle_id() == outer
        assert get_cycle_counter() == 2


class TestRouting:
    """Tests for module -> category routing."""

    @pytest.mark.parametrize("module, category", [
        ("src.domain.services.heatmap.ranker", "calc"),
        ("src.domain.services.url_codec", "sync"),
        ("src.application.config_transmitter", "sync"),
        ("src.infrastructure.adapters.file_model", "data"),
        ("src.infrastructure.location.memory_location", "sync"),
        ("src.utils.perf_logger", "perf"),
        ("src.presentation.ranking_table", "system"),
        ("main", "system"),
    ])
    def test_category(self, module, category):
        assert get_category_for_module(module) == category

    def test_logger_name(self):
        assert get_logger("src.domain.services.heatmap.normalizer").name == "heatmap.calc"


class TestFormatting:
    """Tests for the JSON line format."""

    def test_json_line(self):
        record = logging.LogRecord("heatmap.sync", logging.INFO, __file__, 1, "pushed", None, None)
        record.data = {"widgets": 2}

        with new_cycle() as cycle_id:
            entry = json.loads(JSONFormatter().format(record))

        assert entry["cat"] == "sync"
        assert entry["cycle"] == cycle_id
        assert entry["msg"] == "pushed"
        assert entry["data"] == {"widgets": 2}


class TestCategoryFiles:
    """Tests for per-category file output."""

    def test_one_file_per_category(self, tmp_path):
        reset_session_run_number()
        loggers = setup_category_logging(env="test", log_dir=str(tmp_path), level="DEBUG")
        try:
            loggers["calc"].info("normalized")
        finally:
            shutdown_logging()

        files = sorted(p.name for p in tmp_path.rglob("*.log"))
        assert len(files) == 5
        assert any("_clc_" in name for name in files)
        calc_file = next(p for p in tmp_path.rglob("*_clc_*.log"))
        assert json.loads(calc_file.read_text().splitlines()[0])["msg"] == "normalized"


class TestPerfTiming:
    """Tests for timing helpers."""

    def test_context_data_is_logged(self, perf_records):
        with log_timing("normalize", extra={"rows": 3}) as ctx:
            ctx["sectors"] = 8

        record = perf_records[0]
        assert record.levelno == logging.DEBUG
        assert record.data["operation"] == "normalize"
        assert record.data["rows"] == 3
        assert record.data["sectors"] == 8

    def test_threshold_escalates_level(self, perf_records):
        with log_timing("slow", warn_threshold_ms=0, error_threshold_ms=10_000):
            pass

        assert perf_records[0].levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_timed_async(self, perf_records):
        @timed("ranking")
        async def rank():
            return 42

        assert await rank() == 42
        assert perf_records[0].data["operation"] == "ranking"
