from __future__ import annotations

import logging
from io import StringIO

import omikuji.logging.init
from omikuji.logging.init import LabeledFormatter, get_logger, log_summary, reset_logging, setup_logging


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    captured = StringIO()
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(25, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger, captured


def test_setup_logging_creates_logger_with_labeled_formatter():
    reset_logging()
    logger = setup_logging()
    assert logger.name == "omikuji"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)


def test_logging_labeled_prefixes():
    logger, captured = _capture("test_omikuji_labels")
    logger.debug("d")
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "DEBUG d",
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_setup_logging_idempotent():
    reset_logging()
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert get_logger() is logger1


def test_log_summary_convenience_function():
    logger, captured = _capture("omikuji")
    omikuji.logging.init._logger = logger
    try:
        log_summary("fortunes=3 rows=5 blank=1 invalid=1 header=ok found=yes source=x.csv")
    finally:
        reset_logging()
    assert captured.getvalue().strip() == (
        "SUMMARY fortunes=3 rows=5 blank=1 invalid=1 header=ok found=yes source=x.csv"
    )


def test_module_loggers_propagate_into_app_logger():
    logger, captured = _capture("omikuji")
    logging.getLogger("omikuji.dataset.mapper").debug("row 3: id/title missing, skipped")
    assert "DEBUG row 3: id/title missing, skipped" in captured.getvalue()
    reset_logging()
