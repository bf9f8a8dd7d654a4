import logging

from stock_analytics.logger import LOG_FILENAME, setup_logger


def test_setup_logger_writes_console_and_file(tmp_path):
    logger = setup_logger("stock_analytics.test_file", log_dir=tmp_path)
    logger.info("snapshot ready")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    assert "snapshot ready" in (tmp_path / LOG_FILENAME).read_text(encoding="utf-8")


def test_setup_logger_is_idempotent_and_updates_level(tmp_path):
    name = "stock_analytics.test_repeat"
    first = setup_logger(name, log_dir=tmp_path)
    second = setup_logger(name, logging.DEBUG, log_dir=tmp_path)

    assert first is second
    assert len(second.handlers) == 2
    assert second.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in second.handlers)
