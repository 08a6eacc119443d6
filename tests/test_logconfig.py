import logging
from pathlib import Path

from ipexwallet.logconfig import build_logger_configuration, configure_logging


def test_configuration_names_log_file(tmp_path):
    config = build_logger_configuration(tmp_path, "wallet")
    assert config["globalLevel"] == logging.INFO
    assert len(config["loggers"]) == 1
    entry = config["loggers"][0]
    assert entry["type"] == "file"
    assert entry["level"] == logging.INFO
    assert Path(entry["filename"]) == tmp_path.absolute() / "wallet.log"


def test_configuration_path_is_absolute():
    config = build_logger_configuration("relative", "app")
    assert Path(config["loggers"][0]["filename"]).is_absolute()


def _close(logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_configure_writes_to_file(tmp_path):
    logger = configure_logging(tmp_path, "wallet")
    try:
        logger.info("hello log")
        logger.debug("hidden line")
        for handler in logger.handlers:
            handler.flush()
        content = (tmp_path / "wallet.log").read_text(encoding="utf-8")
        assert "hello log" in content
        assert "hidden line" not in content
    finally:
        _close(logger)


def test_configure_twice_keeps_one_handler(tmp_path):
    configure_logging(tmp_path, "wallet")
    logger = configure_logging(tmp_path, "wallet")
    try:
        assert len(logger.handlers) == 1
    finally:
        _close(logger)