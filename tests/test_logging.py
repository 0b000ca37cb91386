"""Tests for the logging module."""

import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from snaprotate.logging.logger_setup import (
    LoggerConfigError,
    LoggingConfig,
    configure_logging,
    create_logging_config,
    validate_log_level,
)


class TestLoggerSetup:
    """Test cases for logger setup functionality."""

    def test_validate_log_level_valid(self) -> None:
        """Test that valid log levels are accepted."""
        assert validate_log_level("DEBUG") == logging.DEBUG
        assert validate_log_level("info") == logging.INFO
        assert validate_log_level("WARNING") == logging.WARNING
        assert validate_log_level("ERROR") == logging.ERROR
        assert validate_log_level("CRITICAL") == logging.CRITICAL

    def test_validate_log_level_invalid(self) -> None:
        """Test that invalid log levels raise an exception."""
        with pytest.raises(LoggerConfigError):
            validate_log_level("INVALID_LEVEL")

    def test_logging_config_defaults(self) -> None:
        """Test LoggingConfig dataclass defaults."""
        config = LoggingConfig()

        assert config.log_name == "snaprotate"
        assert config.log_level == "INFO"
        assert config.console_level is None
        assert config.log_dir is None
        assert config.enable_file is False
        assert config.enable_console is True
        assert config.console_stream == "ext://sys.stdout"

    def test_enable_file_follows_log_dir(self) -> None:
        """Test that a log directory switches file logging on."""
        config = LoggingConfig(log_dir=Path("/custom/path"))

        assert config.enable_file is True

    def test_create_logging_config_console_only(self) -> None:
        """Test that no file handler is configured without a log directory."""
        logging_config = create_logging_config(LoggingConfig())

        handlers = logging_config["handlers"]
        assert "console_handler" in handlers
        assert "file_handler" not in handlers
        assert handlers["console_handler"]["stream"] == "ext://sys.stdout"
        assert logging_config["loggers"]["snaprotate"]["propagate"] is False

    def test_create_logging_config_with_file(self) -> None:
        """Test logging configuration with a rotating file handler."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config = LoggingConfig(log_dir=Path(temp_dir), enable_console=False)
            logging_config = create_logging_config(config)

            handlers = logging_config["handlers"]
            assert "file_handler" in handlers
            assert "console_handler" not in handlers
            assert (
                handlers["file_handler"]["class"]
                == "logging.handlers.RotatingFileHandler"
            )
            assert handlers["file_handler"]["filename"] == str(
                Path(temp_dir) / "snaprotate.log",
            )

    def test_console_level_separate_from_file_level(self) -> None:
        """Test that console and file handlers get their own levels."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config = LoggingConfig(
                log_level="INFO",
                console_level="WARNING",
                log_dir=Path(temp_dir),
            )
            logging_config = create_logging_config(config)

            handlers = logging_config["handlers"]
            assert handlers["file_handler"]["level"] == logging.INFO
            assert handlers["console_handler"]["level"] == logging.WARNING
            assert logging_config["loggers"]["snaprotate"]["level"] == logging.INFO

    def test_debug_console_uses_standard_format(self) -> None:
        """Test that debug output on the console carries timestamps."""
        logging_config = create_logging_config(LoggingConfig(log_level="DEBUG"))

        assert logging_config["handlers"]["console_handler"]["formatter"] == "standard"

    def test_log_dir_creation_failure(self) -> None:
        """Test that a log directory which cannot be created raises."""
        config = LoggingConfig(log_dir=Path("/invalid/path"))

        with (
            patch(
                "pathlib.Path.mkdir",
                side_effect=PermissionError("Permission denied"),
            ),
            pytest.raises(LoggerConfigError, match="Failed to create log directory"),
        ):
            create_logging_config(config)

    def test_configure_logging_basic(self) -> None:
        """Test basic logging configuration."""
        logger = configure_logging(LoggingConfig(log_name="test_logger"))

        assert logger.name == "test_logger"
        assert logger.level == logging.INFO

    def test_configure_logging_with_file(self) -> None:
        """Test logging configuration with file output."""
        with tempfile.TemporaryDirectory() as temp_dir:
            logger = configure_logging(
                LoggingConfig(
                    log_name="test_file_logger",
                    log_dir=Path(temp_dir),
                    enable_console=False,
                ),
            )
            logger.info("rotation finished")

            log_files = list(Path(temp_dir).glob("*.log"))
            assert len(log_files) == 1
            assert log_files[0].name == "test_file_logger.log"
            assert "rotation finished" in log_files[0].read_text()

    def test_configure_logging_with_custom_filename(self) -> None:
        """Test logging configuration with custom filename."""
        with tempfile.TemporaryDirectory() as temp_dir:
            configure_logging(
                LoggingConfig(
                    log_name="custom_filename",
                    log_filename="my_custom.log",
                    log_dir=Path(temp_dir),
                    enable_console=False,
                ),
            )

            log_files = list(Path(temp_dir).glob("*.log"))
            assert len(log_files) == 1
            assert log_files[0].name == "my_custom.log"

    def test_configure_logging_fallback(self) -> None:
        """Test fallback to basic configuration when the log directory fails."""
        config = LoggingConfig(log_name="error_test", log_dir=Path("/invalid/path"))

        with patch(
            "pathlib.Path.mkdir",
            side_effect=PermissionError("Permission denied"),
        ):
            logger = configure_logging(config)

        assert logger.name == "error_test"

    def test_child_loggers_use_configured_handlers(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that module loggers below the application logger are printed."""
        configure_logging(LoggingConfig(console_level="WARNING"))

        logging.getLogger("snaprotate.rotation.inventory").warning("odd directory")

        assert "odd directory" in capsys.readouterr().out

    def test_logging_levels(self) -> None:
        """Test different logging levels."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logger = configure_logging(
                LoggingConfig(log_name=f"{level.lower()}_logger", log_level=level),
            )
            assert logger.level == getattr(logging, level)

    def test_logging_formatters(self) -> None:
        """Test that formatters are properly configured."""
        formatters = create_logging_config(LoggingConfig())["formatters"]

        assert formatters["brief"]["format"] == "%(message)s"
        assert "%(asctime)s" in formatters["standard"]["format"]
        assert "%(levelname)s" in formatters["standard"]["format"]
        assert "%(lineno)d" in formatters["detailed"]["format"]


if __name__ == "__main__":
    pytest.main([__file__])
