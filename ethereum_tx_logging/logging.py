"""
Logging configuration for the transaction codec, its command line and its test sessions.

The codec itself only emits `DEBUG` and `VERBOSE` records; handlers are attached either
by `configure_logging` (used by the `ethtx` command line) or by the pytest hooks below,
which write a per-session log file with UTC timestamps next to the captured output.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Union, cast

import pytest
from _pytest.terminal import TerminalReporter

VERBOSE_LEVEL = 15  # Between DEBUG (10) and INFO (20)
FAIL_LEVEL = 35  # Between WARNING (30) and ERROR (40)

logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")
logging.addLevelName(FAIL_LEVEL, "FAIL")

LEVEL_NAMES = ("DEBUG", "VERBOSE", "INFO", "WARNING", "FAIL", "ERROR", "CRITICAL")
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

session_file_handler: Optional[logging.FileHandler] = None


class TxLogger(logging.Logger):
    """Logger with the extra `verbose` (15) and `fail` (35) levels."""

    def verbose(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """
        Log a message at VERBOSE level.

        Used for the encodings and hashes produced by the codec, which are too noisy
        for INFO but more useful than the field-by-field DEBUG output.
        """
        if self.isEnabledFor(VERBOSE_LEVEL):
            self._log(VERBOSE_LEVEL, msg, args, **kwargs)

    def fail(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at FAIL level."""
        if self.isEnabledFor(FAIL_LEVEL):
            self._log(FAIL_LEVEL, msg, args, **kwargs)


logging.setLoggerClass(TxLogger)


def get_logger(name: str) -> TxLogger:
    """Return the logger `name`, typed with the custom levels."""
    return cast(TxLogger, logging.getLogger(name))


logger = get_logger(__name__)


def parse_log_level(value: Union[int, str]) -> int:
    """
    Return the numeric level for a level name or number.

    Names are case-insensitive and include the custom `VERBOSE` and `FAIL` levels.
    """
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    raise ValueError(
        f"Invalid log level '{value}', expected one of {', '.join(LEVEL_NAMES)} or a number"
    )


class UTCFormatter(logging.Formatter):
    """Formatter stamping records in UTC with millisecond precision."""

    def formatTime(self, record, datefmt=None):  # noqa: D102,N802
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return created.isoformat(sep=" ", timespec="milliseconds")


class ColorFormatter(UTCFormatter):
    """`UTCFormatter` that colors the level name with ANSI escapes, except inside Docker."""

    running_in_docker: ClassVar[bool] = Path("/.dockerenv").exists()

    level_colors: ClassVar[Dict[int, str]] = {
        logging.DEBUG: "37",  # Gray
        VERBOSE_LEVEL: "36",  # Cyan
        logging.INFO: "36",  # Cyan
        logging.WARNING: "33",  # Yellow
        FAIL_LEVEL: "35",  # Magenta
        logging.ERROR: "31",  # Red
        logging.CRITICAL: "41",  # Red background
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, coloring its level name."""
        color = self.level_colors.get(record.levelno)
        if self.running_in_docker or color is None:
            return super().format(record)
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"\033[{color}m{record.levelname}\033[0m"
        return super().format(colored)


def configure_logging(
    log_level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    use_color: Optional[bool] = None,
    log_format: str = DEFAULT_LOG_FORMAT,
) -> Optional[logging.FileHandler]:
    """
    Replace the root logger's handlers with a console handler and an optional file.

    The console handler writes to stderr; stdout is left to command output. Colors
    default to on outside of Docker. Returns the file handler, if one was created.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(parse_log_level(log_level))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler: Optional[logging.FileHandler] = None
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="w")
        file_handler.setFormatter(UTCFormatter(fmt=log_format))
        root_logger.addHandler(file_handler)

    if console:
        if use_color is None:
            use_color = not ColorFormatter.running_in_docker
        console_handler = logging.StreamHandler(sys.stderr)
        formatter_class = ColorFormatter if use_color else UTCFormatter
        console_handler.setFormatter(formatter_class(fmt=log_format))
        root_logger.addHandler(console_handler)

    logger.verbose(f"Logging at level {logging.getLevelName(root_logger.level)}")
    return file_handler


def session_log_path(argv0: str, now: Optional[datetime] = None) -> Path:
    """Return `logs/<program>-<UTC timestamp>.log` for the running program."""
    program = Path(argv0).stem
    if program in ("", "-c", "__main__"):
        program = "pytest"
    if now is None:
        now = datetime.now(timezone.utc)
    return Path("logs") / f"{program}-{now:%Y%m%d-%H%M%S}.log"


def log_to_session_file(level: int, msg: str) -> None:
    """Write a record to the session log file only, keeping it off the console."""
    if session_file_handler is None or not logger.isEnabledFor(level):
        return
    record = logger.makeRecord(logger.name, level, __file__, 0, msg, (), None)
    session_file_handler.handle(record)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add the `--tx-log-level` command line option."""
    group = parser.getgroup("ethereum_tx", "Logging of the transaction codec")
    group.addoption(
        "--tx-log-level",  # --log-level belongs to pytest's own logging plugin
        action="store",
        default="INFO",
        type=parse_log_level,
        dest="tx_log_level",
        help=(
            "Level of the session log: DEBUG, VERBOSE, INFO, WARNING, FAIL, ERROR, "
            "CRITICAL or a number. Default: INFO."
        ),
    )


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """Send the session's log records to a new file under `logs/`."""
    global session_file_handler

    log_file = session_log_path(sys.argv[0])
    config.option.tx_log_file_path = log_file
    session_file_handler = configure_logging(config.getoption("tx_log_level"), log_file=log_file)


def pytest_report_header(config: pytest.Config) -> List[str]:
    """Show the session log file in the report header."""
    log_file = getattr(config.option, "tx_log_file_path", None)
    return [f"Log file: {log_file}"] if log_file else []


def pytest_terminal_summary(terminalreporter: TerminalReporter, exitstatus: int) -> None:
    """Repeat the session log file location after the test summary."""
    config = terminalreporter.config
    log_file = getattr(config.option, "tx_log_file_path", None)
    if log_file and not config.option.collectonly:
        terminalreporter.write_sep("-", f"Log file: {Path(log_file).resolve()}", yellow=True)


def pytest_runtest_logstart(nodeid: str, location: tuple[str, int, str]) -> None:
    """Mark the start of a test in the session log file."""
    log_to_session_file(logging.INFO, f"START TEST: {nodeid}")


def pytest_runtest_logreport(report: pytest.TestReport) -> None:
    """Record the outcome and duration of each test call in the session log file."""
    if report.when != "call":
        return
    level = logging.INFO
    if hasattr(report, "wasxfail"):
        outcome = "XFAIL" if report.skipped else "XPASS"
    elif report.failed:
        outcome, level = "FAILED", FAIL_LEVEL
    else:
        outcome = report.outcome.upper()
    log_to_session_file(level, f"{outcome} in {report.duration:.2f}s: {report.nodeid}")


def pytest_runtest_logfinish(nodeid: str, location: tuple[str, int, str]) -> None:
    """Mark the end of a test in the session log file."""
    log_to_session_file(logging.INFO, f"END TEST: {nodeid}")
