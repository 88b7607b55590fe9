"""
Unified logging for the Hyperliquid exchange client

Every component (client, managers, resolver, transport, CLI) logs through a
loguru logger bound to a component id such as
``EXCHANGE:HYPERLIQUID:network=testnet``. Sinks are installed once per
process:

- Colored console output on stderr with the caller's module:function:line
- ``unified_history.log`` (rotated) and one ``session_<ts>.log`` per run,
  written to ``LOG_DIR`` (default ``<project>/logs``) unless LOG_TO_FILE=false
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger as _logger

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[short_name]}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level:<8} | "
    "{extra[component_id]:<35} | "
    "{message}"
)

SOURCE_COLUMN_WIDTH = 45

_console_sink_id: Optional[int] = None
_console_level: Optional[str] = None


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def _logs_dir() -> Path:
    configured = os.getenv("LOG_DIR")
    if configured:
        return Path(configured)
    return Path(__file__).parent.parent / "logs"


def _with_short_name(record) -> bool:
    """Console filter: only component records, with a right-aligned source column."""
    if not record["extra"].get("component_id"):
        return False

    module_name = record.get("module") or record.get("name", "")
    suffix = f":{record['function']}:{record['line']}"
    room = SOURCE_COLUMN_WIDTH - len(suffix)
    if room <= 3:
        module_name = "..."
    elif len(module_name) > room:
        module_name = f"...{module_name[-(room - 3):]}"

    record["extra"]["short_name"] = f"{module_name + suffix:>{SOURCE_COLUMN_WIDTH}}"
    return True


def _with_component(record) -> bool:
    record["extra"].setdefault("component_id", "UNKNOWN")
    return True


def _add_console_sink(level: str) -> None:
    global _console_sink_id, _console_level
    _console_sink_id = _logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
        filter=_with_short_name,
        backtrace=True,
        diagnose=False,
    )
    _console_level = level


def console_level() -> Optional[str]:
    """Level the console sink currently prints at, or None before any logger exists."""
    return _console_level


def _install_sinks(level: str) -> None:
    """
    Install the console and file sinks the first time any logger is built.

    Later loggers asking for a more verbose level lower the console sink to
    that level. A less verbose request never raises it back, so one DEBUG
    logger keeps the console at DEBUG for the rest of the process.
    """
    if getattr(_logger, "_hl_sinks_installed", False):
        if LOG_LEVELS.index(level) < LOG_LEVELS.index(_console_level):
            _logger.remove(_console_sink_id)
            _add_console_sink(level)
        return

    _logger.remove()
    _add_console_sink(level)

    if _env_flag("LOG_TO_FILE", True):
        logs_dir = _logs_dir()
        logs_dir.mkdir(parents=True, exist_ok=True)
        session_ts = datetime.now().strftime("%Y%m%d_%H%M%S")

        _logger.add(
            str(logs_dir / "unified_history.log"),
            format=FILE_FORMAT,
            level="DEBUG",
            filter=_with_component,
            rotation="50 MB",
            retention=5,
            enqueue=True,  # Thread-safe writes
            catch=True,
        )
        _logger.add(
            str(logs_dir / f"session_{session_ts}.log"),
            format=FILE_FORMAT,
            level="DEBUG",
            filter=_with_component,
            enqueue=True,
            catch=True,
        )

    _logger._hl_sinks_installed = True


class UnifiedLogger:
    """
    Component logger with a fixed context prefix.

    Payload details go to DEBUG, submitted operations to INFO, retries to
    WARNING and failed calls to ERROR.
    """

    def __init__(
        self,
        component_type: str,  # "exchange", "core"
        component_name: str,  # "hyperliquid", "cli"
        context: Optional[Dict[str, Any]] = None,  # network, component, ...
        log_level: str = "INFO",
    ):
        self.component_type = component_type.upper()
        self.component_name = component_name.upper()
        self.context = context or {}
        self.log_level = log_level.upper() if log_level.upper() in LOG_LEVELS else "INFO"

        parts = [self.component_type, self.component_name]
        parts.extend(f"{key}={value}" for key, value in self.context.items())
        self.component_id = ":".join(parts)

        _install_sinks(self.log_level)
        self._logger = _logger.bind(component_id=self.component_id)

    # depth=1 makes the console show the real caller instead of this wrapper
    def debug(self, message: str, **kwargs):
        self._logger.opt(depth=1).debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self._logger.opt(depth=1).info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._logger.opt(depth=1).warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self._logger.opt(depth=1).error(message, **kwargs)


def get_logger(
    component_type: str,
    component_name: str,
    context: Optional[Dict[str, Any]] = None,
    log_level: Optional[str] = None,
) -> UnifiedLogger:
    """
    Create a component logger.

    Args:
        component_type: "exchange" or "core"
        component_name: Specific component, e.g. "hyperliquid" or "cli"
        context: Extra key/values appended to the component id
        log_level: Console level (defaults to env LOG_LEVEL or INFO); lowers the
            shared console sink when more verbose than its current level

    Examples:
        logger = get_logger("exchange", "hyperliquid", {"network": "testnet"})
        logger = get_logger("core", "cli")
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")
    return UnifiedLogger(component_type, component_name, context, log_level)


def get_exchange_logger(
    exchange_name: str,
    network: Optional[str] = None,
    log_level: Optional[str] = None,
    **context,
) -> UnifiedLogger:
    """Get logger for exchange clients."""
    ctx = {"network": network} if network else {}
    ctx.update(context)
    return get_logger("exchange", exchange_name, ctx, log_level)


def get_core_logger(module_name: str, **context) -> UnifiedLogger:
    """Get logger for core utilities."""
    return get_logger("core", module_name, context)
