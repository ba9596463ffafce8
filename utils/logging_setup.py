"""
Logging configuration for command-line runs (arena tournaments, local servers).

Console output is always enabled; a log file is added when a run directory
is requested. Per-placement engine logs are demoted during long runs so that
match-level progress stays readable.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Tuple

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Loggers that report every single placement or pass
CHATTY_LOGGERS = ("engine.game",)


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    quiet_engine: bool = True,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure the root logger for a command-line run.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        level: Level for the root logger and its handlers
        log_file: Optional file that receives the same records as the console
        quiet_engine: Raise the engine's per-move loggers to WARNING
        format_string: Custom record format (defaults to DEFAULT_FORMAT)

    Returns:
        The configured root logger
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING if quiet_engine else logging.NOTSET)

    return root_logger


def create_run_directory(base_dir: Path, agent_names: Iterable[str] = ()) -> Path:
    """
    Create ``<base_dir>/<YYYYMMDD>_<HHMMSS>_<agent>_vs_<agent>/``.

    Falls back to ``arena`` as the suffix when no agent names are given.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = "_vs_".join(agent_names) or "arena"
    run_dir = Path(base_dir) / f"{timestamp}_{suffix}"
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def setup_arena_logging(
    base_dir: Path,
    agent_names: Iterable[str] = (),
    level: int = logging.INFO
) -> Tuple[Path, Path]:
    """
    Create a run directory and log the tournament into ``arena.log`` there.

    Returns:
        Tuple of (run_directory, log_file_path)
    """
    run_dir = create_run_directory(base_dir, agent_names)
    log_file = run_dir / "arena.log"
    configure_logging(level, log_file=log_file, quiet_engine=level > logging.DEBUG)
    return run_dir, log_file
