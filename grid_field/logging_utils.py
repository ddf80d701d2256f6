from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "GridField"
LOG_DIR_ENV_VAR = "GRID_FIELD_LOG_DIR"
LOG_FILENAME = "grid-field.log"
_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def resolve_logs_dir(base_path: Optional[Path] = None, log_dir_name: str = "grid-field") -> Path:
    """
    Resolve the directory to store grid field logs.

    Strategy:
    - Prefer `$GRID_FIELD_LOG_DIR/<log_dir_name>` when the variable is set.
    - Fall back to XDG state/cache locations, then `<base_path or cwd>/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home)
    candidates.append(cache_home)
    candidates.append((base_path or Path.cwd()) / "logs")

    for base in candidates:
        target = base / log_dir_name
        try:
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def configure_logging(
    debug_enabled: bool,
    *,
    log_dir: Optional[Path] = None,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
) -> logging.Logger:
    """Attach one rotating file handler to the GridField logger and set its level.

    `retention` counts the live file plus its rotated backups. Calling again only
    updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
    for handler in logger.handlers:
        if getattr(handler, "_grid_field_handler", False):
            return logger

    target_dir = log_dir or resolve_logs_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        target_dir / LOG_FILENAME,
        maxBytes=max_bytes,
        backupCount=max(0, retention - 1),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    setattr(handler, "_grid_field_handler", True)
    logger.addHandler(handler)
    logger.debug("Logging to %s (level=%s)", handler.baseFilename, logging.getLevelName(logger.level))
    return logger
