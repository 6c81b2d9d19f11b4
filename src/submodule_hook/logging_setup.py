"""Loguru sink configuration for hook and CLI runs."""

import sys

from loguru import logger

from submodule_hook.config import HookConfig


def configure_logging(config: HookConfig) -> None:
    """Route loguru output to stderr and, optionally, a debug log file.

    Git shows hook stderr to the user, so the stderr sink stays quiet
    (WARNING) unless asked otherwise.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=config.log_level,
        format="<level>submodule-hook: {message}</level>",
    )
    if config.log_file is None:
        return
    try:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} [{level}] {name}:{function} {message}",
        )
    except OSError as e:
        logger.warning(f"Cannot write log file {config.log_file}: {e}; logging to stderr only")
