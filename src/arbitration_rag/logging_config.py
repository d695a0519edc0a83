"""Root logger setup for command-line entry points."""

from __future__ import annotations

import logging
import sys

_NOISY_LOGGERS = ("httpx", "httpcore", "sentence_transformers")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a timestamped stream handler.

    Third-party HTTP and model-loading loggers are held at WARNING so that
    per-request chatter does not drown out pipeline progress.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
