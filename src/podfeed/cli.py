"""Command-line interface for podfeed."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence
from urllib.parse import urlparse

from pydantic import ValidationError

from . import __version__, config, models, rss_parser
from .exceptions import FeedError

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_NOISY_HTTP_LOGGERS = ("urllib3", "urllib3.connectionpool", "urllib3.connection", "urllib3.util")


def apply_log_level(level: str, log_file: Optional[str] = None) -> None:
    """Apply logging level to root logger and configure handlers.

    Args:
        level: Log level string (e.g., 'DEBUG', 'INFO', 'WARNING')
        log_file: Optional path to log file. If provided, logs will be written to both
                  console (stderr) and file.

    Raises:
        ValueError: If log level is invalid
        OSError: If log file cannot be created or written to
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(console_handler)
    else:
        for handler in root_logger.handlers:
            handler.setLevel(numeric_level)
    root_logger.setLevel(numeric_level)

    # Keep our debug output readable; urllib3 logs every connection at DEBUG
    if numeric_level <= logging.DEBUG:
        for logger_name in _NOISY_HTTP_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    if log_file:
        file_handler_exists = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
            for h in root_logger.handlers
        )
        if not file_handler_exists:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root_logger.addHandler(file_handler)
            _LOGGER.info("Logging to file: %s", log_file)


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments. Options left unset fall back to ``--config`` or defaults."""
    parser = argparse.ArgumentParser(
        prog="podfeed",
        description="Parse a podcast RSS feed into normalized JSON.",
    )
    parser.add_argument("source", nargs="?", help="Feed URL (http/https) or local file path")
    parser.add_argument("--config", help="Path to a JSON or YAML config file")
    parser.add_argument("--output", "-o", help="Write JSON here instead of stdout")
    parser.add_argument("--indent", type=int, help="JSON indentation (default: 2)")
    parser.add_argument(
        "--no-trim",
        dest="trim",
        action="store_false",
        default=None,
        help="Keep whitespace around text fragments",
    )
    parser.add_argument(
        "--no-lowercase",
        dest="lowercase",
        action="store_false",
        default=None,
        help="Match tag and attribute names case-sensitively",
    )
    parser.add_argument("--timeout", type=int, help="HTTP timeout in seconds")
    parser.add_argument("--user-agent", help="HTTP User-Agent header")
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--version", action="version", version=f"podfeed {__version__}")
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> config.Config:
    """Merge config-file values with CLI arguments; CLI arguments win."""
    payload: Dict[str, Any] = config.load_config_file(args.config) if args.config else {}

    parser_payload = dict(payload.pop("parser", None) or {})
    for key in ("trim", "lowercase"):
        value = getattr(args, key)
        if value is not None:
            parser_payload[key] = value

    overrides = {
        "source": args.source,
        "output": args.output,
        "indent": args.indent,
        "timeout": args.timeout,
        "user_agent": args.user_agent,
        "log_level": args.log_level,
        "log_file": args.log_file,
    }
    # The file may use the "feed" alias for the source
    if args.source is not None:
        payload.pop("feed", None)
    payload.update({key: value for key, value in overrides.items() if value is not None})
    payload["parser"] = parser_payload
    return config.Config(**payload)


def load_podcast(cfg: config.Config) -> models.Podcast:
    """Parse the configured source, downloading it first when it is a URL."""
    if cfg.source is None:
        raise ValueError("A feed URL or file path is required")
    if is_url(cfg.source):
        return rss_parser.fetch_and_parse_feed(
            cfg.source, cfg.parser, user_agent=cfg.user_agent, timeout=cfg.timeout
        )
    return rss_parser.parse_feed_file(cfg.source, cfg.parser)


def write_podcast(podcast: models.Podcast, cfg: config.Config) -> None:
    document = json.dumps(podcast.to_dict(mode="json"), indent=cfg.indent, ensure_ascii=False)
    if cfg.output:
        Path(cfg.output).write_text(document + "\n", encoding="utf-8")
        _LOGGER.info("Wrote %d episodes to %s", len(podcast.episodes), cfg.output)
    else:
        sys.stdout.write(document + "\n")


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    apply_log_level_fn: Optional[Callable[[str, Optional[str]], None]] = None,
    logger: Optional[logging.Logger] = None,
) -> int:
    """Entry point for the CLI; returns an exit status code."""
    log = logger or _LOGGER
    if apply_log_level_fn is None:
        apply_log_level_fn = apply_log_level

    args = parse_args(argv)
    try:
        cfg = _build_config(args)
    except ValidationError as exc:
        log.error("Invalid configuration: %s", exc)
        return 1
    except ValueError as exc:
        log.error("Error: %s", exc)
        return 1

    apply_log_level_fn(cfg.log_level, cfg.log_file)

    try:
        podcast = load_podcast(cfg)
    except ValueError as exc:
        log.error("Error: %s", exc)
        return 1
    except FeedError as exc:
        log.error("%s", exc)
        return 1
    except OSError as exc:
        log.error("Failed to read feed %s: %s", cfg.source, exc)
        return 1

    try:
        write_podcast(podcast, cfg)
    except OSError as exc:
        log.error("Failed to write %s: %s", cfg.output, exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry
    raise SystemExit(main())
