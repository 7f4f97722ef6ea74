from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import config_constants

# Re-exported for backward compatibility
DEFAULT_LOG_LEVEL = config_constants.DEFAULT_LOG_LEVEL
DEFAULT_TIMEOUT_SECONDS = config_constants.DEFAULT_TIMEOUT_SECONDS
DEFAULT_USER_AGENT = config_constants.DEFAULT_USER_AGENT
DEFAULT_JSON_INDENT = config_constants.DEFAULT_JSON_INDENT
MIN_TIMEOUT_SECONDS = config_constants.MIN_TIMEOUT_SECONDS
MIN_JSON_INDENT = config_constants.MIN_JSON_INDENT


class ParserOptions(BaseModel):
    """Tokenizer options applied before events reach the document builder.

    Attributes:
        trim: Strip whitespace around each delivered text fragment.
        lowercase: Lowercase tag and attribute names. The dispatch tables are
            keyed by lowercase names, so camelCase tags such as ``pubDate``
            only match while this is enabled.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    trim: bool = True
    lowercase: bool = True


class Config(BaseModel):
    """Configuration model for the ``podfeed`` command line.

    Attributes:
        source: Feed URL (http/https) or local file path.
        parser: Options forwarded to the feed parser.
        user_agent: HTTP User-Agent header for feed downloads.
        timeout: Request timeout in seconds (minimum: 1).
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path for file output.
        output: Optional path for the JSON document. Stdout when unset.
        indent: JSON indentation. ``None`` writes a single line.

    Example:
        >>> cfg = Config(source="https://example.com/feed.xml", timeout=10)
        >>> cfg.parser.trim
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    source: Optional[str] = Field(default=None, alias="feed")
    parser: ParserOptions = Field(default_factory=ParserOptions)
    user_agent: str = DEFAULT_USER_AGENT
    timeout: int = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=MIN_TIMEOUT_SECONDS)
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    output: Optional[str] = None
    indent: Optional[int] = Field(default=DEFAULT_JSON_INDENT, ge=MIN_JSON_INDENT)

    @field_validator("source", mode="before")
    @classmethod
    def _strip_source(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_LOG_LEVEL
        level = str(value).strip().upper()
        if not isinstance(getattr(logging, level, None), int):
            raise ValueError(f"Invalid log level: {value}")
        return level


def load_config_file(path: str) -> Dict[str, Any]:
    """Load configuration from a JSON or YAML file.

    The file format is auto-detected from the file extension (`.json`, `.yaml`, or `.yml`).
    The returned dictionary can be unpacked into the `Config` constructor.

    Args:
        path: Path to configuration file. Supports tilde expansion.

    Returns:
        Dict[str, Any]: Configuration values from the file.

    Raises:
        ValueError: If the path is empty or missing, the format is unsupported,
            parsing fails, or the top level is not a mapping.

    Example:
        >>> cfg = Config(**load_config_file("podfeed.yaml"))
    """
    if not path:
        raise ValueError("Config path cannot be empty")

    cfg_path = Path(path).expanduser()
    try:
        resolved = cfg_path.resolve()
    except (OSError, RuntimeError) as exc:
        raise ValueError(f"Invalid config path: {path} ({exc})") from exc

    if not resolved.exists():
        raise ValueError(f"Config file not found: {resolved}")

    suffix = resolved.suffix.lower()
    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Failed to read config file {resolved}: {exc}") from exc

    if suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON config file {resolved}: {exc}") from exc
    elif suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML config file {resolved}: {exc}") from exc
    else:
        raise ValueError(f"Unsupported config file type: {resolved.suffix}")

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping/object at the top level")

    return data
