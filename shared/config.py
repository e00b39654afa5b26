import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv


DEFAULT_BATCH_SIZE = 2048
OUTPUT_FORMATS = ("text", "json")


@dataclass
class InspectorConfig:
    """Configuration for an inspection session."""

    database_path: str
    read_only: bool
    attach: Dict[str, str] = field(default_factory=dict)
    batch_size: int = DEFAULT_BATCH_SIZE
    output_format: str = "text"
    log_level: str = "WARNING"


def _parse_int(value: Optional[str], default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "y", "on")


def parse_attach_spec(value: Optional[str]) -> Dict[str, str]:
    """Parse ``alias=path`` pairs separated by commas.

    Entries without an alias use the file stem, as ATTACH does.
    """
    attach: Dict[str, str] = {}
    if not value:
        return attach
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        alias, sep, path = item.partition("=")
        if not sep:
            path = alias
            alias = os.path.splitext(os.path.basename(path))[0]
        attach[alias.strip()] = path.strip()
    return attach


def load_config() -> InspectorConfig:
    """Load configuration from environment variables."""
    load_dotenv()

    output_format = os.getenv("INSPECTOR_OUTPUT", "text").lower()
    if output_format not in OUTPUT_FORMATS:
        output_format = "text"
    batch_size = _parse_int(os.getenv("INSPECTOR_BATCH_SIZE"), DEFAULT_BATCH_SIZE)
    if batch_size <= 0:
        batch_size = DEFAULT_BATCH_SIZE

    config = InspectorConfig(
        database_path=os.getenv("INSPECTOR_DATABASE", ""),
        read_only=_parse_bool(os.getenv("INSPECTOR_READ_ONLY", "true"), True),
        attach=parse_attach_spec(os.getenv("INSPECTOR_ATTACH")),
        batch_size=batch_size,
        output_format=output_format,
        log_level=os.getenv("INSPECTOR_LOG_LEVEL", "WARNING").upper(),
    )
    return config


__all__ = ["InspectorConfig", "load_config", "parse_attach_spec", "DEFAULT_BATCH_SIZE"]
