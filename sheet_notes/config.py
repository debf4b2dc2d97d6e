from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_optional(value: str | None) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


@dataclass
class Settings:
    vault_dir: Path
    template_path: str
    notes_folder: str
    note_extension: str
    genre_map_path: Path
    default_status: str
    created_override: Optional[str]
    timestamp_format: str = "%Y-%m-%d %H:%M"
    stop_on_error: bool = False
    log_level: str = "INFO"


# Source category label -> Korean label used in the vault.
DEFAULT_GENRE_MAP: Dict[str, str] = {
    "Algorithm": "알고리즘",
    "Data Engineering": "데이터",
    "Engineering": "엔지니어링",
    "Essay": "에세이",
    "Hardware": "하드웨어",
    "Infrastructure": "인프라",
    "Language": "언어",
    "Math": "수학",
    "Network": "네트워크",
    "Quantum": "양자",
    "Robotics": "로보틱스",
    "Security": "보안",
    "System": "시스템",
}


def load_settings() -> Settings:
    return Settings(
        vault_dir=Path(os.getenv("VAULT_DIR", ".")),
        template_path=os.getenv("TEMPLATE_PATH", "templates/book.md"),
        notes_folder=os.getenv("NOTES_FOLDER", ""),
        note_extension=os.getenv("NOTE_EXTENSION", ".md"),
        genre_map_path=Path(os.getenv("GENRE_MAP_PATH", "config/genre_map.yaml")),
        default_status=os.getenv("DEFAULT_STATUS", "todo"),
        created_override=_parse_optional(os.getenv("CREATED_OVERRIDE")),
        timestamp_format=os.getenv("TIMESTAMP_FORMAT", "%Y-%m-%d %H:%M"),
        stop_on_error=_parse_bool(os.getenv("STOP_ON_ERROR"), False),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def load_translation_table(path: Path = Path("config/genre_map.yaml")) -> Mapping[str, str]:
    """
    Return the read-only genre translation table.

    Entries from the YAML file at ``path`` override the built-in defaults; a
    missing file leaves the defaults as they are.
    """

    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Translation table at {path} must be a YAML mapping of label -> label.")
    merged = {**DEFAULT_GENRE_MAP, **{str(k): str(v) for k, v in data.items()}}
    return MappingProxyType(merged)
