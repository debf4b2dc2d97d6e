from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .config import DEFAULT_GENRE_MAP
from .errors import InvalidDocumentNameError, MissingFieldError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("Name", "Type", "Year", "Author", "Publisher", "Link")
AUTHOR_DELIMITER = ", "
# Per-component file name limit on common filesystems.
MAX_FILE_NAME_BYTES = 255

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
# Path separators, characters reserved on common filesystems, control characters.
_UNSAFE_NAME_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')
_WHITESPACE_RE = re.compile(r"\s+")


def parse_release(value: Any) -> Union[int, float]:
    """
    Parse a year cell as a base-10 integer from its leading digits.

    ``2008``, ``"2008"``, ``" 2008 "``, ``2008.0`` and ``"2008 (2nd ed.)"`` all give
    ``2008``. Anything without leading digits gives ``float("nan")``.
    """

    if isinstance(value, bool):
        return float("nan")
    if isinstance(value, int):
        return value
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        logger.warning("Year value %r is not numeric; storing NaN", value)
        return float("nan")
    return int(match.group(1), 10)


def split_authors(value: str) -> List[str]:
    return [segment.strip() for segment in value.split(AUTHOR_DELIMITER)]


def translate_genre(label: str, table: Mapping[str, str]) -> str:
    return table.get(label, label)


def _strip_name(name: str) -> str:
    return name.strip().strip(".").strip()


def sanitize_note_name(name: str) -> str:
    cleaned = _UNSAFE_NAME_RE.sub("", _WHITESPACE_RE.sub(" ", name))
    return _strip_name(_WHITESPACE_RE.sub(" ", cleaned))


def truncate_utf8(text: str, max_bytes: int) -> str:
    """Cut ``text`` to at most ``max_bytes`` UTF-8 bytes without splitting a character."""

    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max(max_bytes, 0)].decode("utf-8", errors="ignore")


def note_file_name(name: Any, extension: str = ".md") -> str:
    """
    ``"Clean Code"`` -> ``"Clean Code.md"``, with unsafe characters removed.

    Long names are shortened so the file name, extension included, fits in
    ``MAX_FILE_NAME_BYTES`` UTF-8 bytes.
    """

    cleaned = sanitize_note_name(str(name))
    budget = MAX_FILE_NAME_BYTES - len(extension.encode("utf-8"))
    if len(cleaned.encode("utf-8")) > budget:
        cleaned = _strip_name(truncate_utf8(cleaned, budget))
        logger.warning("Name %r is too long for a file name; using %r", name, cleaned)
    if not cleaned:
        logger.error("Name %r is empty after sanitizing", name)
        raise InvalidDocumentNameError(f"Name {name!r} does not yield a usable file name.")
    return f"{cleaned}{extension}"


@dataclass
class NoteFields:
    name: str
    metadata: Dict[str, Any]
    body: str


@dataclass
class FieldTranslator:
    """
    Maps a spreadsheet row onto note frontmatter fields.

    ``created`` is taken from ``clock`` at translation time unless a fixed
    ``created_override`` is given.
    """

    translation_table: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(DEFAULT_GENRE_MAP)))
    default_status: str = "todo"
    extension: str = ".md"
    timestamp_format: str = "%Y-%m-%d %H:%M"
    created_override: Optional[str] = None
    clock: Callable[[], datetime] = datetime.now

    def created_timestamp(self) -> str:
        if self.created_override is not None:
            return self.created_override
        return self.clock().strftime(self.timestamp_format)

    def note_name(self, row: Mapping[str, Any]) -> str:
        """File name for the row's note; only the ``Name`` column is needed."""

        if "Name" not in row:
            logger.error("Row has no Name column (has: %s)", ", ".join(row))
            raise MissingFieldError(["Name"])
        return note_file_name(str(row["Name"]), self.extension)

    def translate(self, row: Mapping[str, Any]) -> NoteFields:
        missing = [col for col in REQUIRED_COLUMNS if col not in row]
        if missing:
            logger.error("Row is missing columns %s (has: %s)", missing, ", ".join(row))
            raise MissingFieldError(missing)

        title = str(row["Name"])
        metadata: Dict[str, Any] = {
            "title": title,
            "created": self.created_timestamp(),
            "genre": [translate_genre(str(row["Type"]), self.translation_table)],
            "release": parse_release(row["Year"]),
            "authors": split_authors(str(row["Author"])),
            "publishers": [str(row["Publisher"])],
            "rating": "",
            "status": self.default_status,
        }
        return NoteFields(
            name=self.note_name(row),
            metadata=metadata,
            body=str(row["Link"]),
        )
