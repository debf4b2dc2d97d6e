"""
Spreadsheet rows -> Markdown notes with YAML frontmatter.

Reads the first sheet of a workbook, translates each row into frontmatter
fields, and writes one note per row from a template into a vault.
"""

from .config import DEFAULT_GENRE_MAP, Settings, load_settings, load_translation_table  # noqa: F401
from .errors import (  # noqa: F401
    DocumentCreationError,
    DuplicateDocumentError,
    InvalidDocumentNameError,
    MissingFieldError,
    NoMetadataBlockError,
    ParseError,
    SheetNotesError,
    TemplateNotFoundError,
)
from .frontmatter import append_body, decode_frontmatter, encode_frontmatter  # noqa: F401
from .pipeline import NotePipeline, RowResult, summarize  # noqa: F401
from .store import DocumentHandle, DocumentStore, FileSystemDocumentStore  # noqa: F401
from .tabular import read_numbered_rows, read_rows, read_rows_from_path  # noqa: F401
from .template import create_note_from_template  # noqa: F401
from .translate import FieldTranslator, NoteFields, note_file_name, parse_release  # noqa: F401

__all__ = [
    "DEFAULT_GENRE_MAP",
    "Settings",
    "load_settings",
    "load_translation_table",
    "DocumentCreationError",
    "DuplicateDocumentError",
    "InvalidDocumentNameError",
    "MissingFieldError",
    "NoMetadataBlockError",
    "ParseError",
    "SheetNotesError",
    "TemplateNotFoundError",
    "append_body",
    "decode_frontmatter",
    "encode_frontmatter",
    "NotePipeline",
    "RowResult",
    "summarize",
    "DocumentHandle",
    "DocumentStore",
    "FileSystemDocumentStore",
    "read_numbered_rows",
    "read_rows",
    "read_rows_from_path",
    "create_note_from_template",
    "FieldTranslator",
    "NoteFields",
    "note_file_name",
    "parse_release",
]
