"""Exception hierarchy for the spreadsheet-to-notes pipeline."""

from __future__ import annotations

from typing import Iterable


class SheetNotesError(Exception):
    """Base class for every failure raised by the pipeline."""


class ParseError(SheetNotesError):
    """The workbook bytes could not be parsed as a spreadsheet."""


class MissingFieldError(SheetNotesError):
    """A row record lacks one or more expected columns."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required columns: {', '.join(self.fields)}")


class NoMetadataBlockError(SheetNotesError):
    """The note has no usable `---` fenced frontmatter region."""


class TemplateNotFoundError(SheetNotesError):
    """The template path is absent or is not a file."""


class DuplicateDocumentError(SheetNotesError):
    """A document already exists at the target path."""


class DocumentCreationError(SheetNotesError):
    """A freshly created document could not be resolved."""


class InvalidDocumentNameError(SheetNotesError):
    """A row name is empty once unsafe characters are stripped."""
