from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .frontmatter import append_body, decode_frontmatter, encode_frontmatter
from .store import DocumentHandle, DocumentStore
from .tabular import FIRST_DATA_ROW, read_numbered_rows
from .template import create_note_from_template
from .translate import FieldTranslator

logger = logging.getLogger(__name__)


@dataclass
class RowResult:
    index: int
    note_path: Optional[str] = None
    error: Optional[Exception] = None
    row_number: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def sheet_row(self) -> int:
        if self.row_number is not None:
            return self.row_number
        return self.index + FIRST_DATA_ROW


def join_vault_path(folder: str, name: str) -> str:
    folder = folder.strip().strip("/")
    return f"{folder}/{name}" if folder else name


class NotePipeline:
    """
    Turns spreadsheet rows into notes inside a document store.

    Each row is materialized from the template, its frontmatter is merged with
    the translated fields, the body is appended and the note is written back
    in a single overwrite. Only the note name is derived before the template
    is copied, so a row that fails later (e.g. a missing ``Author``) leaves a
    note with template content only; nothing is rolled back.
    """

    def __init__(
        self,
        store: DocumentStore,
        translator: FieldTranslator,
        template_path: str = "templates/book.md",
        notes_folder: str = "",
        stop_on_error: bool = False,
    ) -> None:
        self.store = store
        self.translator = translator
        self.template_path = template_path
        self.notes_folder = notes_folder
        self.stop_on_error = stop_on_error

    def note_path_for(self, name: str) -> str:
        return join_vault_path(self.notes_folder, name)

    def process_row(self, row: Mapping[str, Any]) -> DocumentHandle:
        note_path = self.note_path_for(self.translator.note_name(row))

        note = create_note_from_template(self.store, self.template_path, note_path)
        content = self.store.read(note)
        frontmatter = decode_frontmatter(content)
        fields = self.translator.translate(row)
        frontmatter.update(fields.metadata)

        updated = append_body(encode_frontmatter(content, frontmatter), fields.body)
        try:
            self.store.overwrite(note, updated)
        except Exception as exc:
            logger.error("Failed to write %s: %s", note.path, exc)
            raise
        logger.info("Wrote note %s", note.path)
        return note

    def process_rows(
        self,
        rows: Iterable[Mapping[str, Any]],
        row_numbers: Optional[Iterable[int]] = None,
        on_result: Optional[Callable[[RowResult], None]] = None,
    ) -> List[RowResult]:
        """
        Process every row independently and return one result per row.

        ``on_result`` sees each result as soon as its row finishes, including
        the failing row when ``stop_on_error`` aborts the batch.
        """

        numbers = iter(row_numbers) if row_numbers is not None else None
        results: List[RowResult] = []
        for index, row in enumerate(rows):
            row_number = next(numbers) if numbers is not None else index + FIRST_DATA_ROW
            try:
                note = self.process_row(row)
            except Exception as exc:
                logger.error("Sheet row %d failed: %s", row_number, exc)
                result = RowResult(index=index, error=exc, row_number=row_number)
            else:
                result = RowResult(index=index, note_path=note.path, row_number=row_number)
            results.append(result)
            if on_result is not None:
                on_result(result)
            if not result.ok and self.stop_on_error:
                raise result.error
        return results

    def import_workbook(
        self,
        blob: Any,
        on_result: Optional[Callable[[RowResult], None]] = None,
    ) -> List[RowResult]:
        numbered: List[Tuple[int, Dict[str, Any]]] = read_numbered_rows(blob)
        results = self.process_rows(
            [record for _, record in numbered],
            row_numbers=[number for number, _ in numbered],
            on_result=on_result,
        )
        summary = summarize(results)
        logger.info("Imported %(created)d note(s), %(failed)d failure(s)", summary)
        return results


def summarize(results: Iterable[RowResult]) -> Dict[str, int]:
    summary = {"total": 0, "created": 0, "failed": 0}
    for result in results:
        summary["total"] += 1
        summary["created" if result.ok else "failed"] += 1
    return summary
