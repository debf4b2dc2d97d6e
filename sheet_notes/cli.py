from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import load_settings, load_translation_table
from .errors import ParseError
from .pipeline import NotePipeline, RowResult, summarize
from .store import FileSystemDocumentStore
from .translate import FieldTranslator


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create one Markdown note per spreadsheet row from a template.")
    parser.add_argument("workbook", help="Excel workbook (.xlsx) to import")
    parser.add_argument("--vault", help="Vault directory (default: VAULT_DIR or .)")
    parser.add_argument("--template", help="Template note, relative to the vault (default: TEMPLATE_PATH)")
    parser.add_argument("--folder", help="Folder for generated notes, relative to the vault")
    parser.add_argument("--genre-map", help="YAML file overriding the genre translation table")
    parser.add_argument("--stop-on-error", action="store_true", help="Abort on the first failing row")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Enable debug logging")
    return parser.parse_args(argv)


def report_result(result: RowResult) -> None:
    if result.ok:
        print(f"[CREATED] {result.note_path}")
    else:
        print(f"[FAILED] row {result.sheet_row}: {result.error}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    level = logging.DEBUG if args.verbose > 0 else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")

    if args.vault:
        settings.vault_dir = Path(args.vault)
    if args.template:
        settings.template_path = args.template
    if args.folder is not None:
        settings.notes_folder = args.folder
    if args.genre_map:
        settings.genre_map_path = Path(args.genre_map)
    if args.stop_on_error:
        settings.stop_on_error = True

    translator = FieldTranslator(
        translation_table=load_translation_table(settings.genre_map_path),
        default_status=settings.default_status,
        extension=settings.note_extension,
        timestamp_format=settings.timestamp_format,
        created_override=settings.created_override,
    )
    pipeline = NotePipeline(
        FileSystemDocumentStore(settings.vault_dir),
        translator,
        template_path=settings.template_path,
        notes_folder=settings.notes_folder,
        stop_on_error=settings.stop_on_error,
    )

    workbook = Path(args.workbook)
    try:
        blob = workbook.read_bytes()
    except OSError as exc:
        logging.error("Cannot read %s: %s", workbook, exc)
        return 1
    try:
        results = pipeline.import_workbook(blob, on_result=report_result)
    except ParseError as exc:
        logging.error("Cannot import %s: %s", workbook, exc)
        return 1
    except Exception as exc:
        # Only reachable with --stop-on-error; rows up to the failure were already reported.
        print(f"[STOPPED] {exc}")
        return 1

    summary = summarize(results)
    print(f"[DONE] {summary['created']} created, {summary['failed']} failed ({summary['total']} rows).")
    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
