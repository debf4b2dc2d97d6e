from __future__ import annotations

import logging

from .errors import DocumentCreationError, TemplateNotFoundError
from .store import DocumentHandle, DocumentStore

logger = logging.getLogger(__name__)


def create_note_from_template(store: DocumentStore, template_path: str, note_path: str) -> DocumentHandle:
    """Create ``note_path`` seeded with the template's content and return its handle."""

    template = store.resolve(template_path)
    if template is None or not template.is_file:
        logger.error("Template %s is missing or not a file", template_path)
        raise TemplateNotFoundError(f"template is not a file: {template_path}")

    template_contents = store.read(template)
    try:
        store.create(note_path, template_contents)
    except Exception as exc:
        logger.error("Could not create %s from %s: %s", note_path, template_path, exc)
        raise

    note = store.resolve(note_path)
    if note is None or not note.is_file:
        logger.error("Created note %s could not be resolved", note_path)
        raise DocumentCreationError(f"note is not a file after creation: {note_path}")
    logger.debug("Created %s from template %s", note.path, template_path)
    return note
