from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional

from .errors import DuplicateDocumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentHandle:
    """Vault-relative reference to a stored file or folder."""

    path: str
    is_file: bool


class DocumentStore(ABC):
    @abstractmethod
    def resolve(self, path: str) -> Optional[DocumentHandle]:
        raise NotImplementedError

    @abstractmethod
    def read(self, handle: DocumentHandle) -> str:
        raise NotImplementedError

    @abstractmethod
    def create(self, path: str, initial_text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def overwrite(self, handle: DocumentHandle, text: str) -> None:
        raise NotImplementedError


def normalize_vault_path(path: str) -> str:
    """Collapse a vault path to ``a/b/c.md`` form; reject anything leaving the vault."""

    pure = PurePosixPath(str(path).replace("\\", "/"))
    if pure.is_absolute() or ".." in pure.parts:
        raise ValueError(f"Path escapes the vault: {path!r}")
    parts = [part for part in pure.parts if part not in ("", ".")]
    if not parts:
        raise ValueError("Empty vault path.")
    return "/".join(parts)


class FileSystemDocumentStore(DocumentStore):
    """Document store backed by a vault directory on disk."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _full_path(self, path: str) -> Path:
        return self.root.joinpath(*normalize_vault_path(path).split("/"))

    def resolve(self, path: str) -> Optional[DocumentHandle]:
        full = self._full_path(path)
        if not full.exists():
            return None
        return DocumentHandle(path=normalize_vault_path(path), is_file=full.is_file())

    def read(self, handle: DocumentHandle) -> str:
        with self._full_path(handle.path).open("r", encoding="utf-8", newline="") as f:
            return f.read()

    def create(self, path: str, initial_text: str) -> None:
        full = self._full_path(path)
        if full.exists():
            raise DuplicateDocumentError(f"Document already exists: {normalize_vault_path(path)}")
        full.parent.mkdir(parents=True, exist_ok=True)
        # "x" mode fails instead of truncating a file created since the check.
        try:
            with full.open("x", encoding="utf-8", newline="") as f:
                f.write(initial_text)
        except FileExistsError as exc:
            raise DuplicateDocumentError(f"Document already exists: {normalize_vault_path(path)}") from exc
        logger.debug("Created %s", full)

    def overwrite(self, handle: DocumentHandle, text: str) -> None:
        full = self._full_path(handle.path)
        with full.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.debug("Wrote %d chars to %s", len(text), full)
