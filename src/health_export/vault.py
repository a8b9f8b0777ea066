"""Writes exported documents into a notes vault folder."""

import asyncio
import functools
from pathlib import Path

import structlog

from .config import ExportSettings
from .errors import ExportError, ExportFailureReason

logger = structlog.get_logger(__name__)

DEFAULT_SUBFOLDER = "Health"


class VaultWriter:
    """Persists one file per exported day under ``<vault>/<subfolder>``.

    Existing files with the same name are overwritten so re-exporting a day
    replaces its previous document.
    """

    def __init__(self, vault_dir: Path | str | None, subfolder: str = DEFAULT_SUBFOLDER) -> None:
        """Initialize the writer.

        Args:
            vault_dir: Vault root directory, or None when no vault is chosen.
            subfolder: Folder inside the vault that receives the files.
        """
        self._vault_dir = Path(vault_dir).expanduser() if vault_dir is not None else None
        self._subfolder = subfolder or DEFAULT_SUBFOLDER

    @classmethod
    def from_settings(cls, settings: ExportSettings) -> "VaultWriter":
        """Create a writer for the configured vault folder."""
        return cls(settings.vault_dir, settings.subfolder)

    @property
    def target_dir(self) -> Path | None:
        if self._vault_dir is None:
            return None
        return self._vault_dir / self._subfolder

    def export_path(self) -> str:
        """Human-readable destination, e.g. ``Notes/Health``."""
        if self._vault_dir is None:
            return self._subfolder
        return f"{self._vault_dir.name}/{self._subfolder}"

    def write_sync(self, filename: str, content: str) -> Path:
        """Write a document, creating the subfolder if needed.

        Args:
            filename: File name inside the subfolder.
            content: Document text, written as UTF-8.

        Returns:
            Path of the written file.

        Raises:
            ExportError: If no vault is configured or the write fails.
        """
        target_dir = self.target_dir
        if target_dir is None:
            raise ExportError(ExportFailureReason.NO_VAULT_SELECTED)

        file_path = target_dir / filename
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        except PermissionError as e:
            raise ExportError(ExportFailureReason.ACCESS_DENIED, str(e)) from e
        except OSError as e:
            raise ExportError(ExportFailureReason.FILE_WRITE_ERROR, str(e)) from e

        logger.info("vault_file_written", path=str(file_path), size=len(content))
        return file_path

    async def write(self, filename: str, content: str) -> Path:
        """Asynchronously write a document (non-blocking).

        Wraps write_sync in a thread executor so file I/O does not block
        the event loop.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            functools.partial(self.write_sync, filename, content),
        )
