"""
Local filesystem store for uploaded PDFs.

Writes uploads under a single directory with generated unique names and reads
them back for streaming and index rebuilds.

Dependencies: pathlib (stdlib)
System role: Raw document storage
"""

import logging
import secrets
import time
from pathlib import Path

from pdfchat.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".pdf"


class LocalFileStore:
    """Filesystem store confined to one upload directory."""

    def __init__(self, directory: str | Path) -> None:
        """
        Initialize store and create the upload directory if needed.

        Args:
            directory: Upload directory
        """
        self._root = Path(directory).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def generate_filename(self, original_name: str) -> str:
        """
        Generate a unique stored filename keeping the original extension.

        Args:
            original_name: Filename as uploaded

        Returns:
            str: "<epoch millis>-<random><ext>"
        """
        extension = Path(original_name).suffix.lower() or DEFAULT_EXTENSION
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"

    def path_for(self, filename: str) -> Path:
        """
        Resolve a stored filename to its path.

        Raises:
            ValidationError: When the name escapes the upload directory
        """
        path = (self._root / filename).resolve()
        if path.parent != self._root:
            raise ValidationError("Invalid stored filename", field="filename")
        return path

    def save(self, data: bytes, original_name: str) -> str:
        """
        Write bytes under a newly generated name.

        Args:
            data: File content
            original_name: Filename as uploaded

        Returns:
            str: Stored filename
        """
        filename = self.generate_filename(original_name)
        path = self.path_for(filename)
        while path.exists():
            filename = self.generate_filename(original_name)
            path = self.path_for(filename)

        path.write_bytes(data)
        logger.info(f"Stored upload {original_name} as {filename} ({len(data)} bytes)")
        return filename

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def read(self, filename: str) -> bytes:
        """
        Read a stored file.

        Raises:
            NotFoundError: When the file does not exist
        """
        path = self.path_for(filename)
        if not path.is_file():
            raise NotFoundError("file", filename)
        return path.read_bytes()

    def delete(self, filename: str) -> bool:
        """
        Delete a stored file. Best-effort: failures are logged, not raised.

        Returns:
            bool: Whether a file was removed
        """
        try:
            path = self.path_for(filename)
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except (OSError, ValidationError) as e:
            logger.warning(f"Failed to delete stored file {filename}: {e}")
            return False
