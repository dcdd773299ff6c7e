"""Local Store - Persistence of the state document on the local disk.

All disk I/O for the local copy is contained here; business logic is in
the core module.
"""

import logging
import os
import tempfile
from pathlib import Path


logger = logging.getLogger(__name__)


class LocalStore:
    """Reads and writes the document file.

    Writes go to a temporary file in the same directory which then replaces
    the document, so a failed write never leaves a truncated file behind.
    """

    def __init__(self, path: Path) -> None:
        """Initialize local store.

        Args:
            path: Location of the document file
        """
        self.path = path

    def load(self) -> str | None:
        """Read the stored document text.

        Returns:
            The document text, or None if there is no readable document
        """
        logger.debug("Loading document from %s", self.path)
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No stored document at %s, using defaults", self.path)
            return None
        except OSError as e:
            logger.error("Failed to read document: %s", str(e))
            return None

    def save(self, text: str) -> bool:
        """Write the document text.

        Args:
            text: Serialized document

        Returns:
            True if successful
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".nutritrack-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            logger.debug("Saved document to %s", self.path)
            return True
        except OSError as e:
            logger.error("Failed to save document: %s", str(e))
            return False

    def quarantine(self) -> Path | None:
        """Move an unreadable document aside so later saves don't overwrite it.

        Returns:
            Where the document was moved, or None if nothing was moved
        """
        aside = self.path.with_name(self.path.name + ".corrupt")
        try:
            os.replace(self.path, aside)
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to move aside invalid document: %s", str(e))
            return None
        logger.warning("Moved invalid document to %s", aside)
        return aside

    def clear(self) -> bool:
        """Delete the stored document.

        Returns:
            True if successful (also when there was nothing to delete)
        """
        logger.info("Clearing stored document at %s", self.path)
        try:
            self.path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.error("Failed to clear document: %s", str(e))
            return False
