"""Configuration - Environment-driven settings for the shell."""

import os
from dataclasses import dataclass, field
from pathlib import Path


DOCUMENT_FILENAME = "nutritrack.json"


def _default_data_dir() -> Path:
    return Path.home() / ".nutritrack"


@dataclass
class FirestoreConfig:
    """Configuration for the optional Firestore backup target.

    Attributes:
        project_id: GCP project ID (None for default)
        database: Firestore database name (None for default database)
        document_id: Document holding the backup in the nutritrack collection
    """

    project_id: str | None = None
    database: str | None = None
    document_id: str = "backup"


@dataclass
class NutriTrackConfig:
    """Settings for a session.

    Attributes:
        data_dir: Directory holding the local document
        linked_file: File to link for write-through sync at startup
        firestore: Cloud backup settings (None disables the backup)
        log_level: Logging level name
    """

    data_dir: Path = field(default_factory=_default_data_dir)
    linked_file: Path | None = None
    firestore: FirestoreConfig | None = None
    log_level: str = "INFO"

    @property
    def document_path(self) -> Path:
        return self.data_dir / DOCUMENT_FILENAME

    @classmethod
    def from_env(cls) -> "NutriTrackConfig":
        """Build config from NUTRITRACK_* environment variables."""
        config = cls()

        data_dir = os.environ.get("NUTRITRACK_DATA_DIR")
        if data_dir:
            config.data_dir = Path(data_dir).expanduser()

        linked_file = os.environ.get("NUTRITRACK_LINKED_FILE")
        if linked_file:
            config.linked_file = Path(linked_file).expanduser()

        project_id = os.environ.get("NUTRITRACK_FIRESTORE_PROJECT")
        database = os.environ.get("NUTRITRACK_FIRESTORE_DATABASE")
        if project_id or database:
            config.firestore = FirestoreConfig(
                project_id=project_id,
                database=database,
                document_id=os.environ.get("NUTRITRACK_FIRESTORE_DOCUMENT", "backup"),
            )

        config.log_level = os.environ.get("NUTRITRACK_LOG_LEVEL", config.log_level).upper()
        return config
