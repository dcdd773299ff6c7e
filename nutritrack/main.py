"""NutriTrack - Entry point for embedding the tracker in a UI.

A UI creates one session at startup and drives it in response to user
actions; the session persists every change on its own.
"""

import logging

from .shell.config import NutriTrackConfig
from .shell.firestore_sync import FirestoreSyncTarget
from .shell.local_store import LocalStore
from .shell.session import NutriTrackSession


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_session(config: NutriTrackConfig | None = None) -> NutriTrackSession:
    """Create a session from config (defaults to the environment).

    Loads the local document, attaches the Firestore backup when configured
    and links the configured external file.
    """
    config = config or NutriTrackConfig.from_env()
    configure_logging(config.log_level)

    backup = FirestoreSyncTarget(config.firestore) if config.firestore is not None else None
    session = NutriTrackSession(LocalStore(config.document_path), backup_target=backup)

    if config.linked_file is not None and not session.link_file(config.linked_file):
        logger.warning("Starting without linked file %s", config.linked_file)

    logger.info("NutriTrack session ready (data dir: %s)", config.data_dir)
    return session
