"""Firestore Sync - Optional cloud backup of the state document.

Used as a sync target: every committed snapshot is written to a single
Firestore document. The backup is best-effort; failures surface through the
dispatcher's logging like any other sync target.
"""

import json
import logging
from datetime import datetime
from typing import Any

from google.cloud import firestore

from .config import FirestoreConfig


logger = logging.getLogger(__name__)

COLLECTION = "nutritrack"


class FirestoreSyncTarget:
    """Writes the document to nutritrack/{document_id}.

    Document structure:
        nutritrack/{document_id}: { profile, logs, mealPlans, updated_at }
    """

    def __init__(self, config: FirestoreConfig | None = None) -> None:
        """Initialize Firestore target.

        Args:
            config: Firestore configuration
        """
        self.config = config or FirestoreConfig()
        self.name = f"firestore:{self.config.document_id}"
        self._client: firestore.Client | None = None

    @property
    def client(self) -> firestore.Client:
        """Lazy initialization of Firestore client."""
        if self._client is None:
            kwargs: dict[str, Any] = {}
            if self.config.project_id:
                kwargs["project"] = self.config.project_id
            if self.config.database:
                kwargs["database"] = self.config.database
            self._client = firestore.Client(**kwargs)
        return self._client

    def _document_ref(self) -> firestore.DocumentReference:
        return self.client.collection(COLLECTION).document(self.config.document_id)

    def write(self, text: str) -> None:
        """Replace the backup with the given document text."""
        data = json.loads(text)
        data["updated_at"] = datetime.utcnow()
        self._document_ref().set(data)
        logger.debug("Wrote backup document %s", self.config.document_id)

    def read(self) -> str | None:
        """Fetch the backup as document text.

        Returns:
            The document text if a backup exists, None otherwise
        """
        try:
            doc = self._document_ref().get()
            if not doc.exists:
                return None
            data = doc.to_dict()
            data.pop("updated_at", None)
            return json.dumps(data, ensure_ascii=False)
        except Exception as e:
            logger.error("Failed to fetch backup: %s", str(e))
            return None
