"""Document Codec - The persisted JSON document and its validation.

The document (profile + logs + meal plans) is the unit of local
persistence, linked-file sync, import and export. Parsing is all-or-nothing:
a document with any invalid part is rejected before anything is applied.
"""

import json
import logging
import math
from datetime import date
from typing import Mapping, Optional

from pydantic import ValidationError, field_validator, model_validator

from .models import CamelModel, DailyLog, MealPlans, NutriDocument, Profile


logger = logging.getLogger(__name__)

EXPORT_PREFIX = "nutritrack_backup_"


def with_entry_totals(log: DailyLog) -> DailyLog:
    """Return the log with intake and outtake summed from its entries."""
    intake = sum(e.cal for e in log.foods)
    outtake = sum(e.cal for e in log.activities)
    if math.isclose(intake, log.intake, abs_tol=1e-6) and math.isclose(outtake, log.outtake, abs_tol=1e-6):
        return log
    logger.warning("Log totals disagree with entries, recomputing (intake %s -> %s, outtake %s -> %s)",
                   log.intake, intake, log.outtake, outtake)
    return log.model_copy(update={"intake": intake, "outtake": outtake})


class InvalidDocumentError(ValueError):
    """Raised when an imported document cannot be parsed or validated."""


def _reject_constant(token: str) -> float:
    raise InvalidDocumentError(f"Document contains non-finite number {token}")


class DocumentUpdate(CamelModel):
    """Parts of a document to merge into the current state.

    A part that is absent (or null) leaves the matching state alone.
    """

    profile: Optional[Profile] = None
    logs: Optional[dict[str, DailyLog]] = None
    meal_plans: Optional[MealPlans] = None

    @field_validator("logs")
    @classmethod
    def _keys_are_iso_dates(cls, logs: dict[str, DailyLog] | None) -> dict[str, DailyLog] | None:
        for key in logs or {}:
            date.fromisoformat(key)
        return logs

    @model_validator(mode="after")
    def _totals_match_entries(self) -> "DocumentUpdate":
        """Recompute each day's intake and outtake from its entry lists."""
        if self.logs:
            self.logs = {key: with_entry_totals(log) for key, log in self.logs.items()}
        return self

    def is_empty(self) -> bool:
        return self.profile is None and self.logs is None and self.meal_plans is None


def build_document(profile: Profile, logs: Mapping[str, DailyLog], meal_plans: MealPlans) -> NutriDocument:
    return NutriDocument(profile=profile, logs=dict(logs), meal_plans=meal_plans)


def dump_document(document: NutriDocument) -> str:
    """Serialize a document to pretty-printed JSON with camelCase keys."""
    return document.model_dump_json(by_alias=True, indent=2)


def parse_document(text: str) -> DocumentUpdate:
    """Parse and validate document text.

    Args:
        text: JSON text of a full or partial document

    Returns:
        DocumentUpdate with the parts present in the text

    Raises:
        InvalidDocumentError: If the text is not JSON, not an object, or any
            present part fails validation
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise InvalidDocumentError(f"Document is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidDocumentError("Document must be a JSON object")

    try:
        return DocumentUpdate.model_validate(data)
    except ValidationError as e:
        raise InvalidDocumentError(f"Document failed validation: {e.error_count()} error(s)") from e


def export_filename(today: date | None = None) -> str:
    """File name for a manual export, stamped with the date."""
    today = today or date.today()
    return f"{EXPORT_PREFIX}{today.isoformat()}.json"
