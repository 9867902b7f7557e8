"""
services/intake_service.py
--------------------------
Accepts candidate recurring expenses handed back by the extraction service
(LLM text/vision output) and turns them into RecurringExpense objects.

Only structural completeness is checked: a description, a numeric amount
and the config fields its frequency requires. Whether the values make
sense is left to the user reviewing the candidates.
"""

import json
from dataclasses import dataclass, field
from typing import Union

from config import DEFAULT_PRIORITY
from models.payment_item import PRIORITIES
from models.recurring import RecurringExpense
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class IntakeResult:
    """
    Attributes:
        accepted: Candidates that can be scheduled.
        rejected: (raw record, warning) for candidates that can't.
    """
    accepted: list[RecurringExpense] = field(default_factory=list)
    rejected: list[tuple[dict, str]] = field(default_factory=list)


def _strip_fences(raw: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    raw = raw.strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1] if "\n" in raw else raw[3:]
    if raw.endswith("```"):
        raw = raw[:-3]
    return raw.strip()


class IntakeService:
    """
    Validates extraction output before it reaches the scheduler.

    Workflow:
        1. Decode the payload (JSON text, {"expenses": [...]}, or a list).
        2. Apply the extraction defaults (active, positive amount, ...).
        3. Build a RecurringExpense per record.
        4. Split into accepted and rejected with a warning per rejection.
    """

    def parse_candidates(self, payload: Union[str, dict, list]) -> IntakeResult:
        """
        Parse a batch of candidate records.

        Args:
            payload: Raw extraction output.

        Returns:
            IntakeResult. A payload that cannot be decoded at all yields a
            single rejection rather than an exception.
        """
        result = IntakeResult()
        try:
            records = self._decode(payload)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Extraction payload is not valid JSON: {e}")
            result.rejected.append(({"raw": payload}, "Could not read the extracted data."))
            return result

        for record in records:
            if not isinstance(record, dict):
                result.rejected.append(({"raw": record}, "Not a recurring expense record."))
                continue
            try:
                expense = RecurringExpense.from_record(self._with_defaults(record))
            except KeyError as e:
                result.rejected.append((record, f"Missing required field {e.args[0]!r}."))
                continue
            except (TypeError, ValueError) as e:
                logger.error(f"Validation error for candidate: {e}, record: {record}")
                result.rejected.append((record, f"Invalid value: {e}"))
                continue

            if expense.schedule is None:
                result.rejected.append(
                    (record, f"'{expense.description}' has an incomplete schedule: {expense.config_error}.")
                )
                continue
            result.accepted.append(expense)

        logger.info(f"Intake: {len(result.accepted)} accepted, {len(result.rejected)} rejected")
        return result

    @staticmethod
    def _decode(payload) -> list:
        if isinstance(payload, (bytes, str)):
            if isinstance(payload, bytes):
                payload = payload.decode("utf-8")
            payload = json.loads(_strip_fences(payload))
        if isinstance(payload, dict):
            payload = payload.get("expenses", [payload])
        if not isinstance(payload, list):
            raise TypeError(f"expected a list of records, got {type(payload).__name__}")
        return payload

    @staticmethod
    def _with_defaults(record: dict) -> dict:
        record = dict(record)
        if record.get("isActive") is None and record.get("is_active") is None:
            record["is_active"] = True
        if record.get("priority") not in PRIORITIES:
            record["priority"] = DEFAULT_PRIORITY
        if record.get("type") not in ("expense", "revenue"):
            record["type"] = "expense"
        if not str(record.get("description") or "").strip():
            record.pop("description", None)
        return record
