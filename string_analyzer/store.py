import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List

from string_analyzer.analyzer import AnalysisResult, analyze
from string_analyzer.errors import ConflictError, InvalidInputError, NotFoundError
from string_analyzer.logging import preview

logger = logging.getLogger("string_analyzer.store")


@dataclass(frozen=True)
class StringRecord:
    id: str
    value: str
    properties: AnalysisResult
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "value": self.value,
            "properties": self.properties.to_dict(),
            "created_at": self.created_at,
        }


class StringStore:
    """In-memory collection of analyzed strings keyed by their exact value.

    Every operation takes the same lock, so the duplicate check in
    :meth:`insert` and the write that follows cannot interleave with another
    mutation. Iteration order is insertion order.
    """

    def __init__(self) -> None:
        self._records: Dict[str, StringRecord] = {}
        self._lock = threading.RLock()

    def insert(self, value: Any) -> StringRecord:
        if value is None:
            raise InvalidInputError("Need text", kind=InvalidInputError.MISSING)
        if not isinstance(value, str):
            raise InvalidInputError("Must be string", kind=InvalidInputError.WRONG_TYPE)
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            # lone surrogates survive JSON decoding but cannot be stored or rendered
            raise InvalidInputError("Must be valid UTF-8 text", kind=InvalidInputError.INVALID_TEXT) from None

        with self._lock:
            if value in self._records:
                raise ConflictError("Already exists")
            properties = analyze(value)
            record = StringRecord(
                id=properties.sha256_hash,
                value=value,
                properties=properties,
                created_at=datetime.now(timezone.utc),
            )
            self._records[value] = record

        logger.debug("Stored %r as %s", preview(value), record.id)
        return record

    def get(self, value: str) -> StringRecord:
        with self._lock:
            record = self._records.get(value)
        if record is None:
            raise NotFoundError("String not found")
        return record

    def list(self) -> List[StringRecord]:
        with self._lock:
            return list(self._records.values())

    def delete(self, value: str) -> None:
        with self._lock:
            if value not in self._records:
                raise NotFoundError("String not found")
            record = self._records.pop(value)
        logger.debug("Deleted %r (%s)", preview(value), record.id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, value: object) -> bool:
        with self._lock:
            return value in self._records
