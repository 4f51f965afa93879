import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from string_analyzer.errors import InvalidInputError
from string_analyzer.store import StringRecord

FILTER_PARAMS = ("is_palindrome", "min_length", "max_length", "word_count", "contains_character")
_INT_PARAMS = ("min_length", "max_length", "word_count")
_TRUE_VALUES = ("1", "true", "yes")
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)


def _parse_int(name: str, raw: str) -> int:
    value = raw.strip()
    if not _INTEGER.fullmatch(value):
        raise InvalidInputError(f"{name} must be a number", param=name)
    return int(value)


def parse_query_filters(raw: Mapping[str, Optional[str]]) -> Dict[str, Any]:
    """Turn raw query-string values into typed predicates.

    Only recognised, supplied parameters are kept. Raises
    :class:`InvalidInputError` naming the first parameter that cannot be used.
    """
    filters: Dict[str, Any] = {}

    if raw.get("is_palindrome") is not None:
        filters["is_palindrome"] = str(raw["is_palindrome"]).strip().lower() in _TRUE_VALUES

    for name in _INT_PARAMS:
        if raw.get(name) is not None:
            filters[name] = _parse_int(name, str(raw[name]))

    if raw.get("contains_character") is not None:
        ch = str(raw["contains_character"])
        if len(ch) != 1:
            raise InvalidInputError(
                "contains_character must be a single character", param="contains_character"
            )
        filters["contains_character"] = ch

    return filters


def applied_filters_echo(raw: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """The supplied filter parameters exactly as they were received."""
    return {name: raw[name] for name in FILTER_PARAMS if raw.get(name) is not None}


def matches_filters(record: StringRecord, filters: Mapping[str, Any]) -> bool:
    props = record.properties

    if "is_palindrome" in filters and props.is_palindrome != filters["is_palindrome"]:
        return False

    if "min_length" in filters and props.length < filters["min_length"]:
        return False

    if "max_length" in filters and props.length > filters["max_length"]:
        return False

    if "word_count" in filters and props.word_count != filters["word_count"]:
        return False

    if "contains_character" in filters and filters["contains_character"] not in record.value:
        return False

    return True


def filter_records(records: Iterable[StringRecord], filters: Mapping[str, Any]) -> List[StringRecord]:
    """Records satisfying every predicate in ``filters``; all of them when it is empty."""
    return [r for r in records if matches_filters(r, filters)]
