import logging
from typing import Any, Dict, Mapping, Optional

from string_analyzer.errors import InvalidInputError, ParseFailureError
from string_analyzer.filters import applied_filters_echo, filter_records, parse_query_filters
from string_analyzer.nlp import interpret_nl_query
from string_analyzer.store import StringStore

logger = logging.getLogger("string_analyzer.services")


def create_string(value: Any, store: StringStore) -> Dict[str, Any]:
    record = store.insert(value)
    logger.info("Created string %s", record.id)
    return record.to_dict()


def get_string_by_value(string_value: str, store: StringStore) -> Dict[str, Any]:
    return store.get(string_value).to_dict()


def delete_string_by_value(string_value: str, store: StringStore) -> None:
    store.delete(string_value)
    logger.info("Deleted string")


def get_all_strings_with_filters(
    store: StringStore, raw_filters: Optional[Mapping[str, Optional[str]]] = None
) -> Dict[str, Any]:
    raw_filters = raw_filters or {}
    # Parse everything up front so a bad parameter fails the whole request
    filters = parse_query_filters(raw_filters)
    records = filter_records(store.list(), filters)
    return {
        "data": [r.to_dict() for r in records],
        "count": len(records),
        "filters_applied": applied_filters_echo(raw_filters),
    }


def get_strings_by_natural_language(store: StringStore, query: Optional[str]) -> Dict[str, Any]:
    if not query:
        raise InvalidInputError("Query parameter is required", kind=InvalidInputError.MISSING_QUERY)

    try:
        interpreted = interpret_nl_query(query)
    except Exception:
        logger.exception("Failed to interpret natural language query")
        raise ParseFailureError("Unable to parse natural language query") from None

    records = filter_records(store.list(), interpreted["parsed_filters"])
    return {
        "data": [r.to_dict() for r in records],
        "count": len(records),
        "interpreted_query": interpreted,
    }
