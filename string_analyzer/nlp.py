"""Heuristic translation of free-text queries into filter predicates.

The interpreter is a fixed, ordered list of independent rules. Each rule looks
at the lowercased query and may add one predicate:

``palindrome``
    anywhere in the query -> ``is_palindrome: True``
``single word``
    anywhere in the query -> ``word_count: 1``
``longer than N``
    -> ``min_length: N + 1``
``contain(s) X`` / ``with ... letter X``
    -> ``contains_character``: the first standalone letter from where the
    phrase starts. Skipped when no such letter exists.

Queries that trigger no rule produce an empty predicate set, which matches
every record.
"""
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger("string_analyzer.nlp")

_LONGER_THAN = re.compile(r"longer than (\d+)")
_CONTAINS_INTENT = (
    re.compile(r"contains? [a-z]"),
    re.compile(r"with.*letter [a-z]"),
)
# A letter standing on its own: no letter before it, whitespace or end after it
_STANDALONE_LETTER = re.compile(r"(?<![a-z])[a-z](?=\s|$)")

Rule = Callable[[str], Optional[Tuple[str, Any]]]


def _palindrome_rule(q: str) -> Optional[Tuple[str, Any]]:
    if "palindrome" in q:
        return "is_palindrome", True
    return None


def _single_word_rule(q: str) -> Optional[Tuple[str, Any]]:
    if "single word" in q:
        return "word_count", 1
    return None


def _longer_than_rule(q: str) -> Optional[Tuple[str, Any]]:
    m = _LONGER_THAN.search(q)
    if m:
        return "min_length", int(m.group(1)) + 1
    return None


def _contains_character_rule(q: str) -> Optional[Tuple[str, Any]]:
    for pattern in _CONTAINS_INTENT:
        intent = pattern.search(q)
        if intent:
            break
    else:
        return None

    letter = _STANDALONE_LETTER.search(q, intent.start())
    if letter is None:
        return None
    return "contains_character", letter.group(0)


RULES: List[Rule] = [
    _palindrome_rule,
    _single_word_rule,
    _longer_than_rule,
    _contains_character_rule,
]


def interpret_nl_query(query: str) -> Dict[str, Any]:
    """Interpret a natural language query into structured filters."""
    if not isinstance(query, str):
        raise TypeError("query must be a string")

    q = query.lower()
    filters: Dict[str, Any] = {}
    for rule in RULES:
        hit = rule(q)
        if hit is not None:
            key, value = hit
            filters[key] = value

    logger.debug("Interpreted %r as %s", query, filters)
    return {"original": query, "parsed_filters": filters}
