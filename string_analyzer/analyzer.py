import re
from dataclasses import dataclass
from hashlib import sha256
from types import MappingProxyType
from typing import Dict, Mapping

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class AnalysisResult:
    """Properties derived from a raw string. Never changes once computed."""

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Mapping[str, int]

    def to_dict(self) -> Dict[str, object]:
        return {
            "length": self.length,
            "is_palindrome": self.is_palindrome,
            "unique_characters": self.unique_characters,
            "word_count": self.word_count,
            "sha256_hash": self.sha256_hash,
            "character_frequency_map": dict(self.character_frequency_map),
        }


def compute_hash(value: str) -> str:
    """SHA-256 hex digest of the UTF-8 bytes of ``value``."""
    return sha256(value.encode("utf-8")).hexdigest()


def is_palindrome(value: str) -> bool:
    clean = _NON_ALNUM.sub("", value.lower())
    return clean == clean[::-1]


def count_words(value: str) -> int:
    return len(value.split())


def character_frequency(value: str) -> Dict[str, int]:
    freq: Dict[str, int] = {}
    for c in value:
        freq[c] = freq.get(c, 0) + 1
    return freq


def analyze(value: str) -> AnalysisResult:
    """Compute every property of ``value``.

    Works for any UTF-8 encodable string, including the empty string (length 0, palindrome,
    no words, empty frequency map).
    """
    freq = character_frequency(value)
    return AnalysisResult(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=len(freq),
        word_count=count_words(value),
        sha256_hash=compute_hash(value),
        character_frequency_map=MappingProxyType(freq),
    )
