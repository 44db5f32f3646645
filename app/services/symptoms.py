import re
from collections import Counter
from typing import Iterable

from app.models.records import JournalRecord

NONE_REPORTED = "None Reported"

_SPLIT = re.compile(r"[,;]")


def symptom_tokens(entries: Iterable[JournalRecord]) -> list[str]:
    """Lowercased, trimmed symptom tokens in journal order."""
    tokens = []
    for e in entries:
        if not e.symptoms or not e.symptoms.strip():
            continue
        for part in _SPLIT.split(e.symptoms):
            part = part.strip().lower()
            if part:
                tokens.append(part)
    return tokens


def most_common_symptom(entries: Iterable[JournalRecord]) -> str:
    """
    The most frequently logged symptom, first letter capitalized.
    Ties go to the symptom that was logged first.
    """
    counts = Counter(symptom_tokens(entries))
    if not counts:
        return NONE_REPORTED

    # Counter keeps first-insertion order and max() returns the first maximum
    top = max(counts, key=counts.__getitem__)
    return top[0].upper() + top[1:]
