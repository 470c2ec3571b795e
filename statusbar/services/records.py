"""
Host record lists — Parse what we understand, carry the rest

Host documents may hold records the manager cannot parse (older
formats, hand edits, other tools). Those records are never dropped:
an update rewrites only the slots of the records that were parsed.
"""

from typing import Any, Callable, List, Tuple, TypeVar

T = TypeVar('T')

# Errors a from_dict() raises on a record it cannot understand
RECORD_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def split_records(raw: List[Any], parse: Callable[[Any], T]) -> Tuple[List[T], List[int]]:
    """
    Parse a raw record list.

    Returns:
        (parsed records, index in raw of each parsed record)
    """
    parsed: List[T] = []
    slots: List[int] = []
    for index, item in enumerate(raw):
        try:
            parsed.append(parse(item))
        except RECORD_ERRORS:
            continue
        slots.append(index)
    return parsed, slots


def merge_records(raw: List[Any], slots: List[int], updated: List[dict]) -> List[Any]:
    """
    Rebuild a raw record list after an update.

    Unparsed records stay where they were. Parsed slots take the updated
    records in order; surplus slots are dropped and surplus records are
    appended.
    """
    taken = set(slots)
    fresh = iter(updated)
    merged = []
    for index, item in enumerate(raw):
        if index not in taken:
            merged.append(item)
            continue
        record = next(fresh, None)
        if record is not None:
            merged.append(record)
    merged.extend(fresh)
    return merged
