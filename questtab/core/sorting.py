"""Stable quest list sorts.

Sorts are applied one after another, each refining the ties of the previous
one: alphabetical (the host's own order) first, then length, then difficulty.
The last sort applied is the dominant key.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Protocol, Sequence, TypeVar

from questtab.core.catalog import QuestInfo
from questtab.core.config import QuestTabOptions


class SortType(Enum):
    ALPHABETICAL = "alphabetical"
    LENGTH = "length"
    DIFFICULTY = "difficulty"


class Sortable(Protocol):
    @property
    def index(self) -> int: ...

    @property
    def info(self) -> QuestInfo: ...


T = TypeVar("T", bound=Sortable)

# Uncategorised quests go after every categorised one.
_UNRANKED = 1 << 16


def _length_key(row: Sortable) -> int:
    length = row.info.length
    return _UNRANKED if length is None else length.value


def _difficulty_key(row: Sortable) -> int:
    difficulty = row.info.difficulty
    return _UNRANKED if difficulty is None else difficulty.value


_SORT_KEYS: dict[SortType, Callable[[Sortable], int]] = {
    SortType.ALPHABETICAL: lambda row: row.index,
    SortType.LENGTH: _length_key,
    SortType.DIFFICULTY: _difficulty_key,
}


def order(rows: Sequence[T], criterion: SortType) -> List[T]:
    return sorted(rows, key=_SORT_KEYS[criterion])


def criteria_for(options: QuestTabOptions) -> List[SortType]:
    criteria = [SortType.ALPHABETICAL]
    if options.sort_length:
        criteria.append(SortType.LENGTH)
    if options.sort_difficulty:
        criteria.append(SortType.DIFFICULTY)
    return criteria


def sort_rows(rows: Sequence[T], options: QuestTabOptions) -> List[T]:
    result = list(rows)
    for criterion in criteria_for(options):
        result = order(result, criterion)
    return result
