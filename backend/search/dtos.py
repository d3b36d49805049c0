"""
Data Transfer Objects (DTOs) passed between the search service and the API layer.
None of these outlive a single search call.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Tuple


class SortMode(Enum):
    """Enum for result orderings"""
    LIKES = 'likes'
    VIEWS = 'views'
    DATE = 'date'

    @classmethod
    def from_param(cls, value, default=None) -> "SortMode":
        """Unknown or missing values fall back to default, or DATE"""
        try:
            return cls(value)
        except ValueError:
            return default or cls.DATE


@dataclass(frozen=True)
class NormalizedQuery:
    """
    A raw query lowercased and trimmed, plus its whitespace-delimited terms.
    Terms keep their order and duplicates.
    """
    text: str
    terms: Tuple[str, ...] = ()

    @classmethod
    def from_raw(cls, raw) -> "NormalizedQuery":
        text = (raw or '').strip().lower()
        return cls(text=text, terms=tuple(text.split()))

    @property
    def is_empty(self) -> bool:
        return not self.text


@dataclass
class ScoredTrip:
    """
    Trip with its relevance score for the current search.
    """
    trip: Any
    trip_score: int = 0
    pin_score: int = 0

    @property
    def score(self) -> int:
        return self.trip_score + self.pin_score


@dataclass
class PaginationInfo:
    total_items: int
    total_pages: int
    current_page: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


@dataclass
class SearchPage:
    """One page of search results. Returned by TripSearchService.search()."""
    pagination: PaginationInfo
    trips: List[Any] = field(default_factory=list)
