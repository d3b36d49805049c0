"""
ScoringService: text relevance scoring for trips and their pins.

Every signal is a (matcher, weight) pair. A matcher returns how many times the
signal fires for an object (0/1 for whole-query checks, one per matching term
for term checks) and the score is the weighted sum over the whole table.
"""
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Tuple

from search.dtos import NormalizedQuery

Matcher = Callable[[Any, NormalizedQuery], int]


@dataclass(frozen=True)
class Signal:
    name: str
    weight: int
    matcher: Matcher


def _text(attr: str) -> Callable[[Any], str]:
    return lambda obj: (getattr(obj, attr, None) or '').lower()


def _texts(attr: str) -> Callable[[Any], List[str]]:
    return lambda obj: [value.lower() for value in (getattr(obj, attr, None) or [])]


def contains_query(field: Callable[[Any], str]) -> Matcher:
    return lambda obj, query: int(query.text in field(obj))


def contains_terms(field: Callable[[Any], str]) -> Matcher:
    def matcher(obj, query):
        value = field(obj)
        return sum(1 for term in query.terms if term in value)
    return matcher


def any_equals_query(field: Callable[[Any], List[str]]) -> Matcher:
    return lambda obj, query: int(any(value == query.text for value in field(obj)))


def any_contains_query(field: Callable[[Any], List[str]]) -> Matcher:
    return lambda obj, query: int(any(query.text in value for value in field(obj)))


def any_contains_terms(field: Callable[[Any], List[str]]) -> Matcher:
    def matcher(obj, query):
        values = field(obj)
        return sum(1 for term in query.terms if any(term in value for value in values))
    return matcher


TRIP_SIGNALS: Tuple[Signal, ...] = (
    Signal('title', 10, contains_query(_text('title'))),
    Signal('title_term', 5, contains_terms(_text('title'))),
    Signal('summary', 5, contains_query(_text('summary'))),
    Signal('summary_term', 2, contains_terms(_text('summary'))),
    # Exact and substring category matches stack
    Signal('category_exact', 15, any_equals_query(_texts('categories'))),
    Signal('category', 10, any_contains_query(_texts('categories'))),
    Signal('category_term', 5, any_contains_terms(_texts('categories'))),
)

PIN_SIGNALS: Tuple[Signal, ...] = (
    Signal('pin_title', 5, contains_query(_text('title'))),
    Signal('pin_description', 3, contains_query(_text('description'))),
    Signal('pin_activity', 8, any_contains_query(_texts('activities'))),
    Signal('pin_title_term', 2, contains_terms(_text('title'))),
    Signal('pin_description_term', 1, contains_terms(_text('description'))),
    Signal('pin_activity_term', 3, any_contains_terms(_texts('activities'))),
)


class ScoringService:
    """
    Scores trips and pins against a normalized query. Scores are non-negative
    integers; an empty query must be short-circuited by the caller.
    """

    def __init__(self, trip_signals: Iterable[Signal] = TRIP_SIGNALS, pin_signals: Iterable[Signal] = PIN_SIGNALS):
        self.trip_signals = tuple(trip_signals)
        self.pin_signals = tuple(pin_signals)

    @staticmethod
    def apply(obj, query: NormalizedQuery, signals: Iterable[Signal]) -> int:
        return sum(signal.weight * signal.matcher(obj, query) for signal in signals)

    def score_trip(self, trip, query: NormalizedQuery) -> int:
        """Relevance of the trip's own fields (title, summary, categories)."""
        return self.apply(trip, query, self.trip_signals)

    def score_pin(self, pin, query: NormalizedQuery) -> int:
        return self.apply(pin, query, self.pin_signals)

    def score_pins(self, pins: Iterable, query: NormalizedQuery) -> int:
        """Sum of pin scores across all pins of one trip."""
        return sum(self.score_pin(pin, query) for pin in pins)

    def explain(self, obj, query: NormalizedQuery, signals: Iterable[Signal]) -> dict:
        """
        Per-signal points for one object, omitting signals that did not fire.
        """
        breakdown = {}
        for signal in signals:
            points = signal.weight * signal.matcher(obj, query)
            if points:
                breakdown[signal.name] = points
        return breakdown
