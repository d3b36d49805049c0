"""
TripSearchService: full-scan trip search with pin roll-up, sort dispatch and paging.
"""
import logging
from typing import List, Optional

from django.conf import settings

from trips.services import TripRepository, DjangoTripRepository
from search.dtos import NormalizedQuery, ScoredTrip, SearchPage, SortMode
from search.pagination import paginate, normalize_page, normalize_limit
from search.scoring_service import ScoringService

logger = logging.getLogger(__name__)

# Below this many trip-level matches the pins of every trip are inspected
PIN_SCAN_THRESHOLD = 5

_SORT_KEYS = {
    SortMode.LIKES: lambda trip: trip.like_count,
    SortMode.VIEWS: lambda trip: trip.view_count,
    SortMode.DATE: lambda trip: trip.created_at,
}


def sort_trips(trips, sort_mode: SortMode) -> List:
    """
    Descending sort on like count, view count or creation time.
    Stable: trips with equal keys keep their input order.
    """
    return sorted(trips, key=_SORT_KEYS[sort_mode], reverse=True)


class TripSearchService:
    """
    Scores every trip against a query on each call; there is no index.

    Steps:
    1. Normalize the query (empty query: no scoring, plain field sort)
    2. Score trip fields
    3. Score pins of the candidate trips and add them to their trip
    4. Keep trips with a positive score
    5. Sort by relevance or by the requested field
    6. Slice the requested page
    """

    def __init__(self, repository: Optional[TripRepository] = None, scoring_service: Optional[ScoringService] = None,
                 pin_scan_threshold: Optional[int] = None):
        self.repository = repository or DjangoTripRepository()
        self.scoring_service = scoring_service or ScoringService()

        config = getattr(settings, 'TRIP_SEARCH', {})
        if pin_scan_threshold is None:
            pin_scan_threshold = config.get('PIN_SCAN_THRESHOLD', PIN_SCAN_THRESHOLD)
        self.pin_scan_threshold = pin_scan_threshold
        self.default_limit = config.get('DEFAULT_PAGE_SIZE', 20)

    def search(self, query: str, sort_mode: SortMode = SortMode.DATE, page=1, limit=None) -> SearchPage:
        """
        Orchestrator method returning one page of ranked trips.

        Args:
            query: Raw free-text query, may be empty
            sort_mode: SortMode; DATE means relevance when a query is present
            page: 1-based page number
            limit: Page size

        Returns:
            SearchPage with the page slice and pagination info
        """
        page = normalize_page(page)
        limit = normalize_limit(limit, self.default_limit)

        logger.info(f"Search query='{query}' sort={sort_mode.value} page={page} limit={limit}")
        results = self.rank(query, sort_mode)
        logger.info(f"Search found {len(results)} total results")

        trips, pagination = paginate(results, page, limit)
        return SearchPage(trips=trips, pagination=pagination)

    def rank(self, query: str, sort_mode: SortMode = SortMode.DATE) -> List:
        """
        Full filtered and sorted result list, before paging.
        """
        normalized = NormalizedQuery.from_raw(query)
        trips = self.repository.list_all_trips()

        if normalized.is_empty:
            return sort_trips(trips, sort_mode)

        matched = [scored for scored in self.score_trips(trips, normalized) if scored.score > 0]

        if sort_mode is SortMode.DATE and matched:
            matched = sorted(matched, key=lambda scored: scored.score, reverse=True)
            return [scored.trip for scored in matched]

        return sort_trips([scored.trip for scored in matched], sort_mode)

    def score_trips(self, trips, query: NormalizedQuery) -> List[ScoredTrip]:
        """
        Trip-level pass over every trip, then the pin pass over the candidates.
        Returned in input order.
        """
        scored = [ScoredTrip(trip=trip, trip_score=self.scoring_service.score_trip(trip, query)) for trip in trips]

        for candidate in self._pin_candidates(scored):
            pins = self.repository.list_pins_for_trip(candidate.trip.id)
            candidate.pin_score = self.scoring_service.score_pins(pins, query)

        if logger.isEnabledFor(logging.DEBUG):
            for item in scored:
                if item.trip_score > 0:
                    breakdown = self.scoring_service.explain(item.trip, query, self.scoring_service.trip_signals)
                    logger.debug(f"Trip {item.trip.id} score={item.score} pins={item.pin_score} signals={breakdown}")

        return scored

    def _pin_candidates(self, scored: List[ScoredTrip]) -> List[ScoredTrip]:
        """
        All trips when trip-level matches are sparse, otherwise only the matches.
        """
        matched = [item for item in scored if item.trip_score > 0]
        if len(matched) < self.pin_scan_threshold:
            return scored
        return matched
