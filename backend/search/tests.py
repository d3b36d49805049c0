"""
Tests for the search module.
"""
from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from user.models import UserProfile
from trips.models import Trip, Pin
from trips.services import TripRepository
from search.dtos import NormalizedQuery, SortMode
from search.pagination import paginate, normalize_page, normalize_limit
from search.scoring_service import ScoringService, TRIP_SIGNALS, PIN_SIGNALS
from search.search_service import TripSearchService, sort_trips

BASE_TIME = datetime(2023, 6, 1, tzinfo=dt_timezone.utc)


def make_trip(trip_id, title='Untitled journey', summary='Nothing to see', categories=None,
              likes=0, views=0, created_at=None):
    return SimpleNamespace(
        id=trip_id,
        title=title,
        summary=summary,
        categories=categories,
        like_count=likes,
        view_count=views,
        created_at=created_at or BASE_TIME + timedelta(days=trip_id),
    )


def make_pin(trip_id, title='Stop', description=None, activities=None):
    return SimpleNamespace(trip_id=trip_id, title=title, description=description, activities=activities)


def make_repository(trips, pins=None):
    pins = pins or {}
    repository = MagicMock(spec=TripRepository)
    repository.list_all_trips.return_value = list(trips)
    repository.list_pins_for_trip.side_effect = lambda trip_id: list(pins.get(trip_id, []))
    return repository


class NormalizedQueryTestCase(SimpleTestCase):
    """Test cases for query normalization"""

    def test_lowercases_and_trims(self):
        query = NormalizedQuery.from_raw('  Coastal Towns  ')
        self.assertEqual(query.text, 'coastal towns')
        self.assertEqual(query.terms, ('coastal', 'towns'))

    def test_keeps_duplicate_terms_in_order(self):
        query = NormalizedQuery.from_raw('coast Beach coast')
        self.assertEqual(query.terms, ('coast', 'beach', 'coast'))

    def test_whitespace_only_is_empty(self):
        query = NormalizedQuery.from_raw(' \t\n ')
        self.assertTrue(query.is_empty)
        self.assertEqual(query.terms, ())

    def test_none_is_empty(self):
        self.assertTrue(NormalizedQuery.from_raw(None).is_empty)

    def test_sort_mode_from_param(self):
        self.assertEqual(SortMode.from_param('likes'), SortMode.LIKES)
        self.assertEqual(SortMode.from_param('views'), SortMode.VIEWS)
        self.assertEqual(SortMode.from_param('popularity'), SortMode.DATE)
        self.assertEqual(SortMode.from_param(None), SortMode.DATE)
        self.assertEqual(SortMode.from_param('bogus', SortMode.VIEWS), SortMode.VIEWS)
        self.assertEqual(SortMode.from_param('likes', SortMode.VIEWS), SortMode.LIKES)


class ScoringServiceTestCase(SimpleTestCase):
    """Test cases for the trip and pin scoring tables"""

    def setUp(self):
        self.scoring_service = ScoringService()

    def score(self, trip, raw_query):
        return self.scoring_service.score_trip(trip, NormalizedQuery.from_raw(raw_query))

    def test_italian_coastal_dream(self):
        """Title, exact category, substring category and category term all stack"""
        trip = make_trip(1, title='Italian Coastal Dream', summary='...', categories=['Coastal', 'Food & Wine'])
        query = NormalizedQuery.from_raw('coastal')

        breakdown = self.scoring_service.explain(trip, query, TRIP_SIGNALS)
        self.assertEqual(breakdown, {
            'title': 10,
            'title_term': 5,
            'category_exact': 15,
            'category': 10,
            'category_term': 5,
        })
        self.assertEqual(self.scoring_service.score_trip(trip, query), 45)

    def test_title_phrase_and_terms(self):
        trip = make_trip(1, title='Swiss Alps Journey', categories=['Mountains'])
        self.assertEqual(self.score(trip, 'alps journey'), 10 + 5 + 5)

    def test_terms_without_phrase(self):
        trip = make_trip(1, title='Swiss Alps Journey')
        # "journey alps" is not a substring, each term still counts
        self.assertEqual(self.score(trip, 'journey alps'), 5 + 5)

    def test_summary_weights(self):
        trip = make_trip(1, title='Backpacking', summary='Best street foods and hidden beaches')
        self.assertEqual(self.score(trip, 'street foods'), 5 + 2 + 2)

    def test_category_term_counts_once_per_term(self):
        trip = make_trip(1, categories=['Food & Wine', 'Street Food'])
        # "food" hits two categories but is one term; exact matches nothing
        self.assertEqual(self.score(trip, 'food'), 10 + 5)

    def test_missing_categories_score_zero(self):
        trip = make_trip(1, title='Tokyo', summary='Neon nights', categories=None)
        self.assertEqual(self.score(trip, 'culture'), 0)

    def test_duplicate_terms_count_twice(self):
        trip = make_trip(1, title='Amalfi Coast')
        self.assertEqual(self.score(trip, 'coast coast'), 5 + 5)

    def test_pin_signals(self):
        pin = make_pin(1, title='Cinque Terre', description='Hiked between towns', activities=['Hiking', 'Photography'])
        query = NormalizedQuery.from_raw('hiking')
        self.assertEqual(self.scoring_service.explain(pin, query, PIN_SIGNALS), {
            'pin_activity': 8,
            'pin_activity_term': 3,
        })
        self.assertEqual(self.scoring_service.score_pin(pin, query), 11)

    def test_pin_description_terms(self):
        pin = make_pin(1, title='Cinque Terre', description='Hiked between towns', activities=['Hiking'])
        self.assertEqual(self.scoring_service.score_pin(pin, NormalizedQuery.from_raw('hiked towns')), 1 + 1)

    def test_pin_without_description_or_activities(self):
        pin = make_pin(1, title='Florence')
        self.assertEqual(self.scoring_service.score_pin(pin, NormalizedQuery.from_raw('florence')), 5 + 2)

    def test_pin_scores_sum_across_pins(self):
        pins = [make_pin(1, title='Amalfi Coast'), make_pin(1, title='Coast Road'), make_pin(1, title='Naples')]
        self.assertEqual(self.scoring_service.score_pins(pins, NormalizedQuery.from_raw('coast')), 7 + 7)


class TripSearchServiceTestCase(SimpleTestCase):
    """Test cases for ranking, filtering and sort dispatch"""

    def test_empty_query_never_scores(self):
        trips = [make_trip(1, likes=5), make_trip(2, likes=9)]
        scoring_service = MagicMock(wraps=ScoringService())
        service = TripSearchService(make_repository(trips), scoring_service)

        result = service.rank('   ', SortMode.LIKES)

        self.assertEqual([trip.id for trip in result], [2, 1])
        scoring_service.score_trip.assert_not_called()
        scoring_service.score_pins.assert_not_called()

    def test_empty_query_date_sort_is_newest_first(self):
        trips = [make_trip(1), make_trip(2), make_trip(3)]
        service = TripSearchService(make_repository(trips))
        self.assertEqual([trip.id for trip in service.rank('')], [3, 2, 1])

    def test_relevance_order_for_date_sort(self):
        trips = [
            make_trip(1, title='Beach days', summary='Lazy'),
            make_trip(2, title='Greek beach hopping', categories=['Beach']),
            make_trip(3, title='Mountain hut'),
        ]
        service = TripSearchService(make_repository(trips))

        result = service.rank('beach', SortMode.DATE)

        self.assertEqual([trip.id for trip in result], [2, 1])

    def test_relevance_ties_keep_collection_order(self):
        trips = [make_trip(1, title='Lisbon'), make_trip(2, title='Lisbon'), make_trip(3, title='Porto')]
        service = TripSearchService(make_repository(trips))
        self.assertEqual([trip.id for trip in service.rank('lisbon')], [1, 2])

    def test_explicit_sort_overrides_relevance(self):
        trips = [
            make_trip(1, title='Beach beach', categories=['Beach'], likes=1, views=50),
            make_trip(2, title='Quiet beach', likes=30, views=10),
            make_trip(3, title='Desert', likes=99, views=99),
        ]
        service = TripSearchService(make_repository(trips))

        self.assertEqual([trip.id for trip in service.rank('beach', SortMode.LIKES)], [2, 1])
        self.assertEqual([trip.id for trip in service.rank('beach', SortMode.VIEWS)], [1, 2])

    def test_no_matches(self):
        service = TripSearchService(make_repository([make_trip(1, title='Rome')]))
        self.assertEqual(service.rank('zzz_no_such_term'), [])

    def test_debug_log_lists_firing_signals(self):
        trips = [make_trip(1, title='Coastal walk', categories=['Coastal']), make_trip(2, title='Desert')]
        service = TripSearchService(make_repository(trips))

        with self.assertLogs('search.search_service', level='DEBUG') as logs:
            service.rank('coastal')

        debug_lines = [line for line in logs.output if line.startswith('DEBUG')]
        self.assertEqual(len(debug_lines), 1)
        self.assertIn('Trip 1 score=45 pins=0', debug_lines[0])
        self.assertIn("'category_exact': 15", debug_lines[0])
        self.assertNotIn('summary', debug_lines[0])

    def test_pin_only_match_surfaces_when_few_trip_matches(self):
        trips = [make_trip(1, title='Italy'), make_trip(2, title='Alps', categories=['Hiking'])]
        pins = {1: [make_pin(1, title='Cinque Terre', activities=['Hiking', 'Photography'])]}
        repository = make_repository(trips, pins)
        service = TripSearchService(repository)

        result = service.rank('hiking')

        self.assertEqual({trip.id for trip in result}, {1, 2})
        self.assertEqual(repository.list_pins_for_trip.call_count, 2)

    def test_pins_only_inspected_for_matches_at_threshold(self):
        trips = [make_trip(i, title=f'Beach trip {i}') for i in range(1, 6)]
        trips.append(make_trip(6, title='Inland'))
        pins = {6: [make_pin(6, activities=['Beach volleyball'])]}
        repository = make_repository(trips, pins)
        service = TripSearchService(repository)

        result = service.rank('beach')

        self.assertNotIn(6, [trip.id for trip in result])
        inspected = sorted(call.args[0] for call in repository.list_pins_for_trip.call_args_list)
        self.assertEqual(inspected, [1, 2, 3, 4, 5])

    def test_threshold_is_configurable(self):
        trips = [make_trip(1, title='Beach'), make_trip(2, title='Inland')]
        pins = {2: [make_pin(2, activities=['Beach volleyball'])]}
        service = TripSearchService(make_repository(trips, pins), pin_scan_threshold=1)
        self.assertEqual([trip.id for trip in service.rank('beach')], [1])

    @override_settings(TRIP_SEARCH={'PIN_SCAN_THRESHOLD': 0})
    def test_threshold_read_from_settings(self):
        service = TripSearchService(make_repository([]))
        self.assertEqual(service.pin_scan_threshold, 0)

    def test_pin_score_added_to_trip_score(self):
        trips = [make_trip(1, title='Coastal Italy')]
        pins = {1: [make_pin(1, title='Amalfi Coast'), make_pin(1, description='Coastal road')]}
        service = TripSearchService(make_repository(trips, pins))
        query = NormalizedQuery.from_raw('coastal')

        scored = service.score_trips(trips, query)[0]

        self.assertEqual(scored.trip_score, 10 + 5)
        self.assertEqual(scored.pin_score, 3 + 1)
        self.assertGreaterEqual(scored.score, scored.trip_score)

    def test_pin_fetch_failure_propagates(self):
        repository = make_repository([make_trip(1, title='Rome')])
        repository.list_pins_for_trip.side_effect = RuntimeError("database unavailable")
        service = TripSearchService(repository)

        with self.assertRaises(RuntimeError):
            service.rank('rome')

    def test_search_is_idempotent(self):
        trips = [make_trip(i, title='Beach' if i % 2 else 'Lake', likes=i % 3) for i in range(1, 12)]
        service = TripSearchService(make_repository(trips))

        first = service.search('beach', SortMode.LIKES, page=1, limit=4)
        second = service.search('beach', SortMode.LIKES, page=1, limit=4)

        self.assertEqual([t.id for t in first.trips], [t.id for t in second.trips])
        self.assertEqual(first.pagination, second.pagination)

    def test_likes_sort_is_stable(self):
        trips = [make_trip(1, likes=3), make_trip(2, likes=7), make_trip(3, likes=3), make_trip(4, likes=7)]
        self.assertEqual([t.id for t in sort_trips(trips, SortMode.LIKES)], [2, 4, 1, 3])

    def test_empty_query_all_trips_pages(self):
        """22 trips, likes sort, first page of 20"""
        trips = [make_trip(i, likes=i * 10) for i in range(1, 23)]
        service = TripSearchService(make_repository(trips))

        result = service.search('', SortMode.LIKES, page=1, limit=20)

        self.assertEqual([t.id for t in result.trips], list(range(22, 2, -1)))
        pagination = result.pagination
        self.assertEqual(pagination.total_items, 22)
        self.assertEqual(pagination.total_pages, 2)
        self.assertEqual(pagination.current_page, 1)
        self.assertEqual(pagination.limit, 20)
        self.assertTrue(pagination.has_next_page)
        self.assertFalse(pagination.has_prev_page)

    def test_pages_concatenate_to_full_result(self):
        trips = [make_trip(i, title='Beach' if i % 3 else 'Beach beach', views=i % 4) for i in range(1, 18)]
        service = TripSearchService(make_repository(trips))
        full = [t.id for t in service.rank('beach', SortMode.DATE)]

        first = service.search('beach', SortMode.DATE, page=1, limit=5)
        collected = [t.id for t in first.trips]
        for page in range(2, first.pagination.total_pages + 1):
            collected.extend(t.id for t in service.search('beach', SortMode.DATE, page=page, limit=5).trips)

        self.assertEqual(collected, full)
        self.assertEqual(len(set(collected)), len(full))


class PaginationTestCase(SimpleTestCase):
    """Test cases for page slicing"""

    def test_empty_list_reports_one_page(self):
        items, info = paginate([], 1, 20)
        self.assertEqual(items, [])
        self.assertEqual(info.total_items, 0)
        self.assertEqual(info.total_pages, 1)
        self.assertFalse(info.has_next_page)
        self.assertFalse(info.has_prev_page)

    def test_out_of_range_page(self):
        items, info = paginate(list(range(22)), 3, 20)
        self.assertEqual(items, [])
        self.assertEqual(info.current_page, 3)
        self.assertEqual(info.total_items, 22)
        self.assertEqual(info.total_pages, 2)
        self.assertFalse(info.has_next_page)
        self.assertTrue(info.has_prev_page)

    def test_last_partial_page(self):
        items, info = paginate(list(range(22)), 2, 20)
        self.assertEqual(items, [20, 21])
        self.assertFalse(info.has_next_page)

    def test_normalize_page(self):
        self.assertEqual(normalize_page('3'), 3)
        self.assertEqual(normalize_page('0'), 1)
        self.assertEqual(normalize_page('-2'), 1)
        self.assertEqual(normalize_page('abc'), 1)
        self.assertEqual(normalize_page(None), 1)

    def test_normalize_limit(self):
        self.assertEqual(normalize_limit('5'), 5)
        self.assertEqual(normalize_limit('0'), 20)
        self.assertEqual(normalize_limit('ten'), 20)
        self.assertEqual(normalize_limit(None, default=8), 8)


class SearchAPITest(APITestCase):
    """Test cases for the search endpoint against the database"""

    def setUp(self):
        self.profile = UserProfile.get_default()
        self.url = reverse('search:search')

    def create_trip(self, title, summary='A trip worth remembering', categories=None, likes=0, views=0):
        return Trip.objects.create(
            user=self.profile,
            title=title,
            summary=summary,
            start_date=timezone.now(),
            end_date=timezone.now() + timedelta(days=3),
            categories=categories or [],
            like_count=likes,
            view_count=views,
        )

    def test_query_matches_trip_fields(self):
        italy = self.create_trip('Italian Coastal Dream', categories=['Coastal', 'Food & Wine'])
        self.create_trip('Tokyo Nights', categories=['Urban'])

        response = self.client.get(self.url, {'q': 'coastal'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([trip['id'] for trip in response.data['trips']], [italy.id])
        self.assertEqual(response.data['trips'][0]['title'], 'Italian Coastal Dream')
        self.assertEqual(response.data['pagination']['totalItems'], 1)

    def test_pin_activity_surfaces_trip(self):
        italy = self.create_trip('Italy', summary='Two weeks along the sea')
        Pin.objects.create(
            trip=italy,
            title='Cinque Terre',
            latitude='44.1474',
            longitude='9.7084',
            date=timezone.now(),
            order=1,
            activities=['Hiking', 'Photography'],
        )
        self.create_trip('Paris', summary='Museums and cafes')

        response = self.client.get(self.url, {'q': 'hiking'})

        self.assertEqual([trip['id'] for trip in response.data['trips']], [italy.id])

    def test_no_matches(self):
        self.create_trip('Rome')

        response = self.client.get(self.url, {'q': 'zzz_no_such_term'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['trips'], [])
        self.assertEqual(response.data['pagination'], {
            'totalItems': 0,
            'totalPages': 1,
            'currentPage': 1,
            'limit': 20,
            'hasNextPage': False,
            'hasPrevPage': False,
        })

    def test_page_past_the_end(self):
        for i in range(22):
            self.create_trip(f'Beach trip {i}', likes=i)

        response = self.client.get(self.url, {'q': 'beach', 'page': 3, 'limit': 20})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['trips'], [])
        self.assertEqual(response.data['pagination'], {
            'totalItems': 22,
            'totalPages': 2,
            'currentPage': 3,
            'limit': 20,
            'hasNextPage': False,
            'hasPrevPage': True,
        })

    def test_invalid_params_fall_back_to_defaults(self):
        low = self.create_trip('Low', likes=1)
        high = self.create_trip('High', likes=50)
        Trip.objects.filter(pk=low.pk).update(created_at=timezone.now() - timedelta(days=1))

        response = self.client.get(self.url, {'sortBy': 'bogus', 'page': 'x', 'limit': '-4'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        # date sort: newest first
        self.assertEqual([trip['id'] for trip in response.data['trips']], [high.id, low.id])
        self.assertEqual(response.data['pagination']['currentPage'], 1)
        self.assertEqual(response.data['pagination']['limit'], 20)

    def test_sort_by_likes_without_query(self):
        low = self.create_trip('Low', likes=1)
        high = self.create_trip('High', likes=50)
        mid = self.create_trip('Mid', likes=10)

        response = self.client.get(self.url, {'sortBy': 'likes'})

        self.assertEqual([trip['id'] for trip in response.data['trips']], [high.id, mid.id, low.id])
        self.assertEqual(response.data['trips'][0]['likeCount'], 50)

    @override_settings(TRIP_SEARCH={'DEFAULT_SORT': 'likes'})
    def test_configured_default_sort(self):
        low = self.create_trip('Low', likes=1)
        high = self.create_trip('High', likes=50)
        Trip.objects.filter(pk=high.pk).update(created_at=timezone.now() - timedelta(days=1))

        for params in ({}, {'sortBy': 'bogus'}):
            response = self.client.get(self.url, params)
            self.assertEqual([trip['id'] for trip in response.data['trips']], [high.id, low.id])

        response = self.client.get(self.url, {'sortBy': 'date'})
        self.assertEqual([trip['id'] for trip in response.data['trips']], [low.id, high.id])

    def test_trailing_slash_optional(self):
        self.create_trip('Rome')
        response = self.client.get('/api/search/', {'q': 'rome'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['trips']), 1)

    def test_data_access_failure_returns_500(self):
        self.create_trip('Rome')

        with patch('trips.services.DjangoTripRepository.list_pins_for_trip', side_effect=RuntimeError("boom")):
            response = self.client.get(self.url, {'q': 'rome'})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'message': 'Internal server error'})


class DjangoTripRepositoryTestCase(TestCase):
    """The ORM repository feeds the search service in collection order"""

    def test_search_over_database(self):
        profile = UserProfile.get_default()
        first = Trip.objects.create(
            user=profile, title='Lisbon', summary='Trams and tiles',
            start_date=timezone.now(), end_date=timezone.now(),
        )
        second = Trip.objects.create(
            user=profile, title='Lisbon again', summary='More trams',
            start_date=timezone.now(), end_date=timezone.now(),
        )

        result = TripSearchService().rank('trams')

        self.assertEqual([trip.id for trip in result], [first.id, second.id])
