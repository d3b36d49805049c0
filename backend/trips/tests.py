from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from datetime import timedelta
from django.urls import reverse
from rest_framework.test import APITestCase
from rest_framework import status

from user.models import UserProfile
from .models import Trip, Pin
from .services import DjangoTripRepository, get_trending_trips, get_recent_trips


class TripModelTest(TestCase):
    """Test cases for Trip and Pin models"""

    def setUp(self):
        """Set up test data"""
        self.profile = UserProfile.get_default()
        self.start_date = timezone.now()
        self.end_date = self.start_date + timedelta(days=7)
        self.trip = Trip.objects.create(
            user=self.profile,
            title='Swiss Alps Journey',
            summary='Exploring the mountain ranges of Switzerland',
            start_date=self.start_date,
            end_date=self.end_date,
            categories=['Mountains', 'Hiking'],
        )

    def test_trip_defaults(self):
        """Test counters and visibility defaults"""
        self.assertEqual(self.trip.view_count, 0)
        self.assertEqual(self.trip.like_count, 0)
        self.assertTrue(self.trip.is_public)
        self.assertEqual(str(self.trip), 'Swiss Alps Journey')

    def test_increment_views_and_like(self):
        self.trip.increment_views()
        self.trip.increment_views()
        self.trip.like()

        self.trip.refresh_from_db()
        self.assertEqual(self.trip.view_count, 2)
        self.assertEqual(self.trip.like_count, 1)

    def test_pin_geohash_is_derived(self):
        """Test that saving a pin stores the geohash of its coordinates"""
        pin = Pin.objects.create(
            trip=self.trip,
            title='Zermatt',
            latitude='46.0207',
            longitude='7.7491',
            date=self.start_date,
            order=1,
        )
        self.assertEqual(len(pin.geohash), 6)
        self.assertTrue(pin.geohash.startswith('u0'))

    def test_pin_invalid_coordinates(self):
        with self.assertRaises(ValueError):
            Pin.objects.create(
                trip=self.trip,
                title='Nowhere',
                latitude='95',
                longitude='7',
                date=self.start_date,
                order=1,
            )

    def test_delete_trip_cascades_pins(self):
        Pin.objects.create(trip=self.trip, title='Bern', latitude='46.948', longitude='7.4474',
                           date=self.start_date, order=1)
        self.trip.delete()
        self.assertEqual(Pin.objects.count(), 0)


class TripRepositoryTest(TestCase):
    """Test cases for the ORM-backed data access"""

    def setUp(self):
        self.profile = UserProfile.get_default()
        now = timezone.now()
        self.first = Trip.objects.create(user=self.profile, title='First', summary='First trip summary',
                                         start_date=now, end_date=now, view_count=5)
        self.second = Trip.objects.create(user=self.profile, title='Second', summary='Second trip summary',
                                          start_date=now, end_date=now, view_count=50)
        Trip.objects.filter(pk=self.first.pk).update(created_at=now - timedelta(days=2))

    def test_list_all_trips_in_id_order(self):
        trips = DjangoTripRepository().list_all_trips()
        self.assertEqual([trip.id for trip in trips], [self.first.id, self.second.id])

    def test_list_pins_for_trip_ordered(self):
        now = timezone.now()
        Pin.objects.create(trip=self.first, title='Later', latitude='1', longitude='1', date=now, order=2)
        Pin.objects.create(trip=self.first, title='Earlier', latitude='1', longitude='1', date=now, order=1)
        Pin.objects.create(trip=self.second, title='Other', latitude='1', longitude='1', date=now, order=1)

        pins = DjangoTripRepository().list_pins_for_trip(self.first.id)

        self.assertEqual([pin.title for pin in pins], ['Earlier', 'Later'])

    def test_list_pins_for_unknown_trip(self):
        self.assertEqual(DjangoTripRepository().list_pins_for_trip(9999), [])

    def test_trending_and_recent(self):
        self.assertEqual(list(get_trending_trips(1)), [self.second])
        self.assertEqual(list(get_recent_trips()), [self.second, self.first])


class TripAPITest(APITestCase):
    """Test cases for Trip API endpoints"""

    def setUp(self):
        self.profile = UserProfile.get_default()
        self.trip = Trip.objects.create(
            user=self.profile,
            title='Italian Coastal Dream',
            summary='A stunning journey through coastal towns',
            start_date=timezone.now(),
            end_date=timezone.now() + timedelta(days=14),
            categories=['Coastal'],
        )

    def test_create_trip(self):
        """Test creating a new trip via API"""
        url = reverse('trips:trip-list')
        data = {
            'title': 'Greek Isles',
            'summary': 'Island hopping across the Aegean',
            'startDate': timezone.now().isoformat(),
            'endDate': (timezone.now() + timedelta(days=5)).isoformat(),
            'categories': ['Island', 'Beach'],
        }
        response = self.client.post(url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        trip = Trip.objects.get(id=response.data['id'])
        self.assertEqual(trip.user, self.profile)
        self.assertEqual(trip.categories, ['Island', 'Beach'])
        self.assertEqual(response.data['viewCount'], 0)
        self.assertEqual(response.data['userId'], self.profile.id)

    def test_create_trip_invalid(self):
        """Short title/summary and reversed dates are rejected"""
        url = reverse('trips:trip-list')
        data = {
            'title': 'Go',
            'summary': 'Short',
            'startDate': timezone.now().isoformat(),
            'endDate': (timezone.now() - timedelta(days=5)).isoformat(),
        }
        response = self.client.post(url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('title', response.data)
        self.assertIn('summary', response.data)

    def test_create_trip_end_before_start(self):
        url = reverse('trips:trip-list')
        data = {
            'title': 'Backwards',
            'summary': 'This trip ends before it starts',
            'startDate': timezone.now().isoformat(),
            'endDate': (timezone.now() - timedelta(days=5)).isoformat(),
        }
        response = self.client.post(url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('endDate', response.data)

    def test_list_trips(self):
        response = self.client.get(reverse('trips:trip-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_retrieve_counts_a_view(self):
        url = reverse('trips:trip-detail', args=[self.trip.id])
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['viewCount'], 1)
        self.trip.refresh_from_db()
        self.assertEqual(self.trip.view_count, 1)

    def test_retrieve_missing_trip(self):
        response = self.client.get(reverse('trips:trip-detail', args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_partial_update(self):
        url = reverse('trips:trip-detail', args=[self.trip.id])
        response = self.client.patch(url, {'title': 'Amalfi Escape'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.trip.refresh_from_db()
        self.assertEqual(self.trip.title, 'Amalfi Escape')

    def test_put_not_allowed(self):
        url = reverse('trips:trip-detail', args=[self.trip.id])
        response = self.client.put(url, {'title': 'Amalfi Escape'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_delete_trip(self):
        Pin.objects.create(trip=self.trip, title='Sorrento', latitude='40.6263', longitude='14.3757',
                           date=timezone.now(), order=1)
        url = reverse('trips:trip-detail', args=[self.trip.id])
        response = self.client.delete(url)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Trip.objects.exists())
        self.assertFalse(Pin.objects.exists())

    def test_like_action(self):
        url = reverse('trips:trip-like', args=[self.trip.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['likeCount'], 1)

    def test_like_missing_trip(self):
        response = self.client.post(reverse('trips:trip-like', args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_pins_action(self):
        Pin.objects.create(trip=self.trip, title='Amalfi Coast', latitude='40.634', longitude='14.6027',
                           date=timezone.now(), order=2)
        Pin.objects.create(trip=self.trip, title='Cinque Terre', latitude='44.1474', longitude='9.7084',
                           date=timezone.now(), order=1, activities=['Hiking'])

        response = self.client.get(reverse('trips:trip-pins', args=[self.trip.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([pin['title'] for pin in response.data], ['Cinque Terre', 'Amalfi Coast'])
        self.assertEqual(response.data[0]['tripId'], self.trip.id)
        self.assertEqual(response.data[0]['activities'], ['Hiking'])

    def test_mine(self):
        response = self.client.get(reverse('trips:trip-mine'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([trip['id'] for trip in response.data], [self.trip.id])

    def test_trending_limit(self):
        for views in (10, 30, 20):
            Trip.objects.create(user=self.profile, title=f'Trip {views}', summary='Summary of the trip',
                                start_date=timezone.now(), end_date=timezone.now(), view_count=views)

        response = self.client.get(reverse('trips:trip-trending'), {'limit': 2})

        self.assertEqual([trip['viewCount'] for trip in response.data], [30, 20])

    def test_recent_bad_limit_uses_default(self):
        response = self.client.get(reverse('trips:trip-recent'), {'limit': 'lots'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_zero_limit_uses_default(self):
        response = self.client.get(reverse('trips:trip-trending'), {'limit': 0})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_client_paths(self):
        """The web client calls these paths without a trailing slash"""
        for path in ('/api/trips', '/api/trending', '/api/recent', '/api/my-trips', '/api/trending/'):
            response = self.client.get(path)
            self.assertEqual(response.status_code, status.HTTP_200_OK, path)
            self.assertEqual([trip['id'] for trip in response.data], [self.trip.id], path)

        response = self.client.get(f'/api/trips/{self.trip.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['viewCount'], 1)

    def test_trending_alias_respects_limit(self):
        Trip.objects.create(user=self.profile, title='Popular', summary='Summary of the trip',
                            start_date=timezone.now(), end_date=timezone.now(), view_count=99)

        response = self.client.get(reverse('trips:trending'), {'limit': 1})

        self.assertEqual([trip['title'] for trip in response.data], ['Popular'])


class PinAPITest(APITestCase):
    """Test cases for Pin API endpoints"""

    def setUp(self):
        self.profile = UserProfile.get_default()
        self.trip = Trip.objects.create(user=self.profile, title='Trip', summary='A short summary here',
                                        start_date=timezone.now(), end_date=timezone.now())

    def test_add_pin(self):
        """Test adding a pin to a trip"""
        url = reverse('trips:pin-list')
        data = {
            'tripId': self.trip.id,
            'title': 'Florence',
            'description': 'Museums and cuisine',
            'latitude': '43.7696',
            'longitude': '11.2558',
            'date': timezone.now().isoformat(),
            'order': 1,
            'activities': ['Museums', 'Dining'],
        }
        response = self.client.post(url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Pin.objects.count(), 1)
        self.assertEqual(len(response.data['geohash']), 6)

    def test_add_pin_without_trailing_slash(self):
        data = {
            'tripId': self.trip.id,
            'title': 'Venice',
            'latitude': '45.4408',
            'longitude': '12.3155',
            'date': timezone.now().isoformat(),
            'order': 2,
        }
        response = self.client.post('/api/pins', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Pin.objects.get().title, 'Venice')

        response = self.client.patch(f'/api/pins/{response.data["id"]}', {'order': 3}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Pin.objects.get().order, 3)

    def test_add_pin_invalid(self):
        url = reverse('trips:pin-list')
        data = {
            'tripId': self.trip.id,
            'title': 'X',
            'latitude': '123',
            'longitude': '11.2558',
            'date': timezone.now().isoformat(),
            'order': 1,
        }
        response = self.client.post(url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('title', response.data)
        self.assertIn('latitude', response.data)

    def test_update_and_delete_pin(self):
        pin = Pin.objects.create(trip=self.trip, title='Sorrento', latitude='40.6263', longitude='14.3757',
                                 date=timezone.now(), order=1)
        url = reverse('trips:pin-detail', args=[pin.id])

        response = self.client.patch(url, {'activities': ['Boat Tours']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        pin.refresh_from_db()
        self.assertEqual(pin.activities, ['Boat Tours'])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Pin.objects.exists())

    def test_missing_pin(self):
        url = reverse('trips:pin-detail', args=[9999])
        self.assertEqual(self.client.patch(url, {'title': 'Nope'}, format='json').status_code,
                         status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_filter_by_trip(self):
        other = Trip.objects.create(user=self.profile, title='Other', summary='Another summary here',
                                    start_date=timezone.now(), end_date=timezone.now())
        Pin.objects.create(trip=self.trip, title='Mine', latitude='1', longitude='1', date=timezone.now(), order=1)
        Pin.objects.create(trip=other, title='Theirs', latitude='1', longitude='1', date=timezone.now(), order=1)

        response = self.client.get(reverse('trips:pin-list'), {'tripId': self.trip.id})

        self.assertEqual([pin['title'] for pin in response.data], ['Mine'])


class SeedTripsCommandTest(TestCase):
    """Test cases for the seed_trips management command"""

    def test_seed_is_idempotent(self):
        call_command('seed_trips', stdout=StringIO())
        call_command('seed_trips', stdout=StringIO())

        self.assertEqual(Trip.objects.count(), 8)
        italy = Trip.objects.get(title='Italian Coastal Dream')
        self.assertEqual(italy.like_count, 458)
        self.assertEqual(italy.pins.count(), 4)

    def test_seed_flush(self):
        call_command('seed_trips', stdout=StringIO())
        Trip.objects.filter(title='Swiss Alps Journey').update(title='Renamed')

        call_command('seed_trips', '--flush', stdout=StringIO())

        self.assertFalse(Trip.objects.filter(title='Renamed').exists())
        self.assertEqual(Trip.objects.count(), 8)
