"""
Domain services for trips app - read access to trips and their pins.
"""
from abc import ABC, abstractmethod
from typing import List

from .models import Trip, Pin


class TripRepository(ABC):
    """Abstract base class for read-only trip/pin data access"""

    @abstractmethod
    def list_all_trips(self) -> List[Trip]:
        """
        Returns every trip in a stable collection order (ascending id).
        """
        pass

    @abstractmethod
    def list_pins_for_trip(self, trip_id: int) -> List[Pin]:
        """
        Returns the pins of one trip ordered by their timeline order.
        """
        pass


class DjangoTripRepository(TripRepository):
    """TripRepository backed by the Django ORM"""

    def list_all_trips(self) -> List[Trip]:
        return list(Trip.objects.select_related('user').order_by('id'))

    def list_pins_for_trip(self, trip_id: int) -> List[Pin]:
        return list(Pin.objects.filter(trip_id=trip_id).order_by('order', 'id'))


def get_trending_trips(limit: int = 6):
    """Most viewed trips first."""
    return Trip.objects.order_by('-view_count', 'id')[:limit]


def get_recent_trips(limit: int = 8):
    """Newest trips first."""
    return Trip.objects.order_by('-created_at', '-id')[:limit]
