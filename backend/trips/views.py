"""
API views for trips app endpoints.
"""
import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from search.pagination import normalize_limit
from user.models import UserProfile
from .models import Trip, Pin
from .serializers import TripSerializer, PinSerializer
from .services import DjangoTripRepository, get_trending_trips, get_recent_trips

logger = logging.getLogger(__name__)


class TripViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Trip CRUD operations and related actions.

    Retrieving a single trip counts as a view. All trips are written on behalf
    of the default user since the application has no real authentication.

    Example: GET /api/trips/trending/?limit=6
    """
    queryset = Trip.objects.all().order_by('id')
    serializer_class = TripSerializer
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def retrieve(self, request, *args, **kwargs):
        """Return the trip and bump its view counter"""
        trip = self.get_object()
        trip.increment_views()
        serializer = self.get_serializer(trip)
        return Response(serializer.data)

    def perform_create(self, serializer):
        """Attribute new trips to the default user"""
        trip = serializer.save(user=UserProfile.get_default())
        logger.info(f"Created trip {trip.id} '{trip.title}'")

    def perform_destroy(self, instance):
        """Deleting a trip cascades to its pins"""
        logger.info(f"Deleting trip {instance.id} and {instance.pins.count()} pins")
        instance.delete()

    @action(detail=True, methods=['post'])
    def like(self, request, pk=None):
        """
        Like this trip. Returns the updated trip.
        """
        trip = self.get_object()
        trip.like()
        serializer = self.get_serializer(trip)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['get'])
    def pins(self, request, pk=None):
        """
        Get the pins of this trip in timeline order.
        """
        trip = self.get_object()
        pins = DjangoTripRepository().list_pins_for_trip(trip.id)
        serializer = PinSerializer(pins, many=True)
        return Response(serializer.data)

    @action(detail=False, methods=['get'])
    def mine(self, request):
        """
        Get all trips belonging to the current (default) user.
        """
        profile = UserProfile.get_default()
        trips = Trip.objects.filter(user=profile).order_by('-created_at', '-id')
        serializer = self.get_serializer(trips, many=True)
        return Response(serializer.data)

    @action(detail=False, methods=['get'])
    def trending(self, request):
        """
        Get the most viewed trips.
        Query parameter: limit (default 6)
        """
        trips = get_trending_trips(normalize_limit(request.query_params.get('limit'), 6))
        serializer = self.get_serializer(trips, many=True)
        return Response(serializer.data)

    @action(detail=False, methods=['get'])
    def recent(self, request):
        """
        Get the most recently created trips.
        Query parameter: limit (default 8)
        """
        trips = get_recent_trips(normalize_limit(request.query_params.get('limit'), 8))
        serializer = self.get_serializer(trips, many=True)
        return Response(serializer.data)


class PinViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Pin CRUD operations.
    """
    queryset = Pin.objects.all().order_by('trip', 'order')
    serializer_class = PinSerializer
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def filter_queryset(self, queryset):
        """Filter by tripId if provided"""
        queryset = super().filter_queryset(queryset)

        trip_id = self.request.query_params.get('tripId')
        if trip_id:
            if not trip_id.isdigit():
                return queryset.none()
            queryset = queryset.filter(trip_id=int(trip_id))

        return queryset
