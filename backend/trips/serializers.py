"""
DRF Serializers for Trip and Pin models.
Field names are camelCase to match the JSON the web client consumes.
"""
from decimal import Decimal

from rest_framework import serializers
from .models import Trip, Pin


class PinSerializer(serializers.ModelSerializer):
    """Serializer for Pin model"""
    tripId = serializers.PrimaryKeyRelatedField(
        source='trip',
        queryset=Trip.objects.all(),
    )
    title = serializers.CharField(max_length=255, min_length=2)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    latitude = serializers.DecimalField(
        max_digits=9,
        decimal_places=6,
        min_value=Decimal('-90'),
        max_value=Decimal('90'),
    )
    longitude = serializers.DecimalField(
        max_digits=9,
        decimal_places=6,
        min_value=Decimal('-180'),
        max_value=Decimal('180'),
    )
    activities = serializers.ListField(
        child=serializers.CharField(max_length=255),
        required=False,
    )
    photos = serializers.ListField(
        child=serializers.URLField(max_length=1000),
        required=False,
    )

    class Meta:
        model = Pin
        fields = [
            'id',
            'tripId',
            'title',
            'description',
            'latitude',
            'longitude',
            'geohash',
            'date',
            'order',
            'activities',
            'photos',
        ]
        read_only_fields = ['id', 'geohash']


class TripSerializer(serializers.ModelSerializer):
    """Serializer for Trip model"""
    userId = serializers.IntegerField(source='user_id', read_only=True)
    title = serializers.CharField(max_length=255, min_length=3)
    summary = serializers.CharField(min_length=10)
    startDate = serializers.DateTimeField(source='start_date')
    endDate = serializers.DateTimeField(source='end_date')
    isPublic = serializers.BooleanField(source='is_public', required=False)
    coverImage = serializers.URLField(
        source='cover_image',
        max_length=1000,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    categories = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    viewCount = serializers.IntegerField(source='view_count', read_only=True)
    likeCount = serializers.IntegerField(source='like_count', read_only=True)

    class Meta:
        model = Trip
        fields = [
            'id',
            'userId',
            'title',
            'summary',
            'startDate',
            'endDate',
            'isPublic',
            'coverImage',
            'categories',
            'createdAt',
            'viewCount',
            'likeCount',
        ]
        read_only_fields = ['id', 'userId', 'createdAt', 'viewCount', 'likeCount']

    def validate(self, attrs):
        """End date must not precede start date"""
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': "End date must be on or after the start date"})
        return attrs
