from decimal import Decimal

import geohash2
from django.db import models
from django.db.models import F
from django.core.validators import MinValueValidator, MaxValueValidator


class Trip(models.Model):
    """
    Database entity representing a travel journal entry. It stores the story of
    the trip and the counters used for trending/sorting, and owns an ordered
    collection of Pins.
    """

    # Foreign Keys
    user = models.ForeignKey(
        'user.UserProfile',
        on_delete=models.CASCADE,
        related_name='trips',
        help_text="Reference to the author of the trip"
    )

    # Basic Information
    title = models.CharField(
        max_length=255,
        help_text="User defined name for the trip"
    )
    summary = models.TextField(
        help_text="Short story of the trip shown on cards and used by search"
    )

    # Date & Time
    start_date = models.DateTimeField(
        help_text="The day the trip started"
    )
    end_date = models.DateTimeField(
        help_text="The day the trip ended"
    )

    # Presentation
    is_public = models.BooleanField(default=True)
    cover_image = models.URLField(
        max_length=1000,
        blank=True,
        null=True,
        help_text="Cover photo URL"
    )
    categories = models.JSONField(
        default=list,
        blank=True,
        help_text="Ordered list of tags such as 'Hiking' or 'Food & Wine'"
    )

    # Counters
    view_count = models.IntegerField(validators=[MinValueValidator(0)], default=0)
    like_count = models.IntegerField(validators=[MinValueValidator(0)], default=0)

    # Timestamp
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='trips_trip_user_id_8d3b1e_idx'),
            models.Index(fields=['-view_count'], name='trips_trip_view_co_4f2a7c_idx'),
        ]

    def __str__(self):
        return self.title

    def increment_views(self):
        """Atomically bumps the view counter and refreshes the instance."""
        Trip.objects.filter(pk=self.pk).update(view_count=F('view_count') + 1)
        self.refresh_from_db(fields=['view_count'])

    def like(self):
        """Atomically bumps the like counter and refreshes the instance."""
        Trip.objects.filter(pk=self.pk).update(like_count=F('like_count') + 1)
        self.refresh_from_db(fields=['like_count'])


class Pin(models.Model):
    """
    A geo-located waypoint within a Trip. The order field defines the display
    sequence of pins on the trip timeline.
    """

    # Foreign Keys
    trip = models.ForeignKey(
        Trip,
        on_delete=models.CASCADE,
        related_name='pins',
        help_text="Reference to the parent trip"
    )

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)

    # Location
    latitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        validators=[MinValueValidator(Decimal('-90')), MaxValueValidator(Decimal('90'))],
    )
    longitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        validators=[MinValueValidator(Decimal('-180')), MaxValueValidator(Decimal('180'))],
    )
    geohash = models.CharField(
        max_length=12,
        blank=True,
        default="",
        editable=False,
        help_text="Geohash (precision 6) of the coordinates, used as a map cluster key"
    )

    date = models.DateTimeField(help_text="When this place was visited")
    order = models.IntegerField(help_text="The sequence number in the trip timeline")

    activities = models.JSONField(default=list, blank=True)
    photos = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ['trip', 'order']
        indexes = [
            models.Index(fields=['trip', 'order'], name='trips_pin_trip_id_5c9e02_idx'),
        ]

    def __str__(self):
        return f"{self.trip.title} - Pin {self.order}: {self.title}"

    def save(self, *args, **kwargs):
        """
        Overridden save method to ensure coordinates are valid and to keep the
        geohash in sync with them.
        """
        lat = float(self.latitude)
        lon = float(self.longitude)
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            raise ValueError("Invalid coordinates: latitude must be -90 to 90, longitude must be -180 to 180")

        self.geohash = geohash2.encode(lat, lon, 6)
        super().save(*args, **kwargs)
