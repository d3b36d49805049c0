"""
Seeds the sample trips and pins shown on a fresh installation.

Usage: python manage.py seed_trips [--flush]
"""
import logging
import random
from datetime import datetime

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from user.models import UserProfile
from trips.models import Trip, Pin

logger = logging.getLogger(__name__)

UNSPLASH = "https://images.unsplash.com/{}?auto=format&fit=crop&w=800&h=500"

SAMPLE_TRIPS = [
    {
        'title': "Swiss Alps Journey",
        'summary': "Exploring the breathtaking mountain ranges and charming villages of Switzerland over two weeks.",
        'start_date': "2023-04-12", 'end_date': "2023-04-26",
        'cover_image': "photo-1476514525535-07fb3b4ae5f1",
        'categories': ["Mountains", "Hiking", "Nature"],
    },
    {
        'title': "Southeast Asia Backpacking",
        'summary': "Three months exploring Thailand, Vietnam, Cambodia, and Indonesia. Best street foods and hidden beaches!",
        'start_date': "2023-01-05", 'end_date': "2023-03-25",
        'cover_image': "photo-1510414842594-a61c69b5ae57",
        'categories': ["Beach", "Food", "Culture"],
    },
    {
        'title': "American Southwest Road Trip",
        'summary': "Two weeks driving through Arizona, Utah, and New Mexico. National parks, hiking trails, and amazing sunsets.",
        'start_date': "2023-05-08", 'end_date': "2023-05-22",
        'cover_image': "photo-1469854523086-cc02fe5d8800",
        'categories': ["Road Trip", "National Parks", "Desert"],
    },
    {
        'title': "Italian Coastal Dream",
        'summary': "A stunning two-week journey through Italy's most beautiful coastal towns, from the colorful villages "
                   "of Cinque Terre to the cliffside beauty of the Amalfi Coast.",
        'start_date': "2023-06-05", 'end_date': "2023-06-19",
        'cover_image': "photo-1533575770077-052fa2c609fc",
        'categories': ["Coastal", "Food & Wine", "Cultural", "Relaxation"],
        'view_count': 3200, 'like_count': 458,
        'pins': [
            {
                'title': "Cinque Terre",
                'description': "Explored the colorful cliff-side villages of the Cinque Terre. Hiked between towns "
                               "and took amazing coastal photos.",
                'longitude': "9.7084", 'latitude': "44.1474", 'date': "2023-06-05",
                'activities': ["Hiking", "Photography"],
            },
            {
                'title': "Florence",
                'description': "Visited world-class museums and enjoyed amazing Italian cuisine in this Renaissance city.",
                'longitude': "11.2558", 'latitude': "43.7696", 'date': "2023-06-09",
                'activities': ["Museums", "Dining"],
            },
            {
                'title': "Sorrento",
                'description': "Relaxed in this beautiful coastal town with stunning views of the Bay of Naples.",
                'longitude': "14.3757", 'latitude': "40.6263", 'date': "2023-06-12",
                'activities': ["Beaches", "Boat Tours"],
            },
            {
                'title': "Amalfi Coast",
                'description': "Drove along the stunning Amalfi Coast, stopping at picturesque towns like Positano and Amalfi.",
                'longitude': "14.6027", 'latitude': "40.6340", 'date': "2023-06-16",
                'activities': ["Scenic Drives", "Relaxation"],
            },
        ],
    },
    {
        'title': "Island Hopping: Greek Isles",
        'summary': "Exploring the beautiful islands of Greece, their beaches, cuisine, and architecture.",
        'start_date': "2023-07-10", 'end_date': "2023-07-20",
        'cover_image': "photo-1506953823976-52e1fdc0149a",
        'categories': ["Island", "Beach", "Culture"],
    },
    {
        'title': "Tokyo: Modern Meets Traditional",
        'summary': "Exploring the contrast between modern technology and traditional culture in Tokyo.",
        'start_date': "2023-08-05", 'end_date': "2023-08-13",
        'cover_image': "photo-1493976040374-85c8e12f0c0e",
        'categories': ["Urban", "Culture", "Food"],
    },
    {
        'title': "Pacific Northwest Trek",
        'summary': "Hiking through the forests and mountains of the Pacific Northwest.",
        'start_date': "2023-09-01", 'end_date': "2023-09-07",
        'cover_image': "photo-1533240332313-0db49b459ad6",
        'categories': ["Hiking", "Nature", "Photography"],
    },
    {
        'title': "Historic European Capitals",
        'summary': "Traveling through the historic capitals of Europe, exploring architecture and history.",
        'start_date': "2023-10-01", 'end_date': "2023-10-15",
        'cover_image': "photo-1513635269975-59663e0ac1ad",
        'categories': ["Urban", "History", "Culture"],
    },
]


def _aware(day: str) -> datetime:
    return timezone.make_aware(datetime.fromisoformat(day))


class Command(BaseCommand):
    help = "Seed the database with sample trips and pins"

    def add_arguments(self, parser):
        parser.add_argument(
            '--flush',
            action='store_true',
            help="Delete the default user's existing trips before seeding",
        )

    def handle(self, *args, **options):
        profile = UserProfile.get_default()

        with transaction.atomic():
            if options['flush']:
                deleted, _ = Trip.objects.filter(user=profile).delete()
                logger.info(f"Flushed {deleted} existing rows")

            created = 0
            for data in SAMPLE_TRIPS:
                if Trip.objects.filter(user=profile, title=data['title']).exists():
                    continue

                trip = Trip.objects.create(
                    user=profile,
                    title=data['title'],
                    summary=data['summary'],
                    start_date=_aware(data['start_date']),
                    end_date=_aware(data['end_date']),
                    cover_image=UNSPLASH.format(data['cover_image']),
                    categories=data['categories'],
                    view_count=data.get('view_count', random.randint(0, 5000)),
                    like_count=data.get('like_count', random.randint(0, 600)),
                )
                for order, pin in enumerate(data.get('pins', []), start=1):
                    Pin.objects.create(
                        trip=trip,
                        title=pin['title'],
                        description=pin['description'],
                        latitude=pin['latitude'],
                        longitude=pin['longitude'],
                        date=_aware(pin['date']),
                        order=order,
                        activities=pin['activities'],
                    )
                created += 1

        self.stdout.write(self.style.SUCCESS(f"Seeded {created} trips"))
