"""
URL routing for trips app.
"""
from django.urls import path, include, re_path
from rest_framework.routers import DefaultRouter
from .views import TripViewSet, PinViewSet


class OptionalSlashRouter(DefaultRouter):
    """DefaultRouter whose routes answer with or without a trailing slash"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.trailing_slash = '/?'


router = OptionalSlashRouter()
router.register(r'trips', TripViewSet, basename='trip')
router.register(r'pins', PinViewSet, basename='pin')

app_name = 'trips'

urlpatterns = [
    # Top-level aliases used by the web client
    re_path(r'^trending/?$', TripViewSet.as_view({'get': 'trending'}), name='trending'),
    re_path(r'^recent/?$', TripViewSet.as_view({'get': 'recent'}), name='recent'),
    re_path(r'^my-trips/?$', TripViewSet.as_view({'get': 'mine'}), name='my-trips'),
    path('', include(router.urls)),
]
