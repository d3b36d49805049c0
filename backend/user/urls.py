from django.urls import path
from .views import MeView, ProfileView

urlpatterns = [
    path("me/", MeView.as_view(), name="me"),
    path("<int:id>/", ProfileView.as_view(), name="profile"),
]
