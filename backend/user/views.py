from rest_framework.generics import get_object_or_404
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import UserProfile
from .serializers import UserProfileSerializer


class MeView(APIView):
    """Current user. Without real auth this is always the default profile."""

    def get(self, request):
        profile = UserProfile.get_default()
        serializer = UserProfileSerializer(profile)
        return Response(serializer.data)


class ProfileView(APIView):

    def get(self, request, id):
        profile = get_object_or_404(UserProfile, id=id)
        serializer = UserProfileSerializer(profile)
        return Response(serializer.data)
