from rest_framework import serializers
from .models import UserProfile


class UserProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    avatar = serializers.URLField(source="avatar_url", read_only=True)

    class Meta:
        model = UserProfile
        fields = [
            "id",
            "username",
            "name",
            "bio",
            "avatar",
        ]
