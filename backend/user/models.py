import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import models, transaction

logger = logging.getLogger(__name__)


class UserProfile(models.Model):
    """
    Public profile of a trip author. The application has no real authentication,
    so every trip is owned by the single default profile returned by get_default().
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile"
    )
    name = models.CharField(max_length=255, help_text="Display name shown on trip cards")
    bio = models.TextField(max_length=500, blank=True, default="")
    avatar_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.username

    @property
    def username(self) -> str:
        return self.user.username

    @classmethod
    def get_default(cls) -> "UserProfile":
        """
        Returns the fixed default profile, creating the auth user and profile
        the first time it is requested.
        """
        username = settings.DEFAULT_USERNAME
        profile = cls.objects.select_related("user").filter(user__username=username).first()
        if profile:
            return profile

        User = get_user_model()
        with transaction.atomic():
            user, _ = User.objects.get_or_create(username=username)
            profile, created = cls.objects.get_or_create(
                user=user,
                defaults={
                    "name": "Alex Morgan",
                    "bio": "Travel enthusiast and photographer. Exploring the world one trip at a time.",
                },
            )
        if created:
            logger.info(f"Created default user profile '{username}'")
        return profile
