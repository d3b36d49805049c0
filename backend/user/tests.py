from django.test import TestCase, override_settings
from django.urls import reverse
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase
from .models import UserProfile

User = get_user_model()


class DefaultProfileTests(TestCase):

    def test_get_default_creates_profile_once(self):
        """The default profile is created lazily and reused afterwards."""
        first = UserProfile.get_default()
        second = UserProfile.get_default()

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(UserProfile.objects.count(), 1)
        self.assertEqual(first.username, 'alexmorgan')
        self.assertEqual(first.name, 'Alex Morgan')

    @override_settings(DEFAULT_USERNAME='wanderer')
    def test_get_default_uses_configured_username(self):
        profile = UserProfile.get_default()
        self.assertEqual(profile.username, 'wanderer')

    def test_get_default_reuses_existing_auth_user(self):
        user = User.objects.create_user(username='alexmorgan', password='password123')
        profile = UserProfile.get_default()
        self.assertEqual(profile.user, user)


class MeViewTests(APITestCase):

    def test_me_returns_default_profile(self):
        response = self.client.get(reverse('me'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], 'alexmorgan')
        self.assertEqual(response.data['name'], 'Alex Morgan')
        self.assertIn('avatar', response.data)

    def test_profile_not_found(self):
        response = self.client.get(reverse('profile', args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_profile_by_id(self):
        profile = UserProfile.get_default()
        response = self.client.get(reverse('profile', args=[profile.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], profile.id)

    def test_auth_me_alias(self):
        """The web client reads the current user from /api/auth/me"""
        for path in ('/api/auth/me', '/api/auth/me/', reverse('auth-me')):
            response = self.client.get(path)
            self.assertEqual(response.status_code, status.HTTP_200_OK, path)
            self.assertEqual(response.data['username'], 'alexmorgan')
