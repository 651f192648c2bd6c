"""API tests for authentication endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.payload = {
            "name": "Jane Renter",
            "email": "jane@example.com",
            "password": "secret123",
            "phone": "+1 (555) 010-2030",
            "address": "42 Elm Street",
        }

    def test_register_returns_tokens(self) -> None:
        response = self.client.post(reverse("auth:register"), self.payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], "jane@example.com")
        self.assertEqual(response.data["user"]["role"], User.Role.CUSTOMER)

        user = User.objects.get(email="jane@example.com")
        self.assertTrue(user.check_password("secret123"))
        self.assertIsNone(user.driver_license)

    def test_register_duplicate_email_case_insensitive(self) -> None:
        User.objects.create_user(email="jane@example.com", name="Existing", password="secret123")
        self.payload["email"] = "JANE@example.com"
        response = self.client.post(reverse("auth:register"), self.payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data["errors"])

    def test_register_validates_fields(self) -> None:
        payload = {**self.payload, "name": "J", "password": "123", "address": "x"}
        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("name", "password", "address"):
            self.assertIn(field, response.data["errors"])

    def test_register_duplicate_driver_license(self) -> None:
        User.objects.create_user(
            email="other@example.com", name="Other", password="secret123", driver_license="DL-1"
        )
        payload = {**self.payload, "driver_license": "DL-1"}
        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("driver_license", response.data["errors"])

    def test_login_and_me(self) -> None:
        User.objects.create_user(email="jane@example.com", name="Jane", password="secret123")
        response = self.client.post(
            reverse("auth:login"), {"email": "jane@example.com", "password": "secret123"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        access = response.data["tokens"]["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        me = self.client.get(reverse("auth:me"))
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["email"], "jane@example.com")

    def test_login_wrong_password_is_unauthorized(self) -> None:
        User.objects.create_user(email="jane@example.com", name="Jane", password="secret123")
        response = self.client.post(
            reverse("auth:login"), {"email": "jane@example.com", "password": "wrong"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_token(self) -> None:
        response = self.client.post(reverse("auth:register"), self.payload, format="json")
        refresh = response.data["tokens"]["refresh"]
        response = self.client.post(reverse("auth:token_refresh"), {"refresh": refresh}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
