"""Rental locations."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.db.models.functions import Lower  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Branch(models.Model):
    """Physical rental location owning part of the fleet."""

    name = models.CharField(max_length=100)
    location = models.CharField(max_length=200)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(max_length=100, blank=True)
    address = models.TextField(blank=True)
    manager_name = models.CharField(max_length=100, blank=True)
    opening_hours = models.CharField(max_length=100, default="9:00 AM - 6:00 PM")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Branch")
        verbose_name_plural = _("Branches")
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(Lower("name"), name="branch_unique_name_ci"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.location})"
