"""
Abstract models shared by the domain apps.

    BaseModel: created_at / updated_at timestamps, newest first
    UUIDPrimaryKeyMixin: UUID primary key for rows whose id leaves the server

Usage:
    class UserNotificationPreference(BaseModel):
        ...

    class Notification(UUIDPrimaryKeyMixin, BaseModel):
        ...

List mixins before BaseModel so their fields win the MRO.
"""

from __future__ import annotations

import uuid

from django.db import models


class BaseModel(models.Model):
    """
    Timestamps for every domain row.

    QuerySet.update() skips auto_now, so bulk updates set updated_at
    explicitly.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the row was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the row was last saved",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self.pk})"


class UUIDPrimaryKeyMixin(models.Model):
    """
    UUID primary key.

    Notification ids appear in API urls and push payloads; random UUIDs
    keep them unguessable.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True
