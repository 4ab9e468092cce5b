"""
Platform push formatting.

Turns a generic (token, type, data) request into the envelopes each push
platform expects: a shared string-only data map, an Android block, an APNs
block and a Web Push block. Envelopes are plain dicts so they can be
inspected in tests and logged; notifications.providers converts them into
firebase_admin.messaging objects.

Usage:
    from notifications.formatters import PushFormatter

    envelopes = PushFormatter().format(token, NotificationType.POST_LIKED, data)
    envelopes.android["notification"]["channel_id"]  # "social"
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from notifications.navigation import NavigationPayload, build_navigation
from notifications.registry import metadata, resolve_type

DEFAULT_BRAND_COLOR = "#4F46E5"
DEFAULT_WEB_ICON = "/images/logo.png"
DEFAULT_WEB_BADGE = "/images/badge.png"

# Entity ids copied into the data map when present
FORWARDED_ID_KEYS = (
    "post_id",
    "event_id",
    "job_id",
    "hackathon_id",
    "application_id",
    "team_id",
    "user_id",
)


@dataclass
class PlatformEnvelopes:
    """Provider-neutral description of one push message for one device token."""

    token: str
    notification: dict[str, str]
    data: dict[str, str]
    android: dict[str, Any] = field(default_factory=dict)
    apns: dict[str, Any] = field(default_factory=dict)
    webpush: dict[str, Any] = field(default_factory=dict)


def _to_json(value: Any) -> str:
    if isinstance(value, NavigationPayload):
        value = value.to_dict()
    return json.dumps(value, cls=DjangoJSONEncoder)


class PushFormatter:
    """
    Builds PlatformEnvelopes for a notification.

    Never raises for missing optional fields; every absent value falls back
    to the registry default or an empty string.
    """

    def __init__(
        self,
        brand_color: str | None = None,
        web_icon: str | None = None,
        web_badge: str | None = None,
    ):
        self.brand_color = brand_color or getattr(
            settings, "NOTIFICATION_BRAND_COLOR", DEFAULT_BRAND_COLOR
        )
        self.web_icon = web_icon or getattr(
            settings, "NOTIFICATION_WEB_ICON", DEFAULT_WEB_ICON
        )
        self.web_badge = web_badge or getattr(
            settings, "NOTIFICATION_WEB_BADGE", DEFAULT_WEB_BADGE
        )

    def format(self, token: str, notification_type, data: dict | None) -> PlatformEnvelopes:
        data = data or {}
        notification_type = resolve_type(notification_type)
        meta = metadata(notification_type)

        title = data.get("title") or meta.default_title
        body = data.get("body") or ""
        priority = "high" if data.get("priority") == "high" else "normal"
        sound = data.get("sound") or "default"

        shared = self.build_data(notification_type, data, sound=sound, priority=priority)

        return PlatformEnvelopes(
            token=token,
            notification={"title": title, "body": body},
            data=shared,
            android=self._android(notification_type, meta.category, shared, sound, priority),
            apns=self._apns(notification_type, meta.category, data, title, body, sound, priority),
            webpush=self._webpush(data, title, body),
        )

    def build_data(
        self,
        notification_type,
        data: dict,
        sound: str = "default",
        priority: str = "normal",
    ) -> dict[str, str]:
        """The string-only data map shared by every platform."""
        meta = metadata(notification_type)
        navigation = data.get("navigation")
        if navigation is None:
            navigation = build_navigation(notification_type, data)

        payload = {
            "notification_type": resolve_type(notification_type).value,
            "category": meta.category,
            "timestamp": str(data.get("timestamp") or timezone.now().isoformat()),
            "navigation": navigation if isinstance(navigation, str) else _to_json(navigation),
            "actor": _to_json(data.get("actor")),
            "badge_count": str(data.get("badge_count") or 0),
            "sound": sound,
            "priority": priority,
        }
        for key in FORWARDED_ID_KEYS:
            if data.get(key) is not None:
                payload[key] = str(data[key])
        return payload

    def _android(
        self,
        notification_type,
        category: str,
        shared: dict[str, str],
        sound: str,
        priority: str,
    ) -> dict[str, Any]:
        return {
            "priority": priority,
            "data": dict(shared),
            "notification": {
                "sound": sound,
                "channel_id": category,
                "tag": notification_type.value,
                "color": self.brand_color,
                "default_sound": True,
                "default_vibrate_timings": True,
                "default_light_settings": True,
            },
        }

    def _apns(
        self,
        notification_type,
        category: str,
        data: dict,
        title: str,
        body: str,
        sound: str,
        priority: str,
    ) -> dict[str, Any]:
        alert = {"title": title, "body": body}
        if data.get("subtitle"):
            alert["subtitle"] = data["subtitle"]

        try:
            badge = int(data.get("badge_count") or 0)
        except (TypeError, ValueError):
            badge = 0

        navigation = data.get("navigation")
        if navigation is None:
            navigation = build_navigation(notification_type, data)
        if isinstance(navigation, NavigationPayload):
            navigation = navigation.to_dict()

        return {
            "headers": {
                "apns-priority": "10" if priority == "high" else "5",
                "apns-push-type": "alert",
            },
            "aps": {
                "alert": alert,
                "badge": badge,
                "sound": sound,
                "category": category,
                "thread-id": category,
                "mutable-content": 1,
                "content-available": 1,
            },
            "custom": {
                "navigation": navigation or {},
                "actor": data.get("actor"),
            },
        }

    def _webpush(self, data: dict, title: str, body: str) -> dict[str, Any]:
        return {
            "notification": {
                "title": title,
                "body": body,
                "icon": data.get("icon") or self.web_icon,
                "badge": self.web_badge,
                "requireInteraction": True,
            }
        }
