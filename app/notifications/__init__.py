"""
Notifications app: in-app inbox and mobile push delivery.

This app provides:
- A closed registry of notification types with category, visuals, sound
  and priority (registry.py) and mobile navigation targets (navigation.py)
- Notification and UserNotificationPreference models
- NotificationService, the dispatcher that stores the in-app record and
  fans out to push and mail according to user preferences
- Firebase Cloud Messaging delivery (formatters, providers, gateway)
- Device registration with topic subscriptions
- Celery task for async delivery and a REST API for the inbox

Usage:
    from notifications.events import notify
    from notifications.registry import NotificationType

    # Queue a notification once the current transaction commits
    notify(
        post.owner,
        NotificationType.POST_LIKED,
        {"post_id": post.id, "liker_id": liker.id, "title": "Post Liked"},
    )
"""
