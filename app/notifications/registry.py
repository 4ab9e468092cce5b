"""
Notification type registry.

The closed catalog of notification kinds the platform can emit, and the
static metadata attached to each one (category, icons, colours, sound,
priority, default title).

Lookups are total: unknown or legacy identifiers resolve to
SYSTEM_ANNOUNCEMENT instead of raising, so a stale client string or an
old queued job can never break delivery.

Usage:
    from notifications.registry import NotificationType, metadata, resolve_type

    meta = metadata(NotificationType.POST_LIKED)
    meta.category      # "social"
    meta.sound         # "social.wav"

    resolve_type("App\\Notifications\\PostLiked")  # NotificationType.POST_LIKED
    resolve_type("no_such_type")                    # NotificationType.SYSTEM_ANNOUNCEMENT
"""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from django.db import models


class NotificationCategory(models.TextChoices):
    """Top-level grouping used for preferences, sounds and Android channels."""

    SOCIAL = "social", "Social"
    EVENTS = "events", "Events"
    JOBS = "jobs", "Jobs"
    INTERNSHIPS = "internships", "Internships"
    HACKATHONS = "hackathons", "Hackathons"
    MESSAGES = "messages", "Messages"
    ADMIN = "admin", "Admin"
    SYSTEM = "system", "System"


class NotificationType(models.TextChoices):
    """Every kind of notification the platform dispatches."""

    # Social
    POST_LIKED = "post_liked", "Post liked"
    COMMENT_ADDED = "comment_added", "Comment added"
    COMMENT_REPLY = "comment_reply", "Comment reply"
    POST_MENTION = "post_mention", "Post mention"
    PROFILE_VIEWED = "profile_viewed", "Profile viewed"

    # Events
    EVENT_CREATED = "event_created", "Event created"
    EVENT_REGISTERED = "event_registered", "Event registered"
    EVENT_WAITLISTED = "event_waitlisted", "Event waitlisted"
    EVENT_CONFIRMED = "event_confirmed", "Event confirmed"
    EVENT_REMINDER = "event_reminder", "Event reminder"
    EVENT_CANCELLED = "event_cancelled", "Event cancelled"

    # Jobs
    JOB_POSTED = "job_posted", "Job posted"
    JOB_APPLICATION_RECEIVED = "job_application_received", "Job application received"
    JOB_APPLICATION_ACCEPTED = "job_application_accepted", "Job application accepted"
    JOB_APPLICATION_REJECTED = "job_application_rejected", "Job application rejected"
    JOB_APPLICATION_INTERVIEW = (
        "job_application_interview",
        "Job application interview",
    )

    # Internships
    INTERNSHIP_APPLICATION_RECEIVED = (
        "internship_application_received",
        "Internship application received",
    )
    INTERNSHIP_APPLICATION_ACCEPTED = (
        "internship_application_accepted",
        "Internship application accepted",
    )
    INTERNSHIP_APPLICATION_REJECTED = (
        "internship_application_rejected",
        "Internship application rejected",
    )

    # Hackathons
    HACKATHON_CREATED = "hackathon_created", "Hackathon created"
    HACKATHON_REGISTERED = "hackathon_registered", "Hackathon registered"
    HACKATHON_WINNER = "hackathon_winner", "Hackathon winner"
    HACKATHON_TEAM_INVITED = "hackathon_team_invited", "Hackathon team invitation"
    HACKATHON_TEAM_INVITATION_ACCEPTED = (
        "hackathon_team_invitation_accepted",
        "Hackathon team invitation accepted",
    )
    HACKATHON_TEAM_JOIN_REQUEST = (
        "hackathon_team_join_request",
        "Hackathon team join request",
    )
    HACKATHON_TEAM_JOIN_ACCEPTED = (
        "hackathon_team_join_accepted",
        "Hackathon team join accepted",
    )

    # Messages
    MESSAGE_RECEIVED = "message_received", "Message received"

    # Admin
    ADMIN_APPROVED = "admin_approved", "Approved by admin"
    ADMIN_REJECTED = "admin_rejected", "Rejected by admin"

    # System
    SYSTEM_ANNOUNCEMENT = "system_announcement", "System announcement"


class NotificationPriority(models.TextChoices):
    HIGH = "high", "High"
    NORMAL = "normal", "Normal"


@dataclass(frozen=True)
class TypeMetadata:
    """
    Static presentation and routing metadata for a notification type.

    Attributes:
        category: NotificationCategory value
        icon: Client icon name for the notification row
        action_icon: Small badge icon overlaid on the actor avatar
        icon_color: Foreground colour of the icon
        background_color: Row background colour
        overlay_color: Overlay background colour behind the action icon
        sound: Sound file played on the device
        priority: "high" or "normal"
        default_title: Title used when the payload carries none
    """

    category: str
    icon: str
    action_icon: str
    icon_color: str
    background_color: str
    overlay_color: str
    sound: str
    priority: str
    default_title: str


# Sound per category; anything missing plays the platform default
CATEGORY_SOUNDS: dict[str, str] = {
    NotificationCategory.MESSAGES: "message.wav",
    NotificationCategory.SOCIAL: "social.wav",
    NotificationCategory.EVENTS: "event.wav",
    NotificationCategory.JOBS: "opportunity.wav",
    NotificationCategory.INTERNSHIPS: "opportunity.wav",
    NotificationCategory.HACKATHONS: "competition.wav",
    NotificationCategory.ADMIN: "admin.wav",
}
DEFAULT_SOUND = "default"

HIGH_PRIORITY_TYPES: frozenset[str] = frozenset(
    {
        NotificationType.MESSAGE_RECEIVED,
        NotificationType.EVENT_REMINDER,
        NotificationType.JOB_APPLICATION_ACCEPTED,
        NotificationType.JOB_APPLICATION_INTERVIEW,
        NotificationType.HACKATHON_WINNER,
        NotificationType.INTERNSHIP_APPLICATION_ACCEPTED,
        NotificationType.ADMIN_APPROVED,
        NotificationType.ADMIN_REJECTED,
    }
)

# (icon_color, background_color, overlay_color) per category
_CATEGORY_COLORS: dict[str, tuple[str, str, str]] = {
    NotificationCategory.SOCIAL: ("#EC4899", "#FDF2F8", "#FCE7F3"),
    NotificationCategory.EVENTS: ("#3B82F6", "#EFF6FF", "#DBEAFE"),
    NotificationCategory.JOBS: ("#10B981", "#ECFDF5", "#D1FAE5"),
    NotificationCategory.INTERNSHIPS: ("#06B6D4", "#ECFEFF", "#CFFAFE"),
    NotificationCategory.HACKATHONS: ("#8B5CF6", "#F5F3FF", "#EDE9FE"),
    NotificationCategory.MESSAGES: ("#4F46E5", "#EEF2FF", "#E0E7FF"),
    NotificationCategory.ADMIN: ("#F59E0B", "#FFFBEB", "#FEF3C7"),
    NotificationCategory.SYSTEM: ("#64748B", "#F8FAFC", "#F1F5F9"),
}

# type -> (category, icon, action_icon, default_title)
_TYPE_TABLE: dict[str, tuple[str, str, str, str]] = {
    NotificationType.POST_LIKED: ("social", "heart", "heart", "New Like"),
    NotificationType.COMMENT_ADDED: ("social", "message-circle", "message-circle", "New Comment"),
    NotificationType.COMMENT_REPLY: ("social", "corner-down-right", "message-circle", "New Reply"),
    NotificationType.POST_MENTION: ("social", "at-sign", "at-sign", "New Mention"),
    NotificationType.PROFILE_VIEWED: ("social", "eye", "eye", "Profile View"),
    NotificationType.EVENT_CREATED: ("events", "calendar", "plus", "New Event"),
    NotificationType.EVENT_REGISTERED: ("events", "calendar-check", "check", "Event Registration"),
    NotificationType.EVENT_WAITLISTED: ("events", "clock", "clock", "Event Waitlist"),
    NotificationType.EVENT_CONFIRMED: ("events", "calendar-check", "check-circle", "Event Confirmed"),
    NotificationType.EVENT_REMINDER: ("events", "bell", "bell", "Event Reminder"),
    NotificationType.EVENT_CANCELLED: ("events", "calendar-x", "x", "Event Cancelled"),
    NotificationType.JOB_POSTED: ("jobs", "briefcase", "plus", "New Job"),
    NotificationType.JOB_APPLICATION_RECEIVED: ("jobs", "file-text", "inbox", "New Job Application"),
    NotificationType.JOB_APPLICATION_ACCEPTED: ("jobs", "briefcase", "check-circle", "Application Accepted"),
    NotificationType.JOB_APPLICATION_REJECTED: ("jobs", "briefcase", "x-circle", "Application Update"),
    NotificationType.JOB_APPLICATION_INTERVIEW: ("jobs", "video", "calendar", "Interview Invitation"),
    NotificationType.INTERNSHIP_APPLICATION_RECEIVED: ("internships", "file-text", "inbox", "New Internship Application"),
    NotificationType.INTERNSHIP_APPLICATION_ACCEPTED: ("internships", "award", "check-circle", "Internship Accepted"),
    NotificationType.INTERNSHIP_APPLICATION_REJECTED: ("internships", "award", "x-circle", "Internship Update"),
    NotificationType.HACKATHON_CREATED: ("hackathons", "code", "plus", "New Hackathon"),
    NotificationType.HACKATHON_REGISTERED: ("hackathons", "code", "check", "Hackathon Registration"),
    NotificationType.HACKATHON_WINNER: ("hackathons", "trophy", "star", "Hackathon Winner"),
    NotificationType.HACKATHON_TEAM_INVITED: ("hackathons", "users", "user-plus", "Team Invitation"),
    NotificationType.HACKATHON_TEAM_INVITATION_ACCEPTED: ("hackathons", "users", "check", "Invitation Accepted"),
    NotificationType.HACKATHON_TEAM_JOIN_REQUEST: ("hackathons", "users", "user-plus", "Join Request"),
    NotificationType.HACKATHON_TEAM_JOIN_ACCEPTED: ("hackathons", "users", "check", "Join Request Accepted"),
    NotificationType.MESSAGE_RECEIVED: ("messages", "message-square", "send", "New Message"),
    NotificationType.ADMIN_APPROVED: ("admin", "shield-check", "check-circle", "Approved"),
    NotificationType.ADMIN_REJECTED: ("admin", "shield-off", "x-circle", "Not Approved"),
    NotificationType.SYSTEM_ANNOUNCEMENT: ("system", "bell", "info", "Notification"),
}

# Identifiers used before the enum existed: notification class names and
# the strings older mobile builds send back.
LEGACY_TYPE_MAP: dict[str, str] = {
    "PostLiked": NotificationType.POST_LIKED,
    "CommentAdded": NotificationType.COMMENT_ADDED,
    "CommentReply": NotificationType.COMMENT_REPLY,
    "MessageReceived": NotificationType.MESSAGE_RECEIVED,
    "EventReminder": NotificationType.EVENT_REMINDER,
    "SystemNotification": NotificationType.SYSTEM_ANNOUNCEMENT,
    # No enum counterpart; kept so old rows render as system notices
    "CommentLiked": NotificationType.SYSTEM_ANNOUNCEMENT,
    "UserFollowed": NotificationType.SYSTEM_ANNOUNCEMENT,
    "HackathonUpdate": NotificationType.SYSTEM_ANNOUNCEMENT,
    "JobApplicationUpdate": NotificationType.SYSTEM_ANNOUNCEMENT,
    "InternshipApplicationUpdate": NotificationType.SYSTEM_ANNOUNCEMENT,
    "post_like": NotificationType.POST_LIKED,
    "post_comment": NotificationType.COMMENT_ADDED,
    "message": NotificationType.MESSAGE_RECEIVED,
    "system": NotificationType.SYSTEM_ANNOUNCEMENT,
    "comment_like": NotificationType.SYSTEM_ANNOUNCEMENT,
    "follow": NotificationType.SYSTEM_ANNOUNCEMENT,
    "hackathon_update": NotificationType.SYSTEM_ANNOUNCEMENT,
    "job_application_update": NotificationType.SYSTEM_ANNOUNCEMENT,
    "internship_application_update": NotificationType.SYSTEM_ANNOUNCEMENT,
}


def _build_metadata(notification_type: str) -> TypeMetadata:
    category, icon, action_icon, title = _TYPE_TABLE[notification_type]
    icon_color, background_color, overlay_color = _CATEGORY_COLORS[category]
    return TypeMetadata(
        category=category,
        icon=icon,
        action_icon=action_icon,
        icon_color=icon_color,
        background_color=background_color,
        overlay_color=overlay_color,
        sound=CATEGORY_SOUNDS.get(category, DEFAULT_SOUND),
        priority=(
            NotificationPriority.HIGH
            if notification_type in HIGH_PRIORITY_TYPES
            else NotificationPriority.NORMAL
        ),
        default_title=title,
    )


REGISTRY: dict[str, TypeMetadata] = {
    member.value: _build_metadata(member) for member in NotificationType
}


def legacy_type_map() -> dict[str, str]:
    """Built-in legacy table extended by settings.NOTIFICATION_LEGACY_TYPE_MAP."""
    overrides = getattr(settings, "NOTIFICATION_LEGACY_TYPE_MAP", None) or {}
    return {**LEGACY_TYPE_MAP, **overrides}


def resolve_type(identifier) -> NotificationType:
    """
    Resolve any type identifier to a NotificationType.

    Accepts a NotificationType, a type value ("post_liked"), a legacy class
    name ("PostLiked"), or a fully-qualified legacy class name
    ("App\\Notifications\\PostLiked"). Returns SYSTEM_ANNOUNCEMENT when
    nothing matches.
    """
    if isinstance(identifier, NotificationType):
        return identifier
    if not identifier:
        return NotificationType.SYSTEM_ANNOUNCEMENT

    value = str(identifier)
    if value in REGISTRY:
        return NotificationType(value)

    legacy = legacy_type_map()
    short_name = value.replace("/", "\\").rsplit("\\", 1)[-1]
    for candidate in (value, short_name):
        mapped = legacy.get(candidate)
        if mapped in REGISTRY:
            return NotificationType(mapped)

    return NotificationType.SYSTEM_ANNOUNCEMENT


def metadata(identifier) -> TypeMetadata:
    """Metadata for any identifier; never raises."""
    return REGISTRY[resolve_type(identifier)]


def category_for(identifier) -> str:
    return metadata(identifier).category


def sound_for_category(category: str | None) -> str:
    return CATEGORY_SOUNDS.get(category, DEFAULT_SOUND)


def is_high_priority(identifier) -> bool:
    return resolve_type(identifier) in HIGH_PRIORITY_TYPES
