"""
Deep-link navigation for the mobile client.

Maps (notification type, payload) to the screen the app should open when
a notification is tapped. Pure and deterministic: missing payload keys
become None, unknown types land on the Notifications screen.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import Any

from notifications.registry import NotificationType as T
from notifications.registry import resolve_type


@dataclass(frozen=True)
class NavigationPayload:
    screen: str
    params: dict[str, Any] = field(default_factory=dict)
    tab: str = "Notifications"
    sub_tab: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        if self.sub_tab is None:
            payload.pop("sub_tab")
        return payload


FALLBACK = NavigationPayload(screen="Notifications", params={}, tab="Notifications")


def _post(scroll_to_comments: bool) -> Callable[[dict], NavigationPayload]:
    def build(data: dict) -> NavigationPayload:
        return NavigationPayload(
            screen="PostDetail",
            params={
                "post_id": data.get("post_id"),
                "comment_id": data.get("comment_id"),
                "scroll_to_comments": scroll_to_comments,
            },
            tab="Feed",
        )

    return build


def _event(show_registration: bool) -> Callable[[dict], NavigationPayload]:
    def build(data: dict) -> NavigationPayload:
        return NavigationPayload(
            screen="EventDetail",
            params={
                "event_id": data.get("event_id"),
                "show_registration": show_registration,
            },
            tab="Events",
        )

    return build


def _job_detail(data: dict) -> NavigationPayload:
    return NavigationPayload(
        screen="JobDetail", params={"job_id": data.get("job_id")}, tab="Jobs"
    )


def _job_application(data: dict) -> NavigationPayload:
    return NavigationPayload(
        screen="JobApplication",
        params={
            "application_id": data.get("application_id"),
            "job_id": data.get("job_id"),
        },
        tab="Jobs",
        sub_tab="MyApplications",
    )


def _internship_application(data: dict) -> NavigationPayload:
    return NavigationPayload(
        screen="InternshipApplication",
        params={
            "application_id": data.get("application_id"),
            "internship_id": data.get("internship_id"),
        },
        tab="Internships",
        sub_tab="MyApplications",
    )


def _hackathon_detail(data: dict) -> NavigationPayload:
    return NavigationPayload(
        screen="HackathonDetail",
        params={"hackathon_id": data.get("hackathon_id")},
        tab="Hackathons",
    )


def _hackathon_team(show_invitations: bool) -> Callable[[dict], NavigationPayload]:
    def build(data: dict) -> NavigationPayload:
        return NavigationPayload(
            screen="HackathonTeam",
            params={
                "hackathon_id": data.get("hackathon_id"),
                "team_id": data.get("team_id"),
                "show_invitations": show_invitations,
            },
            tab="Hackathons",
        )

    return build


def _profile(data: dict) -> NavigationPayload:
    return NavigationPayload(
        screen="UserProfile", params={"user_id": data.get("viewer_id")}, tab="Profile"
    )


def _conversation(data: dict) -> NavigationPayload:
    return NavigationPayload(
        screen="ChatConversation",
        params={
            "conversation_id": data.get("conversation_id"),
            "sender_id": data.get("sender_id"),
        },
        tab="Messages",
    )


def _admin(data: dict) -> NavigationPayload:
    return NavigationPayload(
        screen="AdminNotification",
        params={"notification_id": data.get("notification_id")},
        tab="Home",
    )


def _fallback(data: dict) -> NavigationPayload:
    return FALLBACK


ROUTES: dict[str, Callable[[dict], NavigationPayload]] = {
    T.POST_LIKED: _post(scroll_to_comments=False),
    T.COMMENT_ADDED: _post(scroll_to_comments=True),
    T.COMMENT_REPLY: _post(scroll_to_comments=True),
    T.POST_MENTION: _post(scroll_to_comments=False),
    T.EVENT_CREATED: _event(show_registration=False),
    T.EVENT_REGISTERED: _event(show_registration=True),
    T.EVENT_WAITLISTED: _event(show_registration=True),
    T.EVENT_CONFIRMED: _event(show_registration=False),
    T.EVENT_REMINDER: _event(show_registration=False),
    T.EVENT_CANCELLED: _event(show_registration=False),
    T.JOB_POSTED: _job_detail,
    T.JOB_APPLICATION_RECEIVED: _job_application,
    T.JOB_APPLICATION_ACCEPTED: _job_application,
    T.JOB_APPLICATION_REJECTED: _job_application,
    T.JOB_APPLICATION_INTERVIEW: _job_application,
    T.HACKATHON_CREATED: _hackathon_detail,
    T.HACKATHON_REGISTERED: _hackathon_detail,
    T.HACKATHON_WINNER: _hackathon_detail,
    T.HACKATHON_TEAM_INVITED: _hackathon_team(show_invitations=True),
    T.HACKATHON_TEAM_INVITATION_ACCEPTED: _hackathon_team(show_invitations=False),
    T.HACKATHON_TEAM_JOIN_REQUEST: _hackathon_team(show_invitations=True),
    T.HACKATHON_TEAM_JOIN_ACCEPTED: _hackathon_team(show_invitations=False),
    T.INTERNSHIP_APPLICATION_RECEIVED: _internship_application,
    T.INTERNSHIP_APPLICATION_ACCEPTED: _internship_application,
    T.INTERNSHIP_APPLICATION_REJECTED: _internship_application,
    T.PROFILE_VIEWED: _profile,
    T.MESSAGE_RECEIVED: _conversation,
    T.ADMIN_APPROVED: _admin,
    T.ADMIN_REJECTED: _admin,
    T.SYSTEM_ANNOUNCEMENT: _fallback,
}


def build_navigation(notification_type, data: dict | None = None) -> NavigationPayload:
    """
    Build the navigation payload for a notification.

    Args:
        notification_type: NotificationType or any identifier resolve_type accepts
        data: Notification payload; missing keys are tolerated

    Returns:
        NavigationPayload (never None)
    """
    builder = ROUTES.get(resolve_type(notification_type), _fallback)
    return builder(data or {})
