"""
Notification helpers for domain code.

SendsNotifications builds the canonical payload for each common platform
event and queues it through notifications.events. Mix it into any service
or view that reacts to user actions.

Usage:
    from notifications.mixins import SendsNotifications

    class CommentService(SendsNotifications, BaseService):
        @classmethod
        def add_comment(cls, post, author, text):
            comment = Comment.objects.create(post=post, author=author, text=text)
            cls.notify_comment_added(post.owner, author, post.id, comment.id, text)
            return comment

Every helper that has an actor returns False without queueing anything
when the recipient is the actor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from notifications import events
from notifications.registry import NotificationType
from notifications.services import DEFAULT_CHANNELS

if TYPE_CHECKING:
    from authentication.models import User

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 50

JOB_STATUS_NOTIFICATIONS = {
    "accepted": (
        NotificationType.JOB_APPLICATION_ACCEPTED,
        "Application Accepted",
        "Congratulations! Your application for {title} has been accepted.",
    ),
    "rejected": (
        NotificationType.JOB_APPLICATION_REJECTED,
        "Application Update",
        "Your application for {title} has been reviewed.",
    ),
    "interview": (
        NotificationType.JOB_APPLICATION_INTERVIEW,
        "Interview Scheduled",
        "You have been selected for an interview for {title}",
    ),
}


def truncate_preview(text: str | None, length: int = PREVIEW_LENGTH) -> str | None:
    if not text:
        return text
    return text if len(text) <= length else f"{text[:length]}..."


def _is_self(recipient: User, actor: User) -> bool:
    return recipient.pk == actor.pk


class SendsNotifications:
    """Payload builders for platform events; all methods are classmethods."""

    @classmethod
    def _queue(cls, recipient, notification_type, data: dict[str, Any], channels=DEFAULT_CHANNELS) -> bool:
        return events.notify(recipient, notification_type, data, channels)

    @classmethod
    def notify_post_liked(cls, post_owner: User, liker: User, post_id) -> bool:
        if _is_self(post_owner, liker):
            return False
        return cls._queue(
            post_owner,
            NotificationType.POST_LIKED,
            {
                "title": "Post Liked",
                "body": f"{liker.get_full_name()} liked your post",
                "post_id": post_id,
                "liker_id": liker.pk,
                "liker_name": liker.get_full_name(),
                "avatar": liker.avatar or None,
                "avatar_color": liker.avatar_color or None,
            },
        )

    @classmethod
    def notify_comment_added(
        cls,
        post_owner: User,
        commenter: User,
        post_id,
        comment_id,
        comment_preview: str | None = None,
    ) -> bool:
        if _is_self(post_owner, commenter):
            return False
        body = f"{commenter.get_full_name()} commented on your post"
        if comment_preview:
            body += f': "{truncate_preview(comment_preview)}"'
        return cls._queue(
            post_owner,
            NotificationType.COMMENT_ADDED,
            {
                "title": "New Comment",
                "body": body,
                "post_id": post_id,
                "comment_id": comment_id,
                "commenter_id": commenter.pk,
                "commenter_name": commenter.get_full_name(),
                "avatar": commenter.avatar or None,
                "avatar_color": commenter.avatar_color or None,
                "comment_preview": comment_preview,
            },
        )

    @classmethod
    def notify_comment_reply(
        cls,
        comment_owner: User,
        replier: User,
        post_id,
        comment_id,
        reply_preview: str | None = None,
    ) -> bool:
        if _is_self(comment_owner, replier):
            return False
        body = f"{replier.get_full_name()} replied to your comment"
        if reply_preview:
            body += f': "{truncate_preview(reply_preview)}"'
        return cls._queue(
            comment_owner,
            NotificationType.COMMENT_REPLY,
            {
                "title": "New Reply",
                "body": body,
                "post_id": post_id,
                "comment_id": comment_id,
                "replier_id": replier.pk,
                "replier_name": replier.get_full_name(),
                "avatar": replier.avatar or None,
                "avatar_color": replier.avatar_color or None,
                "reply_preview": reply_preview,
            },
        )

    @classmethod
    def notify_event_registration(cls, user: User, event: dict[str, Any]) -> bool:
        return cls._queue(
            user,
            NotificationType.EVENT_REGISTERED,
            {
                "title": "Event Registration Confirmed",
                "body": f"You have successfully registered for {event['name']}",
                "event_id": event["id"],
                "event_name": event["name"],
                "event_date": event.get("date"),
                "event_location": event.get("location"),
            },
        )

    @classmethod
    def notify_event_reminder(cls, user: User, event: dict[str, Any]) -> bool:
        return cls._queue(
            user,
            NotificationType.EVENT_REMINDER,
            {
                "title": "Event Reminder",
                "body": f"{event['name']} starts {event['time_until']}",
                "subtitle": event.get("location"),
                "event_id": event["id"],
                "event_name": event["name"],
                "event_date": event.get("date"),
                "event_time": event.get("time"),
                "event_location": event.get("location"),
            },
        )

    @classmethod
    def notify_job_application_received(cls, employer: User, application: dict[str, Any]) -> bool:
        if employer.pk == application.get("applicant_id"):
            return False
        return cls._queue(
            employer,
            NotificationType.JOB_APPLICATION_RECEIVED,
            {
                "title": "New Job Application",
                "body": f"{application['applicant_name']} applied for {application['job_title']}",
                "job_id": application["job_id"],
                "application_id": application["application_id"],
                "applicant_id": application["applicant_id"],
                "applicant_name": application["applicant_name"],
                "job_title": application["job_title"],
            },
        )

    @classmethod
    def notify_job_application_status(cls, applicant: User, status: str, job: dict[str, Any]) -> bool:
        """
        Tell an applicant their application moved to accepted, rejected or
        interview. Other statuses are ignored. Also sent by mail.
        """
        entry = JOB_STATUS_NOTIFICATIONS.get(status)
        if entry is None:
            logger.debug(f"No notification for job application status {status!r}")
            return False
        notification_type, title, body = entry
        return cls._queue(
            applicant,
            notification_type,
            {
                "title": title,
                "body": body.format(title=job["title"]),
                "job_id": job["id"],
                "job_title": job["title"],
                "company": job.get("company"),
                "application_id": job.get("application_id"),
                "interview_date": job.get("interview_date"),
            },
            channels=("database", "push", "mail"),
        )

    @classmethod
    def notify_hackathon_team_invitation(cls, invitee: User, invitation: dict[str, Any]) -> bool:
        if invitee.pk == invitation.get("inviter_id"):
            return False
        return cls._queue(
            invitee,
            NotificationType.HACKATHON_TEAM_INVITED,
            {
                "title": "Team Invitation",
                "body": f"{invitation['inviter_name']} invited you to join {invitation['team_name']}",
                "hackathon_id": invitation["hackathon_id"],
                "team_id": invitation["team_id"],
                "team_name": invitation["team_name"],
                "inviter_id": invitation["inviter_id"],
                "inviter_name": invitation["inviter_name"],
                "hackathon_name": invitation.get("hackathon_name"),
            },
        )

    @classmethod
    def notify_batch(cls, users, notification_type, data: dict[str, Any], channels=DEFAULT_CHANNELS) -> int:
        """Queue one notification per user; a failure for one user is logged and skipped."""
        queued = 0
        for user in users:
            try:
                if cls._queue(user, notification_type, data, channels):
                    queued += 1
            except Exception as e:
                logger.error(
                    f"Failed to queue batch notification for user {user.pk}: "
                    f"type={notification_type} error={e}"
                )
        return queued
