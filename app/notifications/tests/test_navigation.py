"""
Tests for deep-link navigation payloads.
"""

import pytest

from notifications.navigation import FALLBACK, ROUTES, build_navigation
from notifications.registry import NotificationType


class TestBuildNavigation:
    """Tests for build_navigation()."""

    def test_every_type_has_a_route(self):
        assert set(ROUTES) == set(NotificationType)

    def test_post_liked_opens_post(self):
        navigation = build_navigation(NotificationType.POST_LIKED, {"post_id": 42})

        assert navigation.screen == "PostDetail"
        assert navigation.tab == "Feed"
        assert navigation.params == {
            "post_id": 42,
            "comment_id": None,
            "scroll_to_comments": False,
        }

    @pytest.mark.parametrize(
        "notification_type",
        [NotificationType.COMMENT_ADDED, NotificationType.COMMENT_REPLY],
    )
    def test_comments_scroll_to_comments(self, notification_type):
        navigation = build_navigation(notification_type, {"post_id": 1, "comment_id": 9})

        assert navigation.params["comment_id"] == 9
        assert navigation.params["scroll_to_comments"] is True

    def test_event_registration_shows_registration(self):
        navigation = build_navigation(NotificationType.EVENT_REGISTERED, {"event_id": 3})

        assert navigation.screen == "EventDetail"
        assert navigation.params == {"event_id": 3, "show_registration": True}

    def test_job_application_lands_on_my_applications(self):
        navigation = build_navigation(
            NotificationType.JOB_APPLICATION_ACCEPTED,
            {"application_id": 5, "job_id": 8},
        )

        assert navigation.to_dict() == {
            "screen": "JobApplication",
            "params": {"application_id": 5, "job_id": 8},
            "tab": "Jobs",
            "sub_tab": "MyApplications",
        }

    def test_to_dict_omits_missing_sub_tab(self):
        payload = build_navigation(NotificationType.JOB_POSTED, {"job_id": 1}).to_dict()

        assert "sub_tab" not in payload

    def test_team_invitation_shows_invitations(self):
        navigation = build_navigation(
            NotificationType.HACKATHON_TEAM_INVITED, {"hackathon_id": 2, "team_id": 4}
        )

        assert navigation.screen == "HackathonTeam"
        assert navigation.params["show_invitations"] is True

    def test_profile_view_opens_viewer(self):
        navigation = build_navigation(NotificationType.PROFILE_VIEWED, {"viewer_id": 77})

        assert navigation.screen == "UserProfile"
        assert navigation.params == {"user_id": 77}

    def test_message_opens_conversation(self):
        navigation = build_navigation(
            NotificationType.MESSAGE_RECEIVED, {"conversation_id": 12, "sender_id": 3}
        )

        assert navigation.screen == "ChatConversation"
        assert navigation.tab == "Messages"

    def test_missing_keys_become_none(self):
        navigation = build_navigation(NotificationType.INTERNSHIP_APPLICATION_RECEIVED, None)

        assert navigation.params == {"application_id": None, "internship_id": None}

    def test_unknown_type_falls_back_to_notifications(self):
        navigation = build_navigation("not_a_type", {"post_id": 1})

        assert navigation == FALLBACK
        assert navigation.to_dict() == {
            "screen": "Notifications",
            "params": {},
            "tab": "Notifications",
        }

    def test_legacy_identifier_is_routed(self):
        navigation = build_navigation("App\\Notifications\\PostLiked", {"post_id": 6})

        assert navigation.screen == "PostDetail"
        assert navigation.params["post_id"] == 6
