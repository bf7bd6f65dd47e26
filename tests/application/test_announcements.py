"""Integration tests for the announcement fan-out and aggregation use cases."""

from __future__ import annotations

from datetime import timedelta

import pytest

from bulletin.application.use_cases.announcements import (
    GroupedCountStrategy,
    PerGroupScanStrategy,
    build_announcement_copies,
    delete_announcement,
    fan_out,
    get_announcement_detail,
    list_announcement_candidates,
    list_announcements,
    send_announcement,
)
from bulletin.domain.entities import (
    ANNOUNCEMENT_KIND,
    NOTIFICATION_KIND_FRIEND_REQUEST,
    AnnouncementContent,
    Notification,
    NotificationFilter,
    RecipientSelection,
)
from bulletin.domain.errors import (
    AggregationFailedError,
    AnnouncementNotFoundError,
    NoRecipientsError,
    StoreError,
    WriteFailedError,
)
from bulletin.domain.grouping import derive_group_key
from bulletin.infrastructure.repositories import NotificationRepository
from bulletin.utils import now_in_app_timezone

STRATEGIES = [PerGroupScanStrategy(), GroupedCountStrategy()]


def _send(session, sender, user_ids=None, *, title="Maintenance", message="Site down 10pm"):
    selection = (
        RecipientSelection.everyone()
        if user_ids is None
        else RecipientSelection.explicit(user_ids)
    )
    return send_announcement(
        session, sender=sender, title=title, message=message, selection=selection
    )


def _copy_for(session, user_id) -> Notification:
    (notification,) = NotificationRepository(session).list_for_user(user_id)
    return notification


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: type(s).__name__)
def test_maintenance_scenario(session, directory, strategy):
    """Explicit send, aggregate, read one copy, then delete the whole group."""

    selected = [
        directory.alice.id,
        directory.bob.id,
        directory.carol.id,
        directory.dave.id,
        directory.erin.id,
    ]

    result = _send(session, directory.admin, selected)

    assert result.recipient_count == 3

    (summary,) = list_announcements(session, stats_strategy=strategy)
    assert (summary.total_recipients, summary.read_count, summary.unread_count) == (3, 0, 3)
    assert summary.title == "Maintenance"
    assert summary.sender_id == directory.admin.id

    alice_copy = _copy_for(session, directory.alice.id)
    NotificationRepository(session).mark_as_read([alice_copy.id], user_id=directory.alice.id)

    (summary,) = list_announcements(session, stats_strategy=strategy)
    assert (summary.total_recipients, summary.read_count, summary.unread_count) == (3, 1, 2)

    assert delete_announcement(session, alice_copy.id) == 3
    assert list_announcements(session, stats_strategy=strategy) == []


def test_send_to_all_targets_every_approved_member(session, directory):
    result = _send(session, directory.admin)

    assert result.recipient_count == len(directory.approved)
    stored = NotificationRepository(session).scan(NotificationFilter(ANNOUNCEMENT_KIND))
    assert {notification.user_id for notification in stored} == {
        user.id for user in directory.approved
    }


def test_fan_out_stamps_group_metadata(session, directory):
    result = _send(session, directory.admin, [directory.alice.id, directory.bob.id])

    stored = NotificationRepository(session).scan(NotificationFilter(ANNOUNCEMENT_KIND))
    expected_key = derive_group_key(directory.admin.id, "Maintenance", "Site down 10pm")

    assert result.group_key == expected_key
    assert len(stored) == 2
    for notification in stored:
        assert notification.group_key == expected_key
        assert notification.sender_id == directory.admin.id
        assert notification.is_read is False
        assert notification.is_archived is False
        assert notification.payload["announcement"] is True
    assert len({notification.created_at for notification in stored}) == 1


def test_only_unapproved_recipients_fails_without_writing(session, directory):
    with pytest.raises(NoRecipientsError):
        _send(session, directory.admin, [directory.dave.id, directory.erin.id])

    assert NotificationRepository(session).scan(NotificationFilter(ANNOUNCEMENT_KIND)) == []


def test_blank_content_is_rejected(session, directory):
    with pytest.raises(ValueError):
        _send(session, directory.admin, [directory.alice.id], title="   ")


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: type(s).__name__)
def test_resending_identical_content_merges_into_one_group(session, directory, strategy):
    _send(session, directory.admin, [directory.alice.id, directory.bob.id])
    _send(session, directory.admin, [directory.alice.id, directory.carol.id])

    (summary,) = list_announcements(session, stats_strategy=strategy)

    assert summary.total_recipients == 4
    assert summary.read_count + summary.unread_count == summary.total_recipients


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: type(s).__name__)
def test_groups_are_listed_newest_first(session, directory, strategy):
    repository = NotificationRepository(session)
    now = now_in_app_timezone()
    older = build_announcement_copies(
        [directory.alice.id, directory.bob.id],
        AnnouncementContent("Older", "First message"),
        sender_id=directory.admin.id,
        sent_at=now - timedelta(hours=2),
    )
    newer = build_announcement_copies(
        [directory.alice.id],
        AnnouncementContent("Newer", "Second message"),
        sender_id=directory.admin.id,
        sent_at=now - timedelta(hours=1),
    )
    other_sender = build_announcement_copies(
        [directory.carol.id],
        AnnouncementContent("Older", "First message"),
        sender_id=directory.bob.id,
        sent_at=now,
    )
    repository.insert_batch(older)
    repository.insert_batch(newer)
    repository.insert_batch(other_sender)

    summaries = list_announcements(session, stats_strategy=strategy)

    assert [(s.title, s.sender_id, s.total_recipients) for s in summaries] == [
        ("Older", directory.bob.id, 1),
        ("Newer", directory.admin.id, 1),
        ("Older", directory.admin.id, 2),
    ]


def test_other_notification_kinds_are_not_grouped_or_deleted(session, directory):
    repository = NotificationRepository(session)
    _send(session, directory.admin, [directory.alice.id, directory.bob.id])
    (friend_request,) = repository.insert_batch(
        [
            Notification(
                id=None,
                user_id=directory.alice.id,
                event_type=NOTIFICATION_KIND_FRIEND_REQUEST,
                title="Maintenance",
                message="Site down 10pm",
                sender_id=directory.admin.id,
            )
        ]
    )
    _send(session, directory.admin, [directory.carol.id], title="Other", message="Kept")

    summaries = list_announcements(session)
    assert sorted(s.total_recipients for s in summaries) == [1, 2]

    representative = _copy_for_kind(session, directory.bob.id)
    assert delete_announcement(session, representative.id) == 2

    assert repository.get(friend_request.id) is not None
    (remaining,) = list_announcements(session)
    assert remaining.title == "Other"


def _copy_for_kind(session, user_id) -> Notification:
    return next(
        notification
        for notification in NotificationRepository(session).list_for_user(user_id)
        if notification.event_type == ANNOUNCEMENT_KIND
    )


def test_second_delete_reports_not_found(session, directory):
    _send(session, directory.admin, [directory.alice.id])
    representative = _copy_for(session, directory.alice.id)

    assert delete_announcement(session, representative.id) == 1
    with pytest.raises(AnnouncementNotFoundError):
        delete_announcement(session, representative.id)


def test_group_operations_reject_non_announcement_records(session, directory):
    (friend_request,) = NotificationRepository(session).insert_batch(
        [
            Notification(
                id=None,
                user_id=directory.alice.id,
                event_type=NOTIFICATION_KIND_FRIEND_REQUEST,
                title="Hi",
                message="Let's connect",
            )
        ]
    )

    with pytest.raises(AnnouncementNotFoundError):
        get_announcement_detail(session, friend_request.id)
    with pytest.raises(AnnouncementNotFoundError):
        delete_announcement(session, friend_request.id)


def test_detail_lists_every_recipient_with_profile(session, directory):
    _send(
        session,
        directory.admin,
        [directory.carol.id, directory.bob.id, directory.alice.id],
    )
    bob_copy = _copy_for(session, directory.bob.id)
    NotificationRepository(session).mark_as_read([bob_copy.id], user_id=directory.bob.id)

    detail = get_announcement_detail(session, bob_copy.id)

    assert detail.summary.total_recipients == 3
    assert detail.summary.read_count == 1
    assert detail.summary.unread_count == 2
    assert [recipient.profile.display_name for recipient in detail.recipients] == [
        "Alice Adams",
        "Bob Brown",
        "Carol's Bakery",
    ]
    read_flags = {recipient.recipient_id: recipient.is_read for recipient in detail.recipients}
    assert read_flags == {
        directory.alice.id: False,
        directory.bob.id: True,
        directory.carol.id: False,
    }


def test_detail_of_missing_record_raises_not_found(session, directory):
    with pytest.raises(AnnouncementNotFoundError):
        get_announcement_detail(session, 4242)


def test_batch_insert_is_all_or_nothing(session, directory):
    repository = NotificationRepository(session)
    copies = build_announcement_copies(
        [directory.alice.id, 999_999],
        AnnouncementContent("Broken", "Unknown recipient"),
        sender_id=directory.admin.id,
    )

    with pytest.raises(StoreError):
        repository.insert_batch(copies)

    assert repository.scan(NotificationFilter(ANNOUNCEMENT_KIND)) == []


class _FailingRepository:
    def insert_batch(self, notifications):
        raise StoreError("insert rejected")


def test_fan_out_reports_write_failure():
    with pytest.raises(WriteFailedError) as excinfo:
        fan_out(
            _FailingRepository(),
            {1, 2},
            AnnouncementContent("Title", "Body"),
            sender_id=1,
        )

    assert isinstance(excinfo.value.__cause__, StoreError)


class _FailingStrategy:
    def collect(self, repository, summaries):
        raise StoreError("scan failed")


def test_scan_failure_aborts_aggregation(session, directory):
    _send(session, directory.admin, [directory.alice.id])

    with pytest.raises(AggregationFailedError):
        list_announcements(session, stats_strategy=_FailingStrategy())


def test_candidates_are_approved_members(session, directory):
    candidates = list_announcement_candidates(session)

    assert {user.id for user in candidates} == {user.id for user in directory.approved}


def _orphan_copy(user_id, *, title="Same", message="Body") -> Notification:
    return Notification(
        id=None,
        user_id=user_id,
        event_type=ANNOUNCEMENT_KIND,
        title=title,
        message=message,
        sender_id=None,
        group_key=derive_group_key(None, title, message),
    )


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: type(s).__name__)
def test_copies_without_sender_form_their_own_group(session, directory, strategy):
    _send(session, directory.admin, [directory.alice.id, directory.bob.id], title="Same", message="Body")
    NotificationRepository(session).insert_batch([_orphan_copy(directory.carol.id)])

    summaries = list_announcements(session, stats_strategy=strategy)

    assert sorted(
        (s.sender_id is None, s.total_recipients) for s in summaries
    ) == [(False, 2), (True, 1)]


def test_deleting_group_without_sender_keeps_other_senders(session, directory):
    repository = NotificationRepository(session)
    _send(session, directory.admin, [directory.alice.id, directory.bob.id], title="Same", message="Body")
    (orphan,) = repository.insert_batch([_orphan_copy(directory.carol.id)])

    assert get_announcement_detail(session, orphan.id).summary.total_recipients == 1
    assert delete_announcement(session, orphan.id) == 1

    (remaining,) = list_announcements(session)
    assert remaining.sender_id == directory.admin.id
    assert remaining.total_recipients == 2
