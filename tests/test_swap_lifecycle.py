"""Tests for the swap request lifecycle.

Every transition must apply exactly once: repeating it, or applying it from the
wrong state, fails with InvalidStateError and leaves the stored record alone.
"""

import pytest

from skillswap.errors import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from skillswap.models.swap_request import SwapStatus


class TestCreate:
    """Test SwapRequestService.create() preconditions."""

    def test_create_is_pending_with_equal_timestamps(self, pending_request, guitarist, designer):
        assert pending_request.status == SwapStatus.PENDING
        assert pending_request.created_at == pending_request.updated_at
        assert pending_request.from_user_id == guitarist.id
        assert pending_request.to_user_id == designer.id
        assert pending_request.skill_offered == "Guitar"
        assert pending_request.skill_wanted == "Photoshop"
        assert pending_request.message == "Let's trade!"

    def test_create_persists(self, pending_request, swap_repository):
        stored = swap_repository.get(pending_request.id)
        assert stored is not None
        assert stored.status == SwapStatus.PENDING

    def test_message_is_stripped(self, swap_service, guitarist, designer):
        request = swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "  hi there  ")
        assert request.message == "hi there"

    def test_unknown_sender(self, swap_service, designer):
        with pytest.raises(NotFoundError):
            swap_service.create("ghost", designer.id, "Guitar", "Photoshop", "hello")

    def test_unknown_recipient(self, swap_service, guitarist):
        with pytest.raises(NotFoundError):
            swap_service.create(guitarist.id, "ghost", "Guitar", "Photoshop", "hello")

    def test_cannot_request_yourself(self, swap_service, create_user):
        user = create_user("solo", skills_offered=["Guitar", "Piano"])
        with pytest.raises(ValidationError, match="yourself"):
            swap_service.create(user.id, user.id, "Guitar", "Piano", "hello")

    def test_banned_sender(self, swap_service, create_user, designer):
        banned = create_user("banned", skills_offered=["Guitar"], is_banned=True)
        with pytest.raises(ValidationError, match="Banned"):
            swap_service.create(banned.id, designer.id, "Guitar", "Photoshop", "hello")

    def test_banned_recipient(self, swap_service, guitarist, create_user):
        banned = create_user("banned", skills_offered=["Photoshop"], is_banned=True)
        with pytest.raises(ValidationError, match="banned"):
            swap_service.create(guitarist.id, banned.id, "Guitar", "Photoshop", "hello")

    def test_private_recipient(self, swap_service, guitarist, create_user):
        private = create_user("private", skills_offered=["Photoshop"], is_public=False)
        with pytest.raises(ValidationError, match="private"):
            swap_service.create(guitarist.id, private.id, "Guitar", "Photoshop", "hello")

    def test_skill_offered_must_be_owned(self, swap_service, guitarist, designer):
        with pytest.raises(ValidationError, match="Piano"):
            swap_service.create(guitarist.id, designer.id, "Piano", "Photoshop", "hello")

    def test_skill_wanted_must_be_offered_by_recipient(self, swap_service, guitarist, designer):
        # Bob *wants* Guitar but does not offer it.
        with pytest.raises(ValidationError, match="Guitar"):
            swap_service.create(guitarist.id, designer.id, "Guitar", "Guitar", "hello")

    def test_skill_names_are_case_sensitive(self, swap_service, guitarist, designer):
        with pytest.raises(ValidationError):
            swap_service.create(guitarist.id, designer.id, "guitar", "Photoshop", "hello")

    @pytest.mark.parametrize("message", ["", "   "])
    def test_empty_message(self, swap_service, guitarist, designer, message):
        with pytest.raises(ValidationError, match="required"):
            swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", message)

    def test_message_length_limit(self, swap_service, guitarist, designer):
        assert swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "x" * 500)
        with pytest.raises(ValidationError, match="500"):
            swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "x" * 501)

    def test_first_unmet_precondition_is_reported(self, swap_service, create_user):
        sender = create_user("s", skills_offered=["Guitar"])
        recipient = create_user("r", skills_offered=["Photoshop"], is_public=False)
        # Private recipient is checked before skills and message.
        with pytest.raises(ValidationError, match="private"):
            swap_service.create(sender.id, recipient.id, "Nope", "Nope", "")

    def test_failed_create_writes_nothing(self, swap_service, swap_repository, guitarist, designer):
        with pytest.raises(ValidationError):
            swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "")
        assert swap_repository.list_all() == []


class TestAcceptReject:
    """Only the recipient answers a pending request."""

    def test_accept(self, swap_service, pending_request, designer):
        accepted = swap_service.accept(pending_request.id, designer.id)
        assert accepted.status == SwapStatus.ACCEPTED
        assert accepted.updated_at > pending_request.updated_at
        assert accepted.created_at == pending_request.created_at

    def test_reject(self, swap_service, pending_request, designer):
        rejected = swap_service.reject(pending_request.id, designer.id)
        assert rejected.status == SwapStatus.REJECTED

    @pytest.mark.parametrize("action", ["accept", "reject"])
    def test_sender_cannot_answer(self, swap_service, swap_repository, pending_request, guitarist, action):
        with pytest.raises(AuthorizationError):
            getattr(swap_service, action)(pending_request.id, guitarist.id)
        assert swap_repository.get(pending_request.id).status == SwapStatus.PENDING

    @pytest.mark.parametrize("action", ["accept", "reject"])
    def test_third_party_cannot_answer(self, swap_service, swap_repository, pending_request, outsider, action):
        with pytest.raises(AuthorizationError):
            getattr(swap_service, action)(pending_request.id, outsider.id)
        assert swap_repository.get(pending_request.id).status == SwapStatus.PENDING

    def test_unknown_request(self, swap_service, designer):
        with pytest.raises(NotFoundError):
            swap_service.accept("missing", designer.id)


class TestCancel:
    """Only the requester cancels, and only while pending."""

    def test_cancel(self, swap_service, pending_request, guitarist):
        cancelled = swap_service.cancel(pending_request.id, guitarist.id)
        assert cancelled.status == SwapStatus.CANCELLED

    def test_recipient_cannot_cancel(self, swap_service, pending_request, designer):
        with pytest.raises(AuthorizationError):
            swap_service.cancel(pending_request.id, designer.id)

    def test_cannot_cancel_accepted(self, swap_service, pending_request, guitarist, designer):
        swap_service.accept(pending_request.id, designer.id)
        with pytest.raises(InvalidStateError):
            swap_service.cancel(pending_request.id, guitarist.id)


class TestNonPendingTransitions:
    """accept/reject/cancel on anything but pending always fail without writing."""

    @pytest.mark.parametrize("first", ["accept", "reject", "cancel"])
    @pytest.mark.parametrize("second", ["accept", "reject", "cancel"])
    def test_second_transition_fails(
        self, swap_service, swap_repository, pending_request, guitarist, designer, first, second
    ):
        actor = {"accept": designer.id, "reject": designer.id, "cancel": guitarist.id}
        getattr(swap_service, first)(pending_request.id, actor[first])
        before = swap_repository.get(pending_request.id)

        with pytest.raises(InvalidStateError):
            getattr(swap_service, second)(pending_request.id, actor[second])

        after = swap_repository.get(pending_request.id)
        assert after.status == before.status
        assert after.updated_at == before.updated_at


class TestComplete:
    """Completing an accepted swap credits both users once."""

    def test_complete_increments_both_users_once(
        self, swap_service, user_repository, pending_request, guitarist, designer
    ):
        swap_service.accept(pending_request.id, designer.id)
        completed = swap_service.complete(pending_request.id, guitarist.id)
        assert completed.status == SwapStatus.COMPLETED

        assert user_repository.get(guitarist.id).total_swaps == 1
        assert user_repository.get(designer.id).total_swaps == 1

        with pytest.raises(InvalidStateError):
            swap_service.complete(pending_request.id, designer.id)

        assert user_repository.get(guitarist.id).total_swaps == 1
        assert user_repository.get(designer.id).total_swaps == 1

    def test_recipient_can_complete(self, swap_service, pending_request, designer):
        swap_service.accept(pending_request.id, designer.id)
        assert swap_service.complete(pending_request.id, designer.id).status == SwapStatus.COMPLETED

    def test_third_party_cannot_complete(self, swap_service, user_repository, pending_request, designer, outsider):
        swap_service.accept(pending_request.id, designer.id)
        with pytest.raises(AuthorizationError):
            swap_service.complete(pending_request.id, outsider.id)
        assert user_repository.get(designer.id).total_swaps == 0

    def test_cannot_complete_pending(self, swap_service, user_repository, pending_request, guitarist):
        with pytest.raises(InvalidStateError):
            swap_service.complete(pending_request.id, guitarist.id)
        assert user_repository.get(guitarist.id).total_swaps == 0

    def test_other_users_untouched(self, swap_service, user_repository, pending_request, designer, outsider):
        swap_service.accept(pending_request.id, designer.id)
        swap_service.complete(pending_request.id, designer.id)
        assert user_repository.get(outsider.id).total_swaps == 0


class TestStaleRead:
    """A writer that loses a race sees InvalidStateError, not a second write."""

    def test_transition_after_concurrent_change(
        self, swap_service, swap_repository, pending_request, designer, clock
    ):
        # Simulate another writer rejecting between our read and our write.
        stale = swap_repository.get(pending_request.id)
        swap_repository.transition_status(stale.id, SwapStatus.PENDING, SwapStatus.REJECTED, clock())

        with pytest.raises(InvalidStateError):
            swap_service._transition(stale, SwapStatus.PENDING, SwapStatus.ACCEPTED)
        assert swap_repository.get(pending_request.id).status == SwapStatus.REJECTED


class TestDelete:
    """Requester may remove their own pending outgoing request."""

    def test_delete_pending(self, swap_service, swap_repository, pending_request, guitarist):
        swap_service.delete(pending_request.id, guitarist.id)
        assert swap_repository.get(pending_request.id) is None

    def test_recipient_cannot_delete(self, swap_service, pending_request, designer):
        with pytest.raises(AuthorizationError):
            swap_service.delete(pending_request.id, designer.id)

    def test_cannot_delete_answered(self, swap_service, swap_repository, pending_request, guitarist, designer):
        swap_service.reject(pending_request.id, designer.id)
        with pytest.raises(InvalidStateError):
            swap_service.delete(pending_request.id, guitarist.id)
        assert swap_repository.get(pending_request.id) is not None


class TestListing:
    """Request lists are newest first."""

    def test_list_for_user_newest_first(self, swap_service, guitarist, designer):
        first = swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "one")
        second = swap_service.create(designer.id, guitarist.id, "Photoshop", "Guitar", "two")
        third = swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "three")

        ids = [r.id for r in swap_service.list_for_user(guitarist.id)]
        assert ids == [third.id, second.id, first.id]

    def test_received_sent_history(self, swap_service, guitarist, designer):
        outgoing = swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "out")
        incoming = swap_service.create(designer.id, guitarist.id, "Photoshop", "Guitar", "in")
        answered = swap_service.create(designer.id, guitarist.id, "Photoshop", "Guitar", "done")
        swap_service.accept(answered.id, guitarist.id)

        assert [r.id for r in swap_service.sent(guitarist.id)] == [outgoing.id]
        assert [r.id for r in swap_service.received(guitarist.id)] == [incoming.id]
        assert [r.id for r in swap_service.history(guitarist.id)] == [answered.id]

    def test_outsider_sees_nothing(self, swap_service, pending_request, outsider):
        assert swap_service.list_for_user(outsider.id) == []
        with pytest.raises(AuthorizationError):
            swap_service.get(pending_request.id, outsider.id)


class TestBanDoesNotCascade:
    """Banning leaves existing requests as they are but blocks new ones."""

    def test_pending_request_survives_ban(
        self, swap_service, admin_service, swap_repository, pending_request, guitarist, designer, admin_user
    ):
        admin_service.ban_user(admin_user, guitarist.id)
        assert swap_repository.get(pending_request.id).status == SwapStatus.PENDING
        with pytest.raises(ValidationError):
            swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "again")


def test_guitar_for_photoshop_scenario(swap_service, user_repository, create_user):
    """U1 offers Guitar for U2's Photoshop; U2 accepts; either completes."""
    u1 = create_user("U1", skills_offered=["Guitar"])
    u2 = create_user("U2", skills_offered=["Photoshop"])

    request = swap_service.create(u1.id, u2.id, "Guitar", "Photoshop", "Let's trade!")
    assert request.status == SwapStatus.PENDING

    request = swap_service.accept(request.id, u2.id)
    assert request.status == SwapStatus.ACCEPTED

    request = swap_service.complete(request.id, u1.id)
    assert request.status == SwapStatus.COMPLETED
    assert user_repository.get(u1.id).total_swaps == 1
    assert user_repository.get(u2.id).total_swaps == 1
