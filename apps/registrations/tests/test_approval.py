"""Tests for the approval state machine."""

import pytest

from apps.registrations.services import ApprovalError, ApprovalService, ViewState, recompute
from apps.registrations.variants import CLUB


@pytest.fixture
def club_approvals(club_registry):
    return ApprovalService(club_registry)


@pytest.fixture
def state_secretary_approvals(state_secretary_registry):
    return ApprovalService(state_secretary_registry)


class TestAvailableActions:
    def test_pending_offers_approve_and_reject(self):
        actions = ApprovalService.available_actions({"approvalStatus": "pending"})

        assert actions == ["view", "edit", "approve", "reject", "delete"]

    def test_approved_offers_no_transition(self):
        actions = ApprovalService.available_actions({"approvalStatus": "approved"})

        assert actions == ["view", "edit", "delete"]


class TestApprove:
    """Tests for ApprovalService.approve."""

    def test_approve_sends_one_request_and_refetches(self, club_approvals, club_registry, remote):
        """Test approving a pending club, then filtering by pending."""
        remote.calls.clear()

        record = club_approvals.approve("C1")

        assert remote.calls_for("PUT") == [("PUT", "clubs/C1", {"approvalStatus": "approved"})]
        assert remote.calls_for("GET") == [("GET", "clubs/", None)]
        assert record["approvalStatus"] == "approved"
        pending = recompute(club_registry.records, ViewState(status="pending"), CLUB.search_fields)
        assert "C1" not in [r["entityId"] for r in pending]

    def test_approve_already_approved_is_noop(self, club_approvals, remote):
        remote.calls.clear()

        record = club_approvals.approve("C2")

        assert record["approvalStatus"] == "approved"
        assert remote.calls == []

    def test_state_secretary_uses_approve_path_and_patches(self, state_secretary_approvals, remote):
        """Test that the state secretary approval patches locally instead of refetching."""
        remote.calls.clear()

        record = state_secretary_approvals.approve("SS1")

        assert remote.calls == [("PUT", "state_secretaries/SS1/approve", {"approvalStatus": "approved"})]
        assert record["approvalStatus"] == "approved"
        assert record["secretaryName"] == "Suresh Nair"

    def test_failed_approve_changes_nothing(self, club_approvals, club_registry, remote):
        remote.fail("PUT", "clubs/C1")

        with pytest.raises(ApprovalError):
            club_approvals.approve("C1")

        assert club_registry.get("C1")["approvalStatus"] == "pending"
        assert len(remote.calls_for("PUT")) == 1


    def test_approve_unknown_id_sends_nothing(self, club_approvals, remote):
        """Test that an id missing even after a reload is refused without a request."""
        remote.calls.clear()

        with pytest.raises(ApprovalError):
            club_approvals.approve("C404")

        assert remote.calls_for("PUT") == []
        assert remote.calls_for("GET") == [("GET", "clubs/", None)]


class TestRejectAndDelete:
    """Tests for reject and delete transitions."""

    def test_reject_pending_deletes_record(self, club_approvals, club_registry, remote):
        assert club_approvals.reject("C1", confirmed=True) is True

        assert remote.calls_for("DELETE") == [("DELETE", "clubs/C1", None)]
        assert club_registry.get("C1") is None

    def test_unconfirmed_reject_does_nothing(self, club_approvals, club_registry, remote):
        assert club_approvals.reject("C1") is False

        assert remote.calls_for("DELETE") == []
        assert club_registry.get("C1") is not None

    def test_reject_approved_is_refused(self, club_approvals, remote):
        """Test that an approved record cannot go back through reject."""
        with pytest.raises(ApprovalError):
            club_approvals.reject("C2", confirmed=True)

        assert remote.calls_for("DELETE") == []

    def test_reject_unknown_id_sends_nothing(self, club_approvals, remote):
        with pytest.raises(ApprovalError):
            club_approvals.reject("C404", confirmed=True)

        assert remote.calls_for("DELETE") == []

    def test_delete_allowed_in_any_state(self, club_approvals, club_registry):
        assert club_approvals.delete("C2", confirmed=True) is True
        assert club_registry.get("C2") is None

    def test_delete_failure_raises_approval_error(self, club_approvals, club_registry, remote):
        remote.fail("DELETE", "clubs/C2")

        with pytest.raises(ApprovalError):
            club_approvals.delete("C2", confirmed=True)

        assert club_registry.get("C2") is not None
