"""Unit tests for review and complaint moderation."""

import pytest

from manager_portal.core.exceptions import ValidationError
from manager_portal.core.results import Err, Ok
from manager_portal.models.status import ComplaintStatus, ReviewModeration
from manager_portal.moderation.service import ModerationService, ModerationTarget
from manager_portal.services import ComplaintsService, ReviewsService
from tests.factories import complaint_payload, review_payload


class TestReviewStatus:
    """Test review moderation changes."""

    @pytest.mark.asyncio
    async def test_set_status_sends_wire_token(self, gateway, graphql_stub):
        graphql_stub.on("UpdateReview", {"data": {"updateReview": {"id": "rev-1", "moderationStatus": "0"}}})

        confirmed = await ModerationService(gateway).set_review_status("rev-1", "0")

        assert confirmed is ReviewModeration.APPROVED
        assert graphql_stub.calls[0].variables == {
            "where": {"id": "rev-1"},
            "data": {"moderationStatus": "0"},
        }

    @pytest.mark.asyncio
    async def test_invalid_status_makes_no_call(self, gateway, graphql_stub):
        with pytest.raises(ValidationError):
            await ModerationService(gateway).set_review_status("rev-1", "5")

        assert graphql_stub.calls == []

    @pytest.mark.asyncio
    async def test_product_target_uses_product_mutation(self, gateway, graphql_stub):
        graphql_stub.on(
            "UpdateProductReview",
            {"data": {"updateProductReview": {"id": "rev-1", "moderationStatus": "1"}}},
        )

        confirmed = await ModerationService(gateway).set_review_status(
            "rev-1", ReviewModeration.DENIED, target=ModerationTarget.PRODUCT
        )

        assert confirmed is ReviewModeration.DENIED
        assert graphql_stub.operations == ["UpdateProductReview"]

    @pytest.mark.asyncio
    async def test_change_then_refetch(self, gateway, graphql_stub):
        """A confirmed change is followed by a fresh read of the review."""
        graphql_stub.on("UpdateReview", {"data": {"updateReview": {"id": "rev-1", "moderationStatus": "0"}}})
        graphql_stub.on("Review", {"data": {"review": review_payload("rev-1", "0")}})

        outcome = await ModerationService(gateway).change_review_status(
            "rev-1", "0", refetch=lambda: ReviewsService(gateway).get_review("rev-1")
        )

        assert isinstance(outcome, Ok)
        assert outcome.value.moderation_status is ReviewModeration.APPROVED
        assert graphql_stub.operations == ["UpdateReview", "Review"]

    @pytest.mark.asyncio
    async def test_failed_change_skips_refetch(self, gateway, graphql_stub):
        graphql_stub.on("UpdateReview", {"errors": [{"message": "Not allowed"}]})

        outcome = await ModerationService(gateway).change_review_status(
            "rev-1", "1", refetch=lambda: ReviewsService(gateway).get_review("rev-1")
        )

        assert isinstance(outcome, Err)
        assert outcome.kind == "ApiError"
        assert graphql_stub.operations == ["UpdateReview"]


class TestComplaintStatus:
    """Test complaint status changes."""

    @pytest.mark.asyncio
    async def test_toggle_round_trip_issues_two_updates(self, gateway, graphql_stub):
        """Unresolved -> resolved -> unresolved is two calls and ends where it began."""
        graphql_stub.on(
            "UpdateComplaint",
            lambda variables: {
                "data": {"updateComplaint": {"id": "cmp-1", "status": variables["data"]["status"]}}
            },
        )
        service = ModerationService(gateway)

        first = await service.toggle_complaint("cmp-1", ComplaintStatus.UNRESOLVED)
        second = await service.toggle_complaint("cmp-1", first)

        assert first is ComplaintStatus.RESOLVED
        assert second is ComplaintStatus.UNRESOLVED
        assert [c.variables["data"]["status"] for c in graphql_stub.calls] == ["0", "1"]

    @pytest.mark.asyncio
    async def test_product_complaint_change_then_refetch(self, gateway, graphql_stub):
        graphql_stub.on(
            "UpdateProductComplaint",
            {"data": {"updateProductComplaint": {"id": "cmp-1", "status": "0"}}},
        )
        graphql_stub.on("Complaint", {"data": {"complaint": complaint_payload("cmp-1", "0")}})

        outcome = await ModerationService(gateway).change_complaint_status(
            "cmp-1",
            "0",
            refetch=lambda: ComplaintsService(gateway).get_complaint("cmp-1"),
            target="product",
        )

        assert outcome.ok
        assert outcome.value.status is ComplaintStatus.RESOLVED
        assert graphql_stub.operations == ["UpdateProductComplaint", "Complaint"]

    @pytest.mark.asyncio
    async def test_invalid_complaint_status_is_err_without_call(self, gateway, graphql_stub):
        outcome = await ModerationService(gateway).change_complaint_status(
            "cmp-1", "7", refetch=lambda: ComplaintsService(gateway).get_complaint("cmp-1")
        )

        assert isinstance(outcome, Err)
        assert outcome.kind == "ValidationError"
        assert graphql_stub.calls == []


class TestReplies:

    @pytest.mark.asyncio
    async def test_reply_connects_parent(self, gateway, graphql_stub):
        graphql_stub.on(
            "CreateReviewReply",
            {"data": {"createReviewReply": {"id": "reply-1", "content": "Thanks!"}}},
        )

        reply = await ModerationService(gateway).add_review_reply("rev-1", "  Thanks!  ")

        assert reply.id == "reply-1"
        assert graphql_stub.calls[0].variables == {
            "data": {"content": "Thanks!", "review": {"connect": {"id": "rev-1"}}}
        }

    @pytest.mark.asyncio
    async def test_blank_reply_rejected(self, gateway, graphql_stub):
        with pytest.raises(ValidationError):
            await ModerationService(gateway).add_complaint_reply("cmp-1", "   ")

        assert graphql_stub.calls == []
