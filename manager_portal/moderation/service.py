"""Moderation commands for reviews and complaints.

Status changes are confirmed by the server and then the caller re-fetches
the whole parent view. Nothing is merged locally: the same statuses feed
server-side filtered views (pending counts on the dashboard), so the client
does not try to predict downstream effects.
"""

from enum import Enum
from typing import Awaitable, Callable, TypeVar, Union

import structlog

from manager_portal.core.exceptions import ProtocolError, ValidationError
from manager_portal.core.results import Err, Result, run_command
from manager_portal.graphql import documents
from manager_portal.graphql.gateway import GraphQLGateway
from manager_portal.models.entities import Reply
from manager_portal.models.status import ComplaintStatus, ReviewModeration

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ModerationTarget(str, Enum):
    """Which family of entity a status change applies to."""

    BUSINESS = "business"
    PRODUCT = "product"


_REVIEW_MUTATIONS = {
    ModerationTarget.BUSINESS: (documents.UPDATE_REVIEW, "updateReview"),
    ModerationTarget.PRODUCT: (documents.UPDATE_PRODUCT_REVIEW, "updateProductReview"),
}

_COMPLAINT_MUTATIONS = {
    ModerationTarget.BUSINESS: (documents.UPDATE_COMPLAINT, "updateComplaint"),
    ModerationTarget.PRODUCT: (documents.UPDATE_PRODUCT_COMPLAINT, "updateProductComplaint"),
}


class ModerationService:
    """Sets review moderation and complaint status, and posts replies.

    Example:
        service = ModerationService(gateway)
        outcome = await service.change_review_status(
            review_id, "0", refetch=lambda: reviews.get_review(review_id)
        )
    """

    def __init__(self, gateway: GraphQLGateway):
        self._gateway = gateway

    # -------------------------------------------------------------------------
    # Status changes
    # -------------------------------------------------------------------------

    async def set_review_status(
        self,
        review_id: str,
        status: Union[str, ReviewModeration],
        target: ModerationTarget = ModerationTarget.BUSINESS,
    ) -> ReviewModeration:
        """
        Persist a review's moderation status.

        Returns:
            The status the server confirmed.

        Raises:
            ValidationError: ``status`` is not a moderation token. No call is made.
        """
        new_status = ReviewModeration.from_wire(status)
        target = ModerationTarget(target)
        document, root = _REVIEW_MUTATIONS[target]

        result = await self._gateway.execute(
            document,
            {"where": {"id": review_id}, "data": {"moderationStatus": new_status.to_wire()}},
        )
        confirmed = _confirmed_field(result.unwrap(), root, "moderationStatus")

        logger.info(
            "review_status_changed",
            review_id=review_id,
            target=target.value,
            status=new_status.name,
        )
        return ReviewModeration.from_wire(confirmed) if confirmed is not None else new_status

    async def set_complaint_status(
        self,
        complaint_id: str,
        status: Union[str, ComplaintStatus],
        target: ModerationTarget = ModerationTarget.BUSINESS,
    ) -> ComplaintStatus:
        """
        Persist a complaint's status.

        Raises:
            ValidationError: ``status`` is not a complaint token. No call is made.
        """
        new_status = ComplaintStatus.from_wire(status)
        target = ModerationTarget(target)
        document, root = _COMPLAINT_MUTATIONS[target]

        result = await self._gateway.execute(
            document,
            {"where": {"id": complaint_id}, "data": {"status": new_status.to_wire()}},
        )
        confirmed = _confirmed_field(result.unwrap(), root, "status")

        logger.info(
            "complaint_status_changed",
            complaint_id=complaint_id,
            target=target.value,
            status=new_status.name,
        )
        return ComplaintStatus.from_wire(confirmed) if confirmed is not None else new_status

    async def toggle_complaint(
        self,
        complaint_id: str,
        current: Union[str, ComplaintStatus],
        target: ModerationTarget = ModerationTarget.BUSINESS,
    ) -> ComplaintStatus:
        """Flip a complaint between resolved and unresolved."""
        return await self.set_complaint_status(
            complaint_id,
            ComplaintStatus.from_wire(current).toggled(),
            target,
        )

    async def change_review_status(
        self,
        review_id: str,
        status: Union[str, ReviewModeration],
        refetch: Callable[[], Awaitable[T]],
        target: ModerationTarget = ModerationTarget.BUSINESS,
    ) -> Result[T]:
        """Set a review's status, then re-fetch the parent view."""
        return await _change_then_refetch(
            "change_review_status",
            lambda: self.set_review_status(review_id, status, target),
            refetch,
        )

    async def change_complaint_status(
        self,
        complaint_id: str,
        status: Union[str, ComplaintStatus],
        refetch: Callable[[], Awaitable[T]],
        target: ModerationTarget = ModerationTarget.BUSINESS,
    ) -> Result[T]:
        """Set a complaint's status, then re-fetch the parent view."""
        return await _change_then_refetch(
            "change_complaint_status",
            lambda: self.set_complaint_status(complaint_id, status, target),
            refetch,
        )

    # -------------------------------------------------------------------------
    # Replies
    # -------------------------------------------------------------------------

    async def add_review_reply(self, review_id: str, content: str) -> Reply:
        return await self._add_reply(
            documents.CREATE_REVIEW_REPLY,
            "createReviewReply",
            "review",
            review_id,
            content,
        )

    async def add_complaint_reply(self, complaint_id: str, content: str) -> Reply:
        return await self._add_reply(
            documents.CREATE_COMPLAINT_REPLY,
            "createComplaintReply",
            "complaint",
            complaint_id,
            content,
        )

    async def _add_reply(
        self,
        document: str,
        root: str,
        parent_field: str,
        parent_id: str,
        content: str,
    ) -> Reply:
        content = (content or "").strip()
        if not content:
            raise ValidationError("Reply cannot be empty.", field="content")

        result = await self._gateway.execute(
            document,
            {"data": {"content": content, parent_field: {"connect": {"id": parent_id}}}},
        )
        payload = result.unwrap().get(root)
        if not payload:
            raise ProtocolError(f"{root} returned no reply")

        logger.info("reply_created", parent=parent_field, parent_id=parent_id)
        return Reply.model_validate(payload)


def _confirmed_field(data: dict, root: str, name: str):
    payload = data.get(root)
    if payload is None:
        raise ProtocolError(f"{root} returned no entity")
    return payload.get(name)


async def _change_then_refetch(
    name: str,
    change: Callable[[], Awaitable[object]],
    refetch: Callable[[], Awaitable[T]],
) -> Result[T]:
    changed = await run_command(name, change)
    if isinstance(changed, Err):
        return changed
    return await run_command(f"{name}_refetch", refetch)
