"""Confirmed, sequential mass delete.

Deletes run one at a time so each failure is attributed to one id and the
backend never sees a burst. A failure does not stop the run; the outcome
reports successes and failures, the selection is cleared, and the list is
re-fetched.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

import structlog

from manager_portal.core.exceptions import PortalError, ProtocolError
from manager_portal.graphql.gateway import GraphQLGateway, operation_name_of
from manager_portal.listings.selection import SelectionSet

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Confirm = Callable[[int], Awaitable[bool]]


@dataclass(frozen=True)
class MassDeleteFailure:
    id: str
    reason: str
    kind: str


@dataclass
class MassDeleteOutcome(Generic[T]):
    """Aggregate result of a mass delete."""

    requested: int = 0
    deleted: list[str] = field(default_factory=list)
    failures: list[MassDeleteFailure] = field(default_factory=list)
    skipped: bool = False
    cancelled: bool = False
    refreshed: Optional[T] = None
    refresh_error: Optional[PortalError] = None

    @property
    def succeeded(self) -> int:
        return len(self.deleted)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def attempted(self) -> bool:
        return not (self.skipped or self.cancelled)

    def summary(self, entity_label: str) -> str:
        if self.skipped:
            return f"No {entity_label} selected."
        if self.cancelled:
            return "Deletion cancelled."
        if not self.failures:
            return f"{self.succeeded} {entity_label} have been deleted."
        return (
            f"{self.succeeded} {entity_label} deleted, "
            f"{self.failed} could not be deleted."
        )


class MassDeleteManager(Generic[T]):
    """Runs one delete mutation per selected id.

    Args:
        gateway: GraphQL gateway.
        delete_document: Mutation taking ``$where: {id}``.
        entity_label: Plural label used in summaries (e.g. "reviews").
        refetch: Coroutine returning the refreshed list.
    """

    def __init__(
        self,
        gateway: GraphQLGateway,
        delete_document: str,
        entity_label: str,
        refetch: Optional[Callable[[], Awaitable[T]]] = None,
    ):
        self._gateway = gateway
        self._document = delete_document
        self._operation = operation_name_of(delete_document)
        self.entity_label = entity_label
        self._refetch = refetch

    async def mass_delete(
        self,
        selection: SelectionSet,
        confirm: Confirm,
    ) -> MassDeleteOutcome[T]:
        """
        Delete every selected id after confirmation.

        An empty selection or a declined confirmation makes no calls; a
        declined confirmation also leaves the selection intact.
        """
        if selection.is_empty:
            return MassDeleteOutcome(skipped=True)

        ids = selection.ids
        if not await confirm(len(ids)):
            logger.info("mass_delete_cancelled", entity=self.entity_label, count=len(ids))
            return MassDeleteOutcome(requested=len(ids), cancelled=True)

        outcome: MassDeleteOutcome[T] = MassDeleteOutcome(requested=len(ids))
        for entity_id in ids:
            try:
                await self._delete_one(entity_id)
                outcome.deleted.append(entity_id)
            except PortalError as e:
                logger.warning(
                    "mass_delete_item_failed",
                    entity=self.entity_label,
                    entity_id=entity_id,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                outcome.failures.append(
                    MassDeleteFailure(id=entity_id, reason=e.message, kind=type(e).__name__)
                )

        selection.clear()

        logger.info(
            "mass_delete_completed",
            entity=self.entity_label,
            succeeded=outcome.succeeded,
            failed=outcome.failed,
        )

        if self._refetch is not None:
            try:
                outcome.refreshed = await self._refetch()
            except PortalError as e:
                logger.warning("mass_delete_refetch_failed", entity=self.entity_label, error=str(e))
                outcome.refresh_error = e

        return outcome

    async def _delete_one(self, entity_id: str) -> Any:
        result = await self._gateway.execute(self._document, {"where": {"id": entity_id}})
        data = result.unwrap()
        root = next(iter(data.values()), None) if data else None
        if root is None:
            raise ProtocolError(
                f"{self._operation or 'delete'} returned nothing for {entity_id}",
                details={"id": entity_id},
            )
        return root
