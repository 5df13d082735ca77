"""Helpers shared by the page services."""

from typing import Any, Optional

from manager_portal.core.exceptions import ApiError
from manager_portal.graphql.gateway import GraphQLGateway


class GatewayService:
    """Base for services that only need the gateway."""

    def __init__(self, gateway: GraphQLGateway):
        self._gateway = gateway

    async def _fetch(self, document: str, variables: dict[str, Any]) -> dict[str, Any]:
        result = await self._gateway.execute(document, variables)
        return result.unwrap()


def user_where(user_id: str) -> dict[str, Any]:
    return {"where": {"id": user_id}}


def business_children(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Flatten ``user.businesses[*].<key>`` in fetch order."""
    user = data.get("user") or {}
    items: list[dict[str, Any]] = []
    for business in user.get("businesses") or []:
        items.extend(business.get(key) or [])
    return items


def require_entity(data: dict[str, Any], root: str, entity_id: str) -> dict[str, Any]:
    """Return ``data[root]`` or raise ApiError when the entity does not exist."""
    entity: Optional[dict[str, Any]] = data.get(root)
    if entity is None:
        raise ApiError([f"{root} {entity_id} not found"], operation=root)
    return entity
