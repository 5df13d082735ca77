"""Product commands: list, create, edit, delete."""

from typing import Any, Mapping, Optional

import structlog

from manager_portal.core.exceptions import ValidationError
from manager_portal.core.results import Result, run_command
from manager_portal.forms.controller import PRODUCT_FORM, EntityFormController, FormState
from manager_portal.graphql import documents
from manager_portal.models.entities import BusinessRef, Product
from manager_portal.services.base import (
    GatewayService,
    business_children,
    require_entity,
    user_where,
)

logger = structlog.get_logger(__name__)


class ProductsService(GatewayService):
    """Reads and writes the manager's products."""

    async def list_products(self, user_id: str) -> list[Product]:
        data = await self._fetch(documents.USER_PRODUCTS, user_where(user_id))
        return [Product.model_validate(p) for p in business_children(data, "products")]

    async def list_businesses(self, user_id: str) -> list[BusinessRef]:
        data = await self._fetch(documents.USER_BUSINESS_NAMES, user_where(user_id))
        user = data.get("user") or {}
        return [BusinessRef.model_validate(b) for b in user.get("businesses") or []]

    async def get_product(self, product_id: str) -> Product:
        data = await self._fetch(documents.PRODUCT, {"where": {"id": product_id}})
        return Product.model_validate(require_entity(data, "product", product_id))

    async def create_product(self, business_id: Optional[str], name: str, description: str) -> str:
        """
        Create a product under a business and return its id.

        Raises:
            ValidationError: No business or no name.
        """
        name = (name or "").strip()
        if not business_id:
            raise ValidationError("Select a business for the product.", field="businessId")
        if not name:
            raise ValidationError("Product name is required.", field="name")

        data = await self._fetch(
            documents.CREATE_PRODUCT,
            {
                "data": {
                    "name": name,
                    "description": description or "",
                    "business": {"connect": {"id": business_id}},
                }
            },
        )
        product_id = str(require_entity(data, "createProduct", name)["id"])
        logger.info("product_created", product_id=product_id, business_id=business_id)
        return product_id

    async def update_product(self, product_id: str, data: dict[str, Any]) -> dict[str, Any]:
        result = await self._fetch(documents.UPDATE_PRODUCT, {"id": product_id, "data": data})
        return require_entity(result, "updateProduct", product_id)

    async def submit_edit(
        self,
        product: Product,
        posted: Mapping[str, Any],
    ) -> tuple[FormState, Result]:
        """
        Apply the edit form and send touched fields only.

        Moving the product to another business counts as a touched
        ``business`` relation and is sent as a connect. A product loaded
        without a business has nothing to compare against, so its
        ``businessId`` post is ignored.
        """
        controller = EntityFormController(PRODUCT_FORM)
        state = controller.apply_form(controller.initialize(product), posted)

        current_business = product.business.id if product.business else None
        posted_business = (posted.get("businessId") or "").strip() or None
        move_to = None
        if current_business and posted_business and posted_business != current_business:
            move_to = posted_business

        async def command(update: dict[str, Any]) -> dict[str, Any]:
            if move_to:
                update = {**update, "business": {"connect": {"id": move_to}}}
            return await self.update_product(product.id, update)

        if move_to and not state.touched:
            # Relation change alone still needs a mutation.
            return state, await run_command("submit_product", lambda: command({}))

        return state, await controller.submit(state, command)

    async def delete_product(self, product_id: str) -> str:
        data = await self._fetch(documents.DELETE_PRODUCT, {"where": {"id": product_id}})
        require_entity(data, "deleteProduct", product_id)
        logger.info("product_deleted", product_id=product_id)
        return product_id
