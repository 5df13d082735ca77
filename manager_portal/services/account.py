"""Account commands: profile update and password change."""

from typing import Any, Mapping

import structlog

from manager_portal.core.exceptions import ValidationError
from manager_portal.core.results import Result
from manager_portal.forms.controller import ACCOUNT_FORM, EntityFormController, FormState
from manager_portal.graphql import documents
from manager_portal.models.entities import Account
from manager_portal.services.base import GatewayService, require_entity

logger = structlog.get_logger(__name__)


class AccountService(GatewayService):

    async def get_account(self, user_id: str) -> Account:
        data = await self._fetch(documents.USER_ACCOUNT, {"where": {"id": user_id}})
        return Account.model_validate(require_entity(data, "user", user_id))

    async def update_account(self, user_id: str, data: dict[str, Any]) -> Account:
        result = await self._fetch(documents.UPDATE_USER, {"id": user_id, "data": data})
        logger.info("account_updated", user_id=user_id, fields=sorted(data))
        return Account.model_validate(require_entity(result, "updateUser", user_id))

    async def submit_profile(
        self,
        account: Account,
        posted: Mapping[str, Any],
    ) -> tuple[FormState, Result]:
        controller = EntityFormController(ACCOUNT_FORM)
        state = controller.apply_form(controller.initialize(account), posted)
        outcome = await controller.submit(
            state,
            lambda data: self.update_account(account.id, data),
        )
        return state, outcome

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> str:
        """
        Change the password; the backend verifies the current one.

        Raises:
            ValidationError: Either password is blank.
        """
        if not current_password or not new_password:
            raise ValidationError(
                "Both current and new password are required.",
                field="newPassword",
            )

        data = await self._fetch(
            documents.UPDATE_USER_PASSWORD,
            {"id": user_id, "currentPassword": current_password, "newPassword": new_password},
        )
        require_entity(data, "updateUserPassword", user_id)
        logger.info("password_changed", user_id=user_id)
        return user_id
