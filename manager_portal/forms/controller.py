"""Entity Form State Controller.

Loads an entity into editable local state, tracks which fields the user
touched, and builds a partial update containing only those fields.

Untouched fields are never submitted. One entity is split across several
independent panels (the business profile has four), so sending a full
form would overwrite fields another panel owns.

Example:
    controller = EntityFormController(JOB_LISTING_FORM)
    state = controller.initialize(job)
    state = controller.on_field_change(state, "salary", "52000")
    controller.build_update(state)  # {"salary": 52000.0}
"""

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar, Union

import structlog
from pydantic import BaseModel

from manager_portal.core.exceptions import ValidationError
from manager_portal.core.results import Err, Ok, Result, run_command

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FormSchema:
    """The API fields a form covers and which of them are numeric."""

    name: str
    fields: tuple[str, ...]
    numeric: Mapping[str, type] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.numeric) - set(self.fields)
        if unknown:
            raise ValueError(f"Numeric fields not in form {self.name}: {sorted(unknown)}")

    def coerce(self, name: str, value: Any) -> Any:
        """Coerce a value for transmission; numeric fields must parse."""
        kind = self.numeric.get(name)
        if kind is None:
            return value
        return _coerce_number(name, value, kind)


def _coerce_number(name: str, value: Any, kind: type) -> Optional[Union[int, float]]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number", field=name)
    if isinstance(value, (int, float)):
        text = repr(value)
    else:
        text = str(value).strip()
        if text == "":
            return None

    try:
        if kind is int:
            number: Union[int, float] = int(text)
        else:
            number = float(text)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number, got {value!r}", field=name) from None

    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError(f"{name} must be a finite number", field=name)
    return number


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class FormState:
    """Immutable snapshot of a form: loaded values, current values, touched set."""

    schema: FormSchema
    entity_id: Optional[str]
    initial: Mapping[str, Any]
    values: Mapping[str, Any]
    touched: frozenset[str] = frozenset()

    @property
    def is_dirty(self) -> bool:
        return bool(self.touched)

    def value(self, name: str) -> Any:
        return self.values.get(name)


class EntityFormController:
    """Builds and updates FormState for one FormSchema."""

    def __init__(self, schema: FormSchema):
        self.schema = schema

    def initialize(self, entity: Union[BaseModel, Mapping[str, Any], None]) -> FormState:
        """Load an entity's fields into a fresh, untouched form state."""
        if entity is None:
            source: Mapping[str, Any] = {}
        elif isinstance(entity, BaseModel):
            source = entity.model_dump(by_alias=True, mode="json")
        else:
            source = entity

        values = {name: source.get(name) for name in self.schema.fields}
        frozen = MappingProxyType(dict(values))
        return FormState(
            schema=self.schema,
            entity_id=source.get("id"),
            initial=frozen,
            values=frozen,
        )

    def on_field_change(self, state: FormState, name: str, value: Any) -> FormState:
        """Shallow-merge one field and mark it touched."""
        if name not in self.schema.fields:
            raise ValidationError(f"{name} is not a field of {self.schema.name}", field=name)

        values = dict(state.values)
        values[name] = value
        return replace(
            state,
            values=MappingProxyType(values),
            touched=state.touched | {name},
        )

    def apply_form(self, state: FormState, posted: Mapping[str, Any]) -> FormState:
        """
        Apply an HTML form post.

        A browser posts every input of a panel, so a field counts as touched
        only when its posted text differs from what was loaded. Fields the
        post does not carry are left alone.
        """
        for name in self.schema.fields:
            if name not in posted:
                continue
            submitted = posted[name]
            if _as_text(submitted).strip() == _as_text(state.initial.get(name)).strip():
                continue
            state = self.on_field_change(state, name, submitted)
        return state

    def build_update(self, state: FormState) -> dict[str, Any]:
        """
        Return the mutation payload: exactly the touched fields, coerced.

        Raises:
            ValidationError: A numeric field does not parse.
        """
        return {
            name: self.schema.coerce(name, state.values.get(name))
            for name in self.schema.fields
            if name in state.touched
        }

    async def submit(
        self,
        state: FormState,
        command: Callable[[dict[str, Any]], Awaitable[T]],
    ) -> Result[Optional[T]]:
        """
        Send the touched fields through ``command``.

        An untouched form is a no-op and makes no call. Coercion failures
        return Err before any call. The state itself is never modified.
        """
        try:
            update = self.build_update(state)
        except ValidationError as e:
            logger.info("form_validation_failed", form=self.schema.name, field=e.field)
            return Err(e)

        if not update:
            logger.debug("form_submit_noop", form=self.schema.name)
            return Ok(None)

        logger.info(
            "form_submit",
            form=self.schema.name,
            entity_id=state.entity_id,
            fields=sorted(update),
        )
        return await run_command(f"submit_{self.schema.name}", lambda: command(update))


# =============================================================================
# Form Schemas
# =============================================================================

PRODUCT_FORM = FormSchema(name="product", fields=("name", "description"))

JOB_LISTING_FORM = FormSchema(
    name="job_listing",
    fields=("title", "description", "location", "salary"),
    numeric={"salary": float},
)

ACCOUNT_FORM = FormSchema(name="account", fields=("name", "email"))
