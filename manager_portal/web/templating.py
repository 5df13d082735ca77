"""Jinja2 template environment and display helpers."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from manager_portal.core.results import Err

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_STAR = "⭐"


@dataclass(frozen=True)
class Toast:
    """A short message shown above the page content."""

    level: str
    message: str

    @classmethod
    def success(cls, message: str) -> "Toast":
        return cls("success", message)

    @classmethod
    def error(cls, message: str) -> "Toast":
        return cls("error", message)

    @classmethod
    def from_result(cls, outcome: Any, success_message: str) -> "Toast":
        if isinstance(outcome, Err):
            return cls.error(outcome.message)
        return cls.success(success_message)


# Messages for toasts carried across a redirect as ?toast=<key>.
REDIRECT_TOASTS = {
    "product_updated": Toast.success("Product updated successfully!"),
    "product_created": Toast.success("Product created. You can now upload images."),
    "product_deleted": Toast.success("Product deleted."),
    "signed_out": Toast.success("You have been signed out."),
}


def toast_from_query(request: Request) -> Optional[Toast]:
    return REDIRECT_TOASTS.get(request.query_params.get("toast", ""))


def render_stars(rating: Optional[int]) -> str:
    if not rating:
        return ""
    return _STAR * int(rating)


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%d %b %Y")


def build_templates(asset_base_url: str = "") -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["stars"] = render_stars
    templates.env.filters["date"] = format_date
    templates.env.globals["asset_base_url"] = asset_base_url.rstrip("/")
    return templates


def render_page(
    request: Request,
    name: str,
    context: Optional[dict[str, Any]] = None,
    toast: Optional[Toast] = None,
    status_code: int = 200,
):
    """Render a page with the signed-in user and any pending toast."""
    page = {
        "user": getattr(request.state, "user", None),
        "toast": toast or toast_from_query(request),
    }
    page.update(context or {})
    return request.app.state.templates.TemplateResponse(
        request, name, page, status_code=status_code
    )
