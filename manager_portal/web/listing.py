"""Mass delete page flow shared by the review, complaint and job pages.

The first POST shows a confirmation page listing what will be deleted; the
confirmation page posts back with ``confirmed=yes`` and the deletes run.
"""

from typing import Any, Awaitable, Callable, Iterable, Optional

from fastapi import Request

from manager_portal.listings.mass_delete import MassDeleteManager, MassDeleteOutcome
from manager_portal.listings.selection import SelectionSet
from manager_portal.web.templating import Toast, render_page


def confirm_from_form(confirmed: str) -> Callable[[int], Awaitable[bool]]:
    async def confirm(count: int) -> bool:
        return confirmed == "yes"

    return confirm


def outcome_toast(outcome: MassDeleteOutcome, entity_label: str) -> Toast:
    summary = outcome.summary(entity_label)
    if outcome.failures or outcome.skipped:
        return Toast.error(summary)
    if outcome.refresh_error is not None:
        return Toast.error(f"{summary} The list could not be refreshed.")
    return Toast.success(summary)


async def handle_mass_delete(
    request: Request,
    manager: MassDeleteManager,
    ids: Iterable[str],
    confirmed: str,
    action: str,
    cancel_url: str,
    render_list: Callable[[Optional[Toast], Optional[Any]], Awaitable[Any]],
):
    """
    Run one step of the mass delete flow.

    ``render_list(toast, items)`` re-renders the list page; ``items`` is the
    re-fetched list when one is available.
    """
    selection = SelectionSet(ids)
    outcome = await manager.mass_delete(selection, confirm_from_form(confirmed))

    if outcome.cancelled:
        return render_page(
            request,
            "confirm_delete.html",
            {
                "action": action,
                "cancel_url": cancel_url,
                "count": len(selection),
                "entity_label": manager.entity_label,
                "ids": list(selection.ids),
            },
        )

    return await render_list(outcome_toast(outcome, manager.entity_label), outcome.refreshed)
