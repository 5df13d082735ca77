"""Selection set over a list of entity ids."""

from typing import Iterable, Iterator


class SelectionSet:
    """Ordered set of selected ids (insertion order is kept for deletes).

    Example:
        selection = SelectionSet()
        selection.toggle("r1")
        selection.select_all(["r1", "r2"])
        selection.ids  # ("r1", "r2")
    """

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: dict[str, None] = {}
        for entity_id in ids:
            self._ids[str(entity_id)] = None

    def toggle(self, entity_id: str) -> bool:
        """Select or deselect one id. Returns True when it is now selected."""
        entity_id = str(entity_id)
        if entity_id in self._ids:
            del self._ids[entity_id]
            return False
        self._ids[entity_id] = None
        return True

    def select_all(self, ids: Iterable[str]) -> None:
        """Replace the selection with ``ids``."""
        self._ids = {str(entity_id): None for entity_id in ids}

    def clear(self) -> None:
        self._ids.clear()

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    @property
    def is_empty(self) -> bool:
        return not self._ids

    def __contains__(self, entity_id: object) -> bool:
        return str(entity_id) in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._ids))

    def __repr__(self) -> str:
        return f"SelectionSet({list(self._ids)!r})"
