"""Reconciliation of persisted checklists with a regenerated definition."""

from dataclasses import replace
from typing import TYPE_CHECKING

from ._models import TestStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._models import TestChecklist, TestItem


def checklist_fingerprint(checklists: "Sequence[TestChecklist]") -> str:
    """Return the sorted, comma-joined ids of every item in ``checklists``.

    Two checklist documents with the same fingerprint define the same items,
    whatever their order or descriptions.
    """
    return ",".join(sorted(item.id for c in checklists for item in c.items))


def _has_history(item: "TestItem") -> bool:
    return (
        item.status != TestStatus.NOT_STARTED
        or item.notes is not None
        or item.tested_at is not None
    )


def merge_checklists(
    persisted: "Sequence[TestChecklist]",
    supplied: "Sequence[TestChecklist]",
) -> tuple["TestChecklist", ...]:
    """Carry prior results forward onto a newly supplied checklist document.

    The supplied document defines which items exist. Each supplied item whose
    id was tested in the persisted document takes that item's status, notes
    and tested_at. New ids start with their supplied defaults; ids missing
    from the supplied document are dropped.
    """
    history = {
        item.id: item for c in persisted for item in c.items if _has_history(item)
    }

    merged: list[TestChecklist] = []
    for checklist in supplied:
        items: list[TestItem] = []
        for item in checklist.items:
            previous = history.get(item.id)
            if previous is None:
                items.append(item)
            else:
                items.append(
                    replace(
                        item,
                        status=previous.status,
                        notes=previous.notes,
                        tested_at=previous.tested_at,
                    )
                )
        merged.append(replace(checklist, items=tuple(items)))
    return tuple(merged)
