"""Mapping a browser location onto a checklist screen."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._models import TestChecklist

ROOT_SCREENS = ("HOME", "DASHBOARD", "MAIN")


def _fold(value: str) -> str:
    return value.lower().replace("_", "-")


def resolve_screen(
    path: str,
    hash_fragment: str,
    checklists: "Sequence[TestChecklist]",
) -> str | None:
    """Return the screen a location most likely shows.

    The root location resolves to the first of ``HOME``, ``DASHBOARD`` or
    ``MAIN`` that has a checklist, else to the first checklist. Any other
    location resolves to the screen whose name occurs in the path or hash,
    ignoring case and treating ``_`` and ``-`` alike; the longest matching
    name wins.

    Returns:
        The screen name, or None when nothing matches.
    """
    if not checklists:
        return None

    screens = [checklist.screen for checklist in checklists]

    if path in ("", "/") and hash_fragment in ("", "#", "#/"):
        for name in ROOT_SCREENS:
            if name in screens:
                return name
        return screens[0]

    location = _fold(path) + _fold(hash_fragment)
    best: str | None = None
    for screen in screens:
        if _fold(screen) in location and (best is None or len(screen) > len(best)):
            best = screen
    return best
