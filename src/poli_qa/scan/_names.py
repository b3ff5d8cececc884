"""Canonical screen names derived from routes and file names.

Screen names are upper-case identifiers with underscores (``USER_PROFILE``).
They key checklists, bugs and the generated ``AppScreen`` union.
"""

import re
from pathlib import PurePosixPath

HOME_SCREEN = "HOME"
DETAIL_SUFFIX = "_DETAIL"

_DYNAMIC_SEGMENT_RE = re.compile(r"(?:^|/):[\w-]+")
# Case-sensitive so an already derived name (``REVIEW``) stays put
_SCREEN_SUFFIX_RE = re.compile(r"(?:Page|Screen|View|Calculator|Calendar)$")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
_PASCAL_RE = re.compile(r"[-_](.)")


def route_to_screen_name(route_path: str) -> str:
    """Derive a screen name from a route path.

    Examples:
        >>> route_to_screen_name("/user-profile")
        'USER_PROFILE'
        >>> route_to_screen_name("/users/:id")
        'USERS_DETAIL'
        >>> route_to_screen_name("/")
        'HOME'
    """
    name = route_path.removeprefix("/")
    name = _DYNAMIC_SEGMENT_RE.sub("", name).replace(":", "").strip("/")
    name = name.replace("/", "_").replace("-", "_").upper()

    if not name:
        return HOME_SCREEN

    if ":" in route_path and not name.endswith(DETAIL_SUFFIX):
        name += DETAIL_SUFFIX

    return name


def file_to_screen_name(file_name: str) -> str:
    """Derive a screen name from a component file name or path.

    Examples:
        >>> file_to_screen_name("src/pages/UserProfilePage.tsx")
        'USER_PROFILE'
        >>> file_to_screen_name("checkout-flow")
        'CHECKOUT_FLOW'
        >>> file_to_screen_name("Overview.tsx")
        'OVERVIEW'
    """
    stem = PurePosixPath(file_name.replace("\\", "/")).name
    if "." in stem:
        stem = stem.split(".", 1)[0]

    stem = _SCREEN_SUFFIX_RE.sub("", stem)
    name = _CAMEL_BOUNDARY_RE.sub(r"\1_\2", stem).upper().replace("-", "_")
    return name or HOME_SCREEN


def normalize_screen_name(name: str) -> str:
    """Upper-case a user-supplied screen name and turn hyphens into underscores."""
    return name.strip().upper().replace("-", "_")


def to_pascal_case(value: str) -> str:
    """Convert ``user-profile`` or ``user_profile`` to ``UserProfile``."""
    converted = _PASCAL_RE.sub(lambda m: m.group(1).upper(), value)
    return converted[:1].upper() + converted[1:]
