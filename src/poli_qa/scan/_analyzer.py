"""Best-effort extraction of UI elements from JSX/TSX source text.

Everything here is regular-expression matching over raw source: no parsing,
no I/O. Extractors may over- or under-match on unusual markup; a missing
attribute simply leaves the corresponding field empty.
"""

import re
from dataclasses import dataclass

# =============================================================================
# Extracted elements
# =============================================================================


@dataclass(frozen=True, slots=True)
class ExtractedButton:
    label: str
    type: str | None = None
    on_click: str | None = None
    disabled: bool = False


@dataclass(frozen=True, slots=True)
class ExtractedInput:
    type: str = "text"
    name: str | None = None
    placeholder: str | None = None
    label: str | None = None
    required: bool = False


@dataclass(frozen=True, slots=True)
class ExtractedSelect:
    name: str | None = None
    label: str | None = None
    options: tuple[str, ...] = ()
    multiple: bool = False


@dataclass(frozen=True, slots=True)
class ExtractedLink:
    to: str
    text: str


@dataclass(frozen=True, slots=True)
class ExtractedModal:
    name: str = "Modal"
    trigger: str | None = None


@dataclass(frozen=True, slots=True)
class ExtractedForm:
    id: str | None = None
    on_submit: str | None = None
    fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ComponentAnalysis:
    """UI facts extracted from one component's source.

    Attributes:
        buttons: Buttons with a label, deduplicated by label.
        inputs: Text entry fields, deduplicated by name/id/placeholder key.
        selects: Dropdowns.
        links: Internal navigation links, deduplicated by target.
        modals: Overlay components.
        forms: Native forms with the field names they contain.
        tables: Tabular data is rendered.
        pagination: Pagination is present.
        search: Search is present.
        data_fetching: Data is fetched from an API.
        loading_state: A loading state is rendered.
        error_state: An error state is rendered.
        empty_state: An empty state is rendered.
    """

    buttons: tuple[ExtractedButton, ...] = ()
    inputs: tuple[ExtractedInput, ...] = ()
    selects: tuple[ExtractedSelect, ...] = ()
    links: tuple[ExtractedLink, ...] = ()
    modals: tuple[ExtractedModal, ...] = ()
    forms: tuple[ExtractedForm, ...] = ()
    tables: bool = False
    pagination: bool = False
    search: bool = False
    data_fetching: bool = False
    loading_state: bool = False
    error_state: bool = False
    empty_state: bool = False


# =============================================================================
# Props and text
# =============================================================================

_STRING_PROP_RE = re.compile(r"([\w-]+)\s*=\s*[\"']([^\"']+)[\"']")
_EXPR_PROP_RE = re.compile(r"([\w-]+)\s*=\s*\{([^}]+)\}")
_BOOL_PROP_RE = re.compile(r"\s([\w-]+)(?=\s|/?>|$)(?!\s*=)")

_TAG_RE = re.compile(r"<[^>]+>")
_EXPR_RE = re.compile(r"\{[^}]+\}")
_WHITESPACE_RE = re.compile(r"\s+")


def parse_props(props: str) -> dict[str, str]:
    """Parse a JSX attribute string.

    Handles ``name="value"``, ``name='value'``, ``name={expression}`` and bare
    boolean attributes, which map to ``"true"``.

    Examples:
        >>> parse_props(' type="submit" onClick={save} disabled')
        {'type': 'submit', 'onClick': 'save', 'disabled': 'true'}
    """
    parsed: dict[str, str] = {}
    for match in _STRING_PROP_RE.finditer(props):
        parsed[match.group(1)] = match.group(2)
    for match in _EXPR_PROP_RE.finditer(props):
        parsed[match.group(1)] = match.group(2).strip()
    for match in _BOOL_PROP_RE.finditer(" " + props):
        _ = parsed.setdefault(match.group(1), "true")
    return parsed


def extract_text(jsx: str) -> str:
    """Return the visible text of a JSX fragment, tags and expressions removed."""
    text = _TAG_RE.sub(" ", jsx)
    text = _EXPR_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


# =============================================================================
# Element extractors
# =============================================================================

_BUTTON_RE = re.compile(r"<button([^>]*)>([\s\S]*?)</button>", re.IGNORECASE)
_BUTTON_COMPONENT_RE = re.compile(r"<Button([^>]*)>([\s\S]*?)</Button>", re.IGNORECASE)
_ICON_BUTTON_RE = re.compile(
    r"<(?:IconButton|Btn|ActionButton)([^>]*)(?:/>|>[\s\S]*?</\w+>)", re.IGNORECASE
)


def extract_buttons(content: str) -> list[ExtractedButton]:
    buttons: list[ExtractedButton] = []
    seen: set[str] = set()

    def add(button: ExtractedButton) -> None:
        key = button.label.lower()
        if button.label and key not in seen:
            seen.add(key)
            buttons.append(button)

    for match in _BUTTON_RE.finditer(content):
        props = parse_props(match.group(1))
        add(
            ExtractedButton(
                label=extract_text(match.group(2))
                or props.get("children")
                or props.get("title")
                or "",
                type=props.get("type"),
                on_click=props.get("onClick"),
                disabled=props.get("disabled") in ("true", "disabled"),
            )
        )

    for match in _BUTTON_COMPONENT_RE.finditer(content):
        props = parse_props(match.group(1))
        add(
            ExtractedButton(
                label=extract_text(match.group(2))
                or props.get("children")
                or props.get("title")
                or props.get("label")
                or "",
                type=props.get("type") or props.get("variant"),
                on_click=props.get("onClick"),
                disabled=props.get("disabled") == "true",
            )
        )

    for match in _ICON_BUTTON_RE.finditer(content):
        props = parse_props(match.group(1))
        add(
            ExtractedButton(
                label=props.get("aria-label") or props.get("title") or props.get("label") or "",
                on_click=props.get("onClick"),
            )
        )

    return buttons


_INPUT_RE = re.compile(r"<input([^>]*)/?>", re.IGNORECASE)
_INPUT_COMPONENT_RE = re.compile(r"<(?:Input|TextField|TextInput)([^>]*)/?>", re.IGNORECASE)
_TEXTAREA_RE = re.compile(r"<textarea([^>]*)(?:/?>[\s\S]*?(?:</textarea>)?)", re.IGNORECASE)


def extract_inputs(content: str) -> list[ExtractedInput]:
    inputs: list[ExtractedInput] = []
    seen: set[str] = set()

    for match in _INPUT_RE.finditer(content):
        props = parse_props(match.group(1))
        key = (
            props.get("name")
            or props.get("id")
            or props.get("placeholder")
            or props.get("type")
            or "input"
        )
        if key not in seen:
            seen.add(key)
            inputs.append(
                ExtractedInput(
                    type=props.get("type") or "text",
                    name=props.get("name") or props.get("id"),
                    placeholder=props.get("placeholder"),
                    required=props.get("required") in ("true", "required"),
                )
            )

    for match in _INPUT_COMPONENT_RE.finditer(content):
        props = parse_props(match.group(1))
        key = (
            props.get("name")
            or props.get("id")
            or props.get("placeholder")
            or props.get("label")
            or "input"
        )
        if key not in seen:
            seen.add(key)
            inputs.append(
                ExtractedInput(
                    type=props.get("type") or "text",
                    name=props.get("name") or props.get("id"),
                    placeholder=props.get("placeholder"),
                    label=props.get("label"),
                    required=props.get("required") == "true",
                )
            )

    for match in _TEXTAREA_RE.finditer(content):
        props = parse_props(match.group(1))
        key = props.get("name") or props.get("id") or props.get("placeholder") or "textarea"
        if key not in seen:
            seen.add(key)
            inputs.append(
                ExtractedInput(
                    type="textarea",
                    name=props.get("name") or props.get("id"),
                    placeholder=props.get("placeholder"),
                    required=props.get("required") == "true",
                )
            )

    return inputs


_SELECT_RE = re.compile(r"<select([^>]*)>([\s\S]*?)</select>", re.IGNORECASE)
_OPTION_RE = re.compile(r"<option[^>]*>([^<]*)</option>", re.IGNORECASE)
# Case-sensitive so native <select> elements are not counted twice
_SELECT_COMPONENT_RE = re.compile(r"<Select\b([^>]*)/?>")


def extract_selects(content: str) -> list[ExtractedSelect]:
    selects: list[ExtractedSelect] = []

    for match in _SELECT_RE.finditer(content):
        props = parse_props(match.group(1))
        options = tuple(
            text.strip()
            for text in _OPTION_RE.findall(match.group(2))
            if text.strip()
        )
        selects.append(
            ExtractedSelect(
                name=props.get("name") or props.get("id"),
                options=options,
                multiple=props.get("multiple") == "true",
            )
        )

    for match in _SELECT_COMPONENT_RE.finditer(content):
        props = parse_props(match.group(1))
        selects.append(
            ExtractedSelect(
                name=props.get("name") or props.get("id"),
                label=props.get("label"),
                multiple=props.get("multiple") == "true",
            )
        )

    return selects


_LINK_RE = re.compile(r"<Link([^>]*)>([\s\S]*?)</Link>", re.IGNORECASE)
_NAV_LINK_RE = re.compile(r"<NavLink([^>]*)>([\s\S]*?)</NavLink>", re.IGNORECASE)
_ANCHOR_RE = re.compile(r"<a\b([^>]*)>([\s\S]*?)</a>", re.IGNORECASE)


def _is_external(href: str) -> bool:
    return href.startswith(("http", "mailto:"))


def extract_links(content: str) -> list[ExtractedLink]:
    links: list[ExtractedLink] = []
    seen: set[str] = set()

    def add(to: str, text: str) -> None:
        if to and to not in seen:
            seen.add(to)
            links.append(ExtractedLink(to=to, text=text))

    for match in _LINK_RE.finditer(content):
        props = parse_props(match.group(1))
        add(props.get("to") or props.get("href") or "", extract_text(match.group(2)))

    for match in _NAV_LINK_RE.finditer(content):
        props = parse_props(match.group(1))
        add(props.get("to") or "", extract_text(match.group(2)))

    for match in _ANCHOR_RE.finditer(content):
        href = parse_props(match.group(1)).get("href") or ""
        if not _is_external(href):
            add(href, extract_text(match.group(2)))

    return links


_MODAL_RES = tuple(
    re.compile(rf"<{tag}([^>]*)/?>", re.IGNORECASE)
    for tag in ("Modal", "Dialog", "Drawer", "Popup", "Overlay")
)


def extract_modals(content: str) -> list[ExtractedModal]:
    modals: list[ExtractedModal] = []
    for pattern in _MODAL_RES:
        for match in pattern.finditer(content):
            props = parse_props(match.group(1))
            modals.append(
                ExtractedModal(
                    name=props.get("title") or props.get("aria-label") or "Modal",
                    trigger=props.get("trigger"),
                )
            )
    return modals


_FORM_RE = re.compile(r"<form([^>]*)>([\s\S]*?)</form>", re.IGNORECASE)
_FIELD_RE = re.compile(r"(?:name|id)\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)


def extract_forms(content: str) -> list[ExtractedForm]:
    forms: list[ExtractedForm] = []
    for match in _FORM_RE.finditer(content):
        props = parse_props(match.group(1))
        fields = dict.fromkeys(_FIELD_RE.findall(match.group(2)))
        forms.append(
            ExtractedForm(
                id=props.get("id"),
                on_submit=props.get("onSubmit"),
                fields=tuple(fields),
            )
        )
    return forms


# =============================================================================
# Feature flags
# =============================================================================

_FEATURE_RES: dict[str, re.Pattern[str]] = {
    "tables": re.compile(
        r"(<table|<Table|DataTable|DataGrid|\.map\s*\(\s*\([^)]*\)\s*=>\s*<tr)",
        re.IGNORECASE,
    ),
    "pagination": re.compile(
        r"(pagination|paginate|pageSize|currentPage|nextPage|prevPage|<Pagination)",
        re.IGNORECASE,
    ),
    "search": re.compile(
        r"(<input[^>]*type\s*=\s*[\"']search[\"']|search|SearchInput|onSearch|searchTerm)",
        re.IGNORECASE,
    ),
    "data_fetching": re.compile(
        r"(fetch\s*\(|useQuery|useSWR|axios\.|\.get\(|\.post\(|useEffect.*fetch)",
        re.IGNORECASE,
    ),
    "loading_state": re.compile(
        r"(isLoading|loading|Loading|Spinner|Skeleton|\.loading)", re.IGNORECASE
    ),
    "error_state": re.compile(
        r"(isError|error|Error|\.error|onError|errorMessage)", re.IGNORECASE
    ),
    "empty_state": re.compile(
        r"(emptyState|noData|NoResults|\.length\s*===?\s*0|isEmpty)", re.IGNORECASE
    ),
}


def analyze_component(content: str) -> ComponentAnalysis:
    """Extract the UI elements and feature flags of one component.

    Args:
        content: Raw JSX/TSX source text.

    Returns:
        The extracted analysis. Never raises on malformed markup.
    """
    features = {
        name: pattern.search(content) is not None
        for name, pattern in _FEATURE_RES.items()
    }
    return ComponentAnalysis(
        buttons=tuple(extract_buttons(content)),
        inputs=tuple(extract_inputs(content)),
        selects=tuple(extract_selects(content)),
        links=tuple(extract_links(content)),
        modals=tuple(extract_modals(content)),
        forms=tuple(extract_forms(content)),
        **features,
    )
