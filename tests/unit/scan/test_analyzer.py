from poli_qa.scan import (
    analyze_component,
    extract_buttons,
    extract_forms,
    extract_inputs,
    extract_links,
    extract_modals,
    extract_selects,
    extract_text,
    parse_props,
)


class TestParseProps:
    def test_parses_string_expression_and_boolean_props(self) -> None:
        props = parse_props(' type="submit" onClick={save} disabled')

        assert props == {"type": "submit", "onClick": "save", "disabled": "true"}

    def test_single_quoted_values(self) -> None:
        assert parse_props(" name='email'") == {"name": "email"}

    def test_hyphenated_names(self) -> None:
        props = parse_props(' aria-label="Close" data-testid="x"')

        assert props["aria-label"] == "Close"
        assert props["data-testid"] == "x"

    def test_boolean_does_not_override_explicit_value(self) -> None:
        props = parse_props(' required="false" required')

        assert props["required"] == "false"

    def test_empty_props(self) -> None:
        assert parse_props("") == {}


class TestExtractText:
    def test_strips_tags_and_expressions(self) -> None:
        assert extract_text("<span>Save</span> {count} <b>now</b>") == "Save now"

    def test_collapses_whitespace(self) -> None:
        assert extract_text("\n   Refresh\n   data  ") == "Refresh data"


class TestExtractButtons:
    def test_native_button(self) -> None:
        buttons = extract_buttons(
            '<button type="submit" onClick={handleSave}>Save changes</button>'
        )

        assert len(buttons) == 1
        assert buttons[0].label == "Save changes"
        assert buttons[0].type == "submit"
        assert buttons[0].on_click == "handleSave"

    def test_component_button_label_prop(self) -> None:
        buttons = extract_buttons('<Button label="Export" onClick={run}></Button>')

        assert [b.label for b in buttons] == ["Export"]

    def test_icon_button_uses_aria_label(self) -> None:
        buttons = extract_buttons('<IconButton aria-label="Close dialog" onClick={close} />')

        assert [b.label for b in buttons] == ["Close dialog"]

    def test_deduplicates_by_label_ignoring_case(self) -> None:
        buttons = extract_buttons("<button>Save</button><Button>save</Button>")

        assert len(buttons) == 1

    def test_buttons_without_label_are_dropped(self) -> None:
        assert extract_buttons("<button><Icon /></button>") == []

    def test_disabled_flag(self) -> None:
        buttons = extract_buttons("<button disabled>Wait</button>")

        assert buttons[0].disabled is True


class TestExtractInputs:
    def test_native_input(self) -> None:
        inputs = extract_inputs('<input type="email" name="email" required />')

        assert len(inputs) == 1
        assert inputs[0].type == "email"
        assert inputs[0].name == "email"
        assert inputs[0].required is True

    def test_component_input_with_label(self) -> None:
        inputs = extract_inputs('<TextField label="Full name" name="fullName" />')

        assert inputs[0].label == "Full name"
        assert inputs[0].name == "fullName"

    def test_textarea(self) -> None:
        inputs = extract_inputs('<textarea name="bio" placeholder="About you"></textarea>')

        assert inputs[0].type == "textarea"
        assert inputs[0].placeholder == "About you"

    def test_defaults_to_text_type(self) -> None:
        inputs = extract_inputs('<input name="q" />')

        assert inputs[0].type == "text"


class TestExtractSelects:
    def test_native_select_with_options(self) -> None:
        selects = extract_selects(
            '<select name="country"><option value="us">US</option>'
            '<option value="de">Germany</option><option value=""> </option></select>'
        )

        assert len(selects) == 1
        assert selects[0].name == "country"
        assert selects[0].options == ("US", "Germany")

    def test_select_component(self) -> None:
        selects = extract_selects('<Select label="Role" name="role" multiple />')

        assert selects[0].label == "Role"
        assert selects[0].multiple is True

    def test_native_select_is_not_counted_twice(self) -> None:
        selects = extract_selects("<select><option>A</option></select>")

        assert len(selects) == 1


class TestExtractLinks:
    def test_internal_links(self) -> None:
        links = extract_links(
            '<Link to="/settings">Settings</Link>'
            '<NavLink to="/profile">Profile</NavLink>'
            '<a href="/help">Help</a>'
        )

        assert [(link.to, link.text) for link in links] == [
            ("/settings", "Settings"),
            ("/profile", "Profile"),
            ("/help", "Help"),
        ]

    def test_external_anchors_are_skipped(self) -> None:
        links = extract_links(
            '<a href="https://example.com">Site</a><a href="mailto:x@y.z">Mail</a>'
        )

        assert links == []

    def test_deduplicates_by_target(self) -> None:
        links = extract_links('<Link to="/a">One</Link><Link to="/a">Two</Link>')

        assert [link.text for link in links] == ["One"]


class TestExtractModals:
    def test_title_names_the_modal(self) -> None:
        modals = extract_modals('<Modal title="Confirm delete" isOpen={open}>')

        assert [m.name for m in modals] == ["Confirm delete"]

    def test_untitled_overlays_default_to_modal(self) -> None:
        modals = extract_modals("<Drawer open={x}></Drawer>")

        assert [m.name for m in modals] == ["Modal"]


class TestExtractForms:
    def test_collects_field_names(self) -> None:
        forms = extract_forms(
            '<form id="signup" onSubmit={handleSubmit}>'
            '<input name="email" /><input id="password" /><input name="email" />'
            "</form>"
        )

        assert len(forms) == 1
        assert forms[0].id == "signup"
        assert forms[0].on_submit == "handleSubmit"
        assert forms[0].fields == ("email", "password")


class TestAnalyzeComponent:
    def test_feature_flags(self) -> None:
        content = """
        const { data, isLoading, error } = useQuery(['users'], fetchUsers);
        const [searchTerm, setSearchTerm] = useState('');
        if (data.length === 0) return <Empty />;
        return (
          <table>{data.map((u) => <tr key={u.id}><td>{u.name}</td></tr>)}</table>
          <Pagination currentPage={page} />
        );
        """

        analysis = analyze_component(content)

        assert analysis.data_fetching
        assert analysis.loading_state
        assert analysis.error_state
        assert analysis.empty_state
        assert analysis.tables
        assert analysis.pagination
        assert analysis.search

    def test_plain_component_has_no_features(self) -> None:
        analysis = analyze_component("export const X = () => <div>Hello</div>;")

        assert analysis.buttons == ()
        assert analysis.forms == ()
        assert not analysis.tables
        assert not analysis.data_fetching
        assert not analysis.error_state

    def test_malformed_markup_does_not_raise(self) -> None:
        analysis = analyze_component("<button <form <<< {{{ </select")

        assert analysis.forms == ()
