import pytest

from poli_qa.scan import (
    file_to_screen_name,
    normalize_screen_name,
    route_to_screen_name,
    to_pascal_case,
)


class TestRouteToScreenName:
    @pytest.mark.parametrize(
        ("route", "expected"),
        [
            ("/", "HOME"),
            ("", "HOME"),
            ("/dashboard", "DASHBOARD"),
            ("/user-profile", "USER_PROFILE"),
            ("/settings/billing", "SETTINGS_BILLING"),
            ("/users/:id", "USERS_DETAIL"),
            ("/users/:userId/posts", "USERS_POSTS_DETAIL"),
        ],
    )
    def test_derives_expected_names(self, route: str, expected: str) -> None:
        assert route_to_screen_name(route) == expected

    def test_leading_dynamic_segment_is_dropped(self) -> None:
        assert route_to_screen_name(":slug/edit") == "EDIT_DETAIL"

    def test_only_dynamic_segment_maps_to_home(self) -> None:
        assert route_to_screen_name("/:id") == "HOME"

    def test_detail_suffix_is_not_doubled(self) -> None:
        assert route_to_screen_name("/orders_detail/:id") == "ORDERS_DETAIL"

    def test_is_idempotent_on_derived_names(self) -> None:
        once = route_to_screen_name("/users/:id")

        assert route_to_screen_name(once) == once


class TestFileToScreenName:
    @pytest.mark.parametrize(
        ("file_name", "expected"),
        [
            ("UserProfilePage.tsx", "USER_PROFILE"),
            ("src/pages/UserProfilePage.tsx", "USER_PROFILE"),
            ("SettingsScreen.jsx", "SETTINGS"),
            ("OrderView.tsx", "ORDER"),
            ("LoanCalculator.tsx", "LOAN"),
            ("EventCalendar.tsx", "EVENT"),
            ("checkout-flow.tsx", "CHECKOUT_FLOW"),
            ("Dashboard.tsx", "DASHBOARD"),
        ],
    )
    def test_derives_expected_names(self, file_name: str, expected: str) -> None:
        assert file_to_screen_name(file_name) == expected

    def test_suffix_match_is_case_sensitive(self) -> None:
        assert file_to_screen_name("Overview.tsx") == "OVERVIEW"
        assert file_to_screen_name("Loginpage.tsx") == "LOGINPAGE"
        assert file_to_screen_name("PREVIEW") == "PREVIEW"

    @pytest.mark.parametrize(
        "file_name",
        ["ReviewPage.tsx", "Overview.tsx", "PreviewScreen.jsx", "checkout-flow.tsx", "Page.tsx"],
    )
    def test_derived_name_maps_to_itself(self, file_name: str) -> None:
        name = file_to_screen_name(file_name)

        assert file_to_screen_name(name) == name

    def test_bare_suffix_maps_to_home(self) -> None:
        assert file_to_screen_name("Page.tsx") == "HOME"

    def test_windows_separators_are_handled(self) -> None:
        assert file_to_screen_name("src\\screens\\CartScreen.tsx") == "CART"


class TestNormalizeScreenName:
    def test_upper_cases_and_replaces_hyphens(self) -> None:
        assert normalize_screen_name(" user-profile ") == "USER_PROFILE"

    def test_keeps_canonical_names(self) -> None:
        assert normalize_screen_name("CHECKOUT") == "CHECKOUT"


class TestToPascalCase:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("user-profile", "UserProfile"),
            ("user_profile", "UserProfile"),
            ("about", "About"),
            ("", ""),
        ],
    )
    def test_converts(self, value: str, expected: str) -> None:
        assert to_pascal_case(value) == expected
