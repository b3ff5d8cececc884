from typing import TYPE_CHECKING

from poli_qa.state import TestChecklist, TestStatus, checklist_fingerprint, merge_checklists

if TYPE_CHECKING:
    from tests.conftest import MakeItemFunc


class TestChecklistFingerprint:
    def test_sorted_ids(self, sample_checklists: tuple[TestChecklist, ...]) -> None:
        assert checklist_fingerprint(sample_checklists) == (
            "home_001,home_002,settings_001,settings_002,settings_003"
        )

    def test_order_and_descriptions_do_not_matter(self, make_item: "MakeItemFunc") -> None:
        first = [TestChecklist("A", (make_item("a_1", "A"), make_item("a_2", "A")))]
        second = [
            TestChecklist(
                "A", (make_item("a_2", "A", description="x"), make_item("a_1", "A"))
            )
        ]

        assert checklist_fingerprint(first) == checklist_fingerprint(second)

    def test_empty(self) -> None:
        assert checklist_fingerprint([]) == ""


class TestMergeChecklists:
    def test_carries_history_forward(self, make_item: "MakeItemFunc") -> None:
        persisted = [
            TestChecklist(
                "HOME",
                (
                    make_item("home_001", status=TestStatus.PASSED, tested_at=10),
                    make_item("home_002", status=TestStatus.FAILED, notes="bad"),
                ),
            )
        ]
        supplied = [
            TestChecklist(
                "HOME",
                (
                    make_item("home_002", description="New wording"),
                    make_item("home_003"),
                ),
            )
        ]

        merged = merge_checklists(persisted, supplied)

        items = merged[0].items
        assert [i.id for i in items] == ["home_002", "home_003"]
        assert items[0].status == TestStatus.FAILED
        assert items[0].notes == "bad"
        assert items[0].description == "New wording"
        assert items[1].status == TestStatus.NOT_STARTED

    def test_notes_alone_count_as_history(self, make_item: "MakeItemFunc") -> None:
        persisted = [TestChecklist("HOME", (make_item("home_001", notes="check later"),))]
        supplied = [TestChecklist("HOME", (make_item("home_001"),))]

        merged = merge_checklists(persisted, supplied)

        assert merged[0].items[0].notes == "check later"

    def test_item_may_move_between_screens(self, make_item: "MakeItemFunc") -> None:
        persisted = [TestChecklist("OLD", (make_item("x_001", "OLD", status=TestStatus.SKIPPED),))]
        supplied = [TestChecklist("NEW", (make_item("x_001", "NEW"),))]

        merged = merge_checklists(persisted, supplied)

        assert merged[0].screen == "NEW"
        assert merged[0].items[0].screen == "NEW"
        assert merged[0].items[0].status == TestStatus.SKIPPED

    def test_supplied_order_wins(self, sample_checklists: tuple[TestChecklist, ...]) -> None:
        reversed_checklists = tuple(reversed(sample_checklists))

        merged = merge_checklists(sample_checklists, reversed_checklists)

        assert merged == reversed_checklists
