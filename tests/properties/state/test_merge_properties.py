from dataclasses import replace

from hypothesis import given, strategies as st

from poli_qa.state import (
    TestCategory,
    TestChecklist,
    TestItem,
    TestStatus,
    checklist_fingerprint,
    merge_checklists,
)

item_ids = st.lists(
    st.from_regex(r"[a-z]{1,6}_[0-9]{3}", fullmatch=True), unique=True, max_size=8
)


def _checklists(
    ids: list[str], status: TestStatus = TestStatus.NOT_STARTED
) -> tuple[TestChecklist, ...]:
    items = tuple(
        TestItem(
            id=item_id,
            screen="HOME",
            category=TestCategory.UI,
            description=f"Check {item_id}",
            status=status,
            tested_at=None if status is TestStatus.NOT_STARTED else 1,
        )
        for item_id in ids
    )
    return (TestChecklist(screen="HOME", items=items),)


@given(ids=item_ids)
def test_merging_a_document_with_itself_is_identity(ids: list[str]) -> None:
    checklists = _checklists(ids)

    assert merge_checklists(checklists, checklists) == checklists


@given(ids=item_ids, data=st.data())
def test_fingerprint_ignores_item_order(ids: list[str], data: st.DataObject) -> None:
    shuffled = data.draw(st.permutations(ids))

    assert checklist_fingerprint(_checklists(ids)) == checklist_fingerprint(
        _checklists(list(shuffled))
    )


@given(persisted_ids=item_ids, supplied_ids=item_ids)
def test_supplied_document_defines_items(
    persisted_ids: list[str], supplied_ids: list[str]
) -> None:
    persisted = _checklists(persisted_ids, TestStatus.PASSED)
    supplied = _checklists(supplied_ids)

    merged = merge_checklists(persisted, supplied)

    merged_items = merged[0].items
    assert [item.id for item in merged_items] == supplied_ids
    for item in merged_items:
        carried = item.id in persisted_ids
        assert item.status is (TestStatus.PASSED if carried else TestStatus.NOT_STARTED)


@given(ids=item_ids)
def test_descriptions_come_from_supplied_document(ids: list[str]) -> None:
    persisted = _checklists(ids, TestStatus.FAILED)
    supplied = tuple(
        replace(c, items=tuple(replace(i, description="Renamed") for i in c.items))
        for c in _checklists(ids)
    )

    merged = merge_checklists(persisted, supplied)

    assert all(item.description == "Renamed" for item in merged[0].items)
    assert all(item.status is TestStatus.FAILED for item in merged[0].items)
