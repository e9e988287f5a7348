"""Tests for effective notification preference resolution."""

import pytest

from services.notifications import (
    CategoryScope,
    NotfLevel,
    PageNotfPref,
    PageScope,
    PreconditionViolation,
    WholeSiteScope,
    build_member_and_groups_prefs,
    resolve_effective_pref,
    resolve_effective_prefs_for_pages,
)

MEMBER = "member-1"
GROUP_A = "group-a"
GROUP_B = "group-b"
GROUP_C = "group-c"
STRANGER = "member-2"
PAGE = PageScope("pg1")


def page_pref(subject_id: str, level: NotfLevel, page_id: str = "pg1") -> PageNotfPref:
    return PageNotfPref(subject_id, level, PageScope(page_id))


def category_pref(subject_id: str, level: NotfLevel, category_id: int = 10) -> PageNotfPref:
    return PageNotfPref(subject_id, level, CategoryScope(category_id))


def site_pref(subject_id: str, level: NotfLevel) -> PageNotfPref:
    return PageNotfPref(subject_id, level, WholeSiteScope())


def resolve(prefs: list[PageNotfPref], group_ids=(GROUP_A, GROUP_B, GROUP_C), target=PAGE):
    snapshot = build_member_and_groups_prefs(MEMBER, prefs, group_ids)
    return resolve_effective_pref(snapshot, target)


def test_no_prefs_defaults_to_normal() -> None:
    eff = resolve([])
    assert eff.own_level is None
    assert eff.inherited_pref is None
    assert eff.level is NotfLevel.NORMAL


def test_own_page_pref_beats_every_inherited_path() -> None:
    eff = resolve(
        [
            page_pref(GROUP_A, NotfLevel.EVERY_POST_ALL_EDITS),
            category_pref(MEMBER, NotfLevel.WATCHING_ALL),
            category_pref(GROUP_B, NotfLevel.WATCHING_ALL),
            site_pref(MEMBER, NotfLevel.WATCHING_ALL),
            site_pref(GROUP_C, NotfLevel.EVERY_POST_ALL_EDITS),
            page_pref(MEMBER, NotfLevel.MUTED),
        ]
    )
    assert eff.own_level is NotfLevel.MUTED
    assert eff.inherited_pref is None
    assert eff.level is NotfLevel.MUTED


def test_group_page_pref_beats_own_category_pref() -> None:
    group_page = page_pref(GROUP_A, NotfLevel.HUSHED)
    eff = resolve([category_pref(MEMBER, NotfLevel.WATCHING_ALL), group_page])
    assert eff.own_level is None
    assert eff.inherited_pref == group_page
    assert eff.level is NotfLevel.HUSHED


def test_group_page_prefs_reduce_to_most_eager() -> None:
    eff = resolve(
        [
            page_pref(GROUP_A, NotfLevel.HUSHED),
            page_pref(GROUP_B, NotfLevel.TRACKING),
            page_pref(GROUP_C, NotfLevel.MUTED),
        ]
    )
    assert eff.inherited_pref == page_pref(GROUP_B, NotfLevel.TRACKING)


def test_own_category_pref_beats_group_category_pref() -> None:
    own = category_pref(MEMBER, NotfLevel.HUSHED)
    eff = resolve([category_pref(GROUP_A, NotfLevel.WATCHING_ALL), own])
    assert eff.inherited_pref == own
    assert eff.level is NotfLevel.HUSHED


def test_own_category_prefs_reduce_to_most_eager_across_categories() -> None:
    eff = resolve(
        [
            category_pref(MEMBER, NotfLevel.HUSHED, category_id=10),
            category_pref(MEMBER, NotfLevel.WATCHING_FIRST, category_id=11),
            category_pref(MEMBER, NotfLevel.NORMAL, category_id=12),
        ]
    )
    assert eff.inherited_pref == category_pref(MEMBER, NotfLevel.WATCHING_FIRST, category_id=11)


def test_group_category_prefs_reduce_to_most_eager() -> None:
    eff = resolve(
        [
            category_pref(GROUP_A, NotfLevel.HUSHED),
            category_pref(GROUP_B, NotfLevel.WATCHING_ALL),
            category_pref(GROUP_C, NotfLevel.NORMAL),
        ]
    )
    assert eff.inherited_pref == category_pref(GROUP_B, NotfLevel.WATCHING_ALL)
    assert eff.level is NotfLevel.WATCHING_ALL


def test_group_category_pref_beats_own_site_pref() -> None:
    eff = resolve(
        [
            site_pref(MEMBER, NotfLevel.TRACKING),
            category_pref(GROUP_A, NotfLevel.NORMAL),
        ]
    )
    assert eff.inherited_pref == category_pref(GROUP_A, NotfLevel.NORMAL)
    assert eff.level is NotfLevel.NORMAL


def test_own_site_pref_beats_group_site_pref() -> None:
    own = site_pref(MEMBER, NotfLevel.HUSHED)
    eff = resolve([site_pref(GROUP_A, NotfLevel.WATCHING_ALL), own])
    assert eff.inherited_pref == own


def test_group_site_pref_is_last_fallback() -> None:
    eff = resolve(
        [
            site_pref(GROUP_A, NotfLevel.TRACKING),
            site_pref(GROUP_B, NotfLevel.WATCHING_ALL),
        ]
    )
    assert eff.inherited_pref == site_pref(GROUP_B, NotfLevel.WATCHING_ALL)
    assert eff.level is NotfLevel.WATCHING_ALL


def test_prefs_of_other_pages_do_not_apply() -> None:
    eff = resolve(
        [
            page_pref(MEMBER, NotfLevel.MUTED, page_id="pg2"),
            page_pref(GROUP_A, NotfLevel.WATCHING_ALL, page_id="pg2"),
        ]
    )
    assert eff.own_level is None
    assert eff.inherited_pref is None


def test_prefs_of_non_groups_are_ignored() -> None:
    eff = resolve(
        [
            page_pref(STRANGER, NotfLevel.WATCHING_ALL),
            category_pref(STRANGER, NotfLevel.WATCHING_ALL),
            site_pref(STRANGER, NotfLevel.WATCHING_ALL),
        ]
    )
    assert eff.inherited_pref is None
    assert eff.level is NotfLevel.NORMAL


def test_without_group_ids_only_own_prefs_count() -> None:
    eff = resolve(
        [site_pref(GROUP_A, NotfLevel.WATCHING_ALL), site_pref(MEMBER, NotfLevel.HUSHED)],
        group_ids=(),
    )
    assert eff.inherited_pref == site_pref(MEMBER, NotfLevel.HUSHED)


def test_equal_levels_resolve_to_that_level() -> None:
    eff = resolve(
        [
            category_pref(GROUP_A, NotfLevel.TRACKING),
            category_pref(GROUP_B, NotfLevel.TRACKING),
        ]
    )
    assert eff.level is NotfLevel.TRACKING
    assert eff.inherited_pref is not None
    assert eff.inherited_pref.subject_id in {GROUP_A, GROUP_B}


def test_site_target_uses_own_site_level() -> None:
    group_site = site_pref(GROUP_A, NotfLevel.WATCHING_ALL)
    eff = resolve(
        [site_pref(MEMBER, NotfLevel.HUSHED), group_site, category_pref(MEMBER, NotfLevel.MUTED)],
        target=WholeSiteScope(),
    )
    assert eff.own_level is NotfLevel.HUSHED
    assert eff.inherited_pref == group_site
    assert eff.level is NotfLevel.HUSHED


def test_site_target_falls_back_to_groups_site_level() -> None:
    eff = resolve(
        [site_pref(GROUP_A, NotfLevel.MUTED), site_pref(GROUP_B, NotfLevel.TRACKING)],
        target=WholeSiteScope(),
    )
    assert eff.own_level is None
    assert eff.level is NotfLevel.TRACKING


@pytest.mark.parametrize("target", [CategoryScope(10), None, "pg1"])
def test_ill_formed_targets_fail_loudly(target) -> None:
    snapshot = build_member_and_groups_prefs(MEMBER, [])
    with pytest.raises(PreconditionViolation):
        resolve_effective_pref(snapshot, target)


def test_snapshot_partitions_own_and_group_prefs() -> None:
    prefs = [
        page_pref(MEMBER, NotfLevel.MUTED),
        category_pref(MEMBER, NotfLevel.HUSHED),
        site_pref(MEMBER, NotfLevel.TRACKING),
        page_pref(GROUP_A, NotfLevel.NORMAL),
        page_pref(GROUP_B, NotfLevel.WATCHING_ALL),
        category_pref(GROUP_A, NotfLevel.TRACKING),
        site_pref(GROUP_B, NotfLevel.HUSHED),
        site_pref(STRANGER, NotfLevel.EVERY_POST_ALL_EDITS),
    ]
    snapshot = build_member_and_groups_prefs(MEMBER, prefs, [GROUP_A, GROUP_B])

    assert dict(snapshot.own_prefs_by_page_id) == {"pg1": page_pref(MEMBER, NotfLevel.MUTED)}
    assert dict(snapshot.own_prefs_by_category_id) == {10: category_pref(MEMBER, NotfLevel.HUSHED)}
    assert snapshot.own_site_pref == site_pref(MEMBER, NotfLevel.TRACKING)
    assert dict(snapshot.groups_max_prefs_by_page_id) == {
        "pg1": page_pref(GROUP_B, NotfLevel.WATCHING_ALL)
    }
    assert dict(snapshot.groups_max_prefs_by_category_id) == {
        10: category_pref(GROUP_A, NotfLevel.TRACKING)
    }
    assert snapshot.groups_max_site_pref == site_pref(GROUP_B, NotfLevel.HUSHED)


def test_member_listed_among_own_groups_counts_as_own() -> None:
    snapshot = build_member_and_groups_prefs(
        MEMBER,
        [site_pref(MEMBER, NotfLevel.HUSHED)],
        [MEMBER, GROUP_A],
    )
    assert snapshot.own_site_pref == site_pref(MEMBER, NotfLevel.HUSHED)
    assert snapshot.groups_max_site_pref is None


def test_bulk_resolution_keeps_category_prefs_in_their_category() -> None:
    prefs = [
        category_pref(MEMBER, NotfLevel.WATCHING_ALL, category_id=10),
        category_pref(GROUP_A, NotfLevel.HUSHED, category_id=20),
        site_pref(MEMBER, NotfLevel.TRACKING),
        page_pref(MEMBER, NotfLevel.MUTED, page_id="pg3"),
    ]
    results = resolve_effective_prefs_for_pages(
        prefs,
        member_id=MEMBER,
        group_ids=[GROUP_A],
        category_id_by_page_id={"pg1": 10, "pg2": 20, "pg3": 10, "pg4": None},
    )

    assert results["pg1"].level is NotfLevel.WATCHING_ALL
    assert results["pg2"].level is NotfLevel.HUSHED
    assert results["pg3"].own_level is NotfLevel.MUTED
    assert results["pg4"].inherited_pref == site_pref(MEMBER, NotfLevel.TRACKING)


def test_bulk_resolution_of_no_pages_is_empty() -> None:
    assert (
        resolve_effective_prefs_for_pages(
            [site_pref(MEMBER, NotfLevel.TRACKING)],
            member_id=MEMBER,
            group_ids=[],
            category_id_by_page_id={},
        )
        == {}
    )
