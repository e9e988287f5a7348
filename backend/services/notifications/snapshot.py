"""Per-member snapshot of own and group notification preferences."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .prefs import CategoryScope, PageNotfPref, PageScope, WholeSiteScope, more_eager, most_eager


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class MemberAndGroupsPrefs:
    """A member's own preferences plus, per scope key, the most eager group preference."""

    member_id: str
    own_prefs_by_page_id: Mapping[str, PageNotfPref] = field(default_factory=dict)
    own_prefs_by_category_id: Mapping[int, PageNotfPref] = field(default_factory=dict)
    own_site_pref: PageNotfPref | None = None
    groups_max_prefs_by_page_id: Mapping[str, PageNotfPref] = field(default_factory=dict)
    groups_max_prefs_by_category_id: Mapping[int, PageNotfPref] = field(default_factory=dict)
    groups_max_site_pref: PageNotfPref | None = None

    def max_own_category_pref(self) -> PageNotfPref | None:
        return most_eager(self.own_prefs_by_category_id.values())

    def max_groups_category_pref(self) -> PageNotfPref | None:
        return most_eager(self.groups_max_prefs_by_category_id.values())


def build_member_and_groups_prefs(
    member_id: str,
    prefs: Iterable[PageNotfPref],
    group_ids: Collection[str] = (),
) -> MemberAndGroupsPrefs:
    """Partition loaded rows into the member's own and their groups' maxima.

    Rows whose subject is neither the member nor one of ``group_ids`` are
    ignored, so callers may pass the result of a broad loader.
    """
    group_id_set = frozenset(group_ids) - {member_id}

    own_by_page: dict[str, PageNotfPref] = {}
    own_by_category: dict[int, PageNotfPref] = {}
    own_site: PageNotfPref | None = None
    groups_by_page: dict[str, PageNotfPref] = {}
    groups_by_category: dict[int, PageNotfPref] = {}
    groups_site: PageNotfPref | None = None

    for pref in prefs:
        scope = pref.scope
        if pref.subject_id == member_id:
            # The store keeps one row per (subject, scope key); first one wins otherwise.
            if isinstance(scope, PageScope):
                own_by_page.setdefault(scope.page_id, pref)
            elif isinstance(scope, CategoryScope):
                own_by_category.setdefault(scope.category_id, pref)
            elif isinstance(scope, WholeSiteScope) and own_site is None:
                own_site = pref
        elif pref.subject_id in group_id_set:
            if isinstance(scope, PageScope):
                current = groups_by_page.get(scope.page_id)
                groups_by_page[scope.page_id] = (
                    pref if current is None else more_eager(current, pref)
                )
            elif isinstance(scope, CategoryScope):
                current = groups_by_category.get(scope.category_id)
                groups_by_category[scope.category_id] = (
                    pref if current is None else more_eager(current, pref)
                )
            elif isinstance(scope, WholeSiteScope):
                groups_site = pref if groups_site is None else more_eager(groups_site, pref)

    return MemberAndGroupsPrefs(
        member_id=member_id,
        own_prefs_by_page_id=_frozen(own_by_page),
        own_prefs_by_category_id=_frozen(own_by_category),
        own_site_pref=own_site,
        groups_max_prefs_by_page_id=_frozen(groups_by_page),
        groups_max_prefs_by_category_id=_frozen(groups_by_category),
        groups_max_site_pref=groups_site,
    )
