"""Effective notification preference resolution.

Precedence for a page, most specific first:

1. The member's own preference for the page. It is final.
2. Otherwise the first defined of: the groups' page preference, the member's
   own max category preference, the groups' max category preference, the
   member's own site preference, the groups' site preference.
3. Otherwise nothing is inherited and the level defaults to NORMAL.

Group preferences are only ever fallbacks. Everything here is pure; callers
load the rows and build the snapshot.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping

from .prefs import (
    EffectivePreference,
    PageNotfPref,
    PageScope,
    PreconditionViolation,
    Target,
    WholeSiteScope,
)
from .snapshot import MemberAndGroupsPrefs, build_member_and_groups_prefs


def resolve_effective_pref(
    snapshot: MemberAndGroupsPrefs,
    target: Target,
) -> EffectivePreference:
    if isinstance(target, PageScope):
        return _resolve_for_page(snapshot, target)
    if isinstance(target, WholeSiteScope):
        return _resolve_for_site(snapshot, target)
    raise PreconditionViolation(
        f"effective preferences exist for a page or the whole site, not {target!r}"
    )


def _resolve_for_page(
    snapshot: MemberAndGroupsPrefs,
    target: PageScope,
) -> EffectivePreference:
    own_pref = snapshot.own_prefs_by_page_id.get(target.page_id)
    if own_pref is not None:
        return EffectivePreference(target=target, own_level=own_pref.level)

    inherited_pref = _first_defined(
        lambda: snapshot.groups_max_prefs_by_page_id.get(target.page_id),
        snapshot.max_own_category_pref,
        snapshot.max_groups_category_pref,
        lambda: snapshot.own_site_pref,
        lambda: snapshot.groups_max_site_pref,
    )
    return EffectivePreference(target=target, inherited_pref=inherited_pref)


def _resolve_for_site(
    snapshot: MemberAndGroupsPrefs,
    target: WholeSiteScope,
) -> EffectivePreference:
    own_pref = snapshot.own_site_pref
    return EffectivePreference(
        target=target,
        own_level=own_pref.level if own_pref is not None else None,
        inherited_pref=snapshot.groups_max_site_pref,
    )


def _first_defined(
    *candidates: Callable[[], PageNotfPref | None],
) -> PageNotfPref | None:
    for candidate in candidates:
        pref = candidate()
        if pref is not None:
            return pref
    return None


def resolve_effective_prefs_for_pages(
    prefs: Iterable[PageNotfPref],
    *,
    member_id: str,
    group_ids: Collection[str],
    category_id_by_page_id: Mapping[str, int | None],
) -> dict[str, EffectivePreference]:
    """Resolve one member's effective preference for each page of a topic list.

    Each page only sees rows for itself, its own category and the site, so a
    category preference never leaks into pages of other categories.
    """
    all_prefs = list(prefs)
    results: dict[str, EffectivePreference] = {}
    for page_id, category_id in category_id_by_page_id.items():
        applicable = [
            pref
            for pref in all_prefs
            if pref.page_id == page_id
            or (category_id is not None and pref.category_id == category_id)
            or pref.whole_site
        ]
        snapshot = build_member_and_groups_prefs(member_id, applicable, group_ids)
        results[page_id] = resolve_effective_pref(snapshot, PageScope(page_id))
    return results
