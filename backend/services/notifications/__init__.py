"""Notification preference domain services."""

from .labels import notf_pref_description, notf_pref_title
from .levels import DEFAULT_NOTF_LEVEL, NotfLevel
from .prefs import (
    CategoryScope,
    ConstraintViolation,
    EffectivePreference,
    PageNotfLevels,
    PageNotfPref,
    PageScope,
    PreconditionViolation,
    Scope,
    WholeSiteScope,
    scope_from_columns,
)
from .prefs_service import (
    load_member_and_groups_broad_prefs,
    load_member_and_groups_prefs_for_page,
    resolve_page_notf_pref,
    resolve_page_notf_prefs_bulk,
    resolve_site_notf_pref,
)
from .resolver import resolve_effective_pref, resolve_effective_prefs_for_pages
from .snapshot import MemberAndGroupsPrefs, build_member_and_groups_prefs
from .store import (
    delete_page_notf_pref,
    load_applicable_page_notf_prefs,
    load_category_and_site_notf_prefs,
    load_notf_prefs_for_pages,
    load_own_page_notf_levels,
    load_page_notf_prefs_for_scope,
    load_page_notf_prefs_for_subjects_at_scope,
    upsert_page_notf_pref,
)

__all__ = [
    "DEFAULT_NOTF_LEVEL",
    "NotfLevel",
    "PageScope",
    "CategoryScope",
    "WholeSiteScope",
    "Scope",
    "PageNotfPref",
    "PageNotfLevels",
    "EffectivePreference",
    "MemberAndGroupsPrefs",
    "ConstraintViolation",
    "PreconditionViolation",
    "scope_from_columns",
    "build_member_and_groups_prefs",
    "resolve_effective_pref",
    "resolve_effective_prefs_for_pages",
    "upsert_page_notf_pref",
    "delete_page_notf_pref",
    "load_page_notf_prefs_for_scope",
    "load_page_notf_prefs_for_subjects_at_scope",
    "load_applicable_page_notf_prefs",
    "load_notf_prefs_for_pages",
    "load_category_and_site_notf_prefs",
    "load_own_page_notf_levels",
    "load_member_and_groups_prefs_for_page",
    "load_member_and_groups_broad_prefs",
    "resolve_page_notf_pref",
    "resolve_site_notf_pref",
    "resolve_page_notf_prefs_bulk",
    "notf_pref_title",
    "notf_pref_description",
]
