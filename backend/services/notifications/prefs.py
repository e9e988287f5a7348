"""Notification preference value types.

A preference applies to exactly one scope: a single page, every page in a
category, or every page on the site. The scope is a tagged union, so a record
cannot carry more than one scope at a time; the flat column shape used by the
database and the API goes through :meth:`PageNotfPref.from_columns`, which is
where the "exactly one of three" rule is checked.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from .levels import DEFAULT_NOTF_LEVEL, NotfLevel


class ConstraintViolation(ValueError):
    """A preference that can never be stored: bad scope or bad level for it."""


class PreconditionViolation(RuntimeError):
    """A caller asked for something that is a programming error, e.g. a bad target."""


@dataclass(frozen=True, slots=True)
class PageScope:
    page_id: str


@dataclass(frozen=True, slots=True)
class CategoryScope:
    category_id: int


@dataclass(frozen=True, slots=True)
class WholeSiteScope:
    pass


Scope = Union[PageScope, CategoryScope, WholeSiteScope]
SCOPE_TYPES = (PageScope, CategoryScope, WholeSiteScope)


@dataclass(frozen=True, slots=True)
class PageNotfPref:
    """One subject's (member or group) explicit level for one scope."""

    subject_id: str
    level: NotfLevel
    scope: Scope

    def __post_init__(self) -> None:
        if not isinstance(self.scope, SCOPE_TYPES):
            raise ConstraintViolation(
                f"scope must be a page, category or whole-site scope, got {self.scope!r}"
            )
        if not isinstance(self.level, NotfLevel):
            raise ConstraintViolation(f"level must be a NotfLevel, got {self.level!r}")
        if isinstance(self.scope, PageScope) and self.level == NotfLevel.WATCHING_FIRST:
            raise ConstraintViolation(
                "WATCHING_FIRST is about new topics and cannot be set on a single page"
            )

    @classmethod
    def from_columns(
        cls,
        subject_id: str,
        level: NotfLevel,
        *,
        page_id: str | None = None,
        category_id: int | None = None,
        whole_site: bool = False,
    ) -> PageNotfPref:
        return cls(
            subject_id=subject_id,
            level=level,
            scope=scope_from_columns(
                page_id=page_id,
                category_id=category_id,
                whole_site=whole_site,
            ),
        )

    @property
    def page_id(self) -> str | None:
        return self.scope.page_id if isinstance(self.scope, PageScope) else None

    @property
    def category_id(self) -> int | None:
        return self.scope.category_id if isinstance(self.scope, CategoryScope) else None

    @property
    def whole_site(self) -> bool:
        return isinstance(self.scope, WholeSiteScope)


def scope_from_columns(
    *,
    page_id: str | None = None,
    category_id: int | None = None,
    whole_site: bool = False,
) -> Scope:
    """Build a scope from the three mutually exclusive optional columns."""
    num_set = int(page_id is not None) + int(category_id is not None) + int(bool(whole_site))
    if num_set != 1:
        raise ConstraintViolation(
            "exactly one of page_id, category_id and whole_site must be set, "
            f"got {num_set}"
        )
    if page_id is not None:
        return PageScope(page_id)
    if category_id is not None:
        return CategoryScope(category_id)
    return WholeSiteScope()


def more_eager(first: PageNotfPref, second: PageNotfPref) -> PageNotfPref:
    """Return the preference with the higher level; the first one on ties."""
    return second if second.level > first.level else first


def most_eager(prefs: Iterable[PageNotfPref]) -> PageNotfPref | None:
    result: PageNotfPref | None = None
    for pref in prefs:
        result = pref if result is None else more_eager(result, pref)
    return result


@dataclass(frozen=True, slots=True)
class PageNotfLevels:
    """A member's own levels that could apply to one page."""

    for_page: NotfLevel | None = None
    for_category: NotfLevel | None = None
    for_whole_site: NotfLevel | None = None

    @property
    def effective_level(self) -> NotfLevel | None:
        # The most specific level overrides the less specific ones.
        if self.for_page is not None:
            return self.for_page
        if self.for_category is not None:
            return self.for_category
        return self.for_whole_site


Target = Union[PageScope, WholeSiteScope]


@dataclass(frozen=True, slots=True)
class EffectivePreference:
    """The level that governs notifications for a member on a page or the site.

    ``own_level`` is the member's explicit choice for exactly this target;
    ``inherited_pref`` is the fallback from a broader scope or from a group.
    """

    target: Target
    own_level: NotfLevel | None = None
    inherited_pref: PageNotfPref | None = None

    @property
    def level(self) -> NotfLevel:
        if self.own_level is not None:
            return self.own_level
        if self.inherited_pref is not None:
            return self.inherited_pref.level
        return DEFAULT_NOTF_LEVEL

    @property
    def is_inherited(self) -> bool:
        return self.own_level is None and self.inherited_pref is not None
