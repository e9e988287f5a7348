"""Notification preference API payload schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from models.page import MAX_PAGE_ID_LENGTH

from .labels import notf_pref_description, notf_pref_title
from .levels import NotfLevel
from .prefs import EffectivePreference, PageNotfLevels, PageNotfPref, PageScope

NotfLevelValue = Annotated[
    int,
    Field(ge=int(NotfLevel.MUTED), le=int(NotfLevel.EVERY_POST_ALL_EDITS)),
]
PageId = Annotated[
    str,
    Field(min_length=1, max_length=MAX_PAGE_ID_LENGTH),
]


class NotfPrefUpsertRequest(BaseModel):
    notf_level: NotfLevelValue
    page_id: PageId | None = None
    pages_in_category_id: int | None = None
    whole_site: bool = False


class NotfPrefResponse(BaseModel):
    subject_id: str
    notf_level: int
    notf_level_name: str
    page_id: str | None
    pages_in_category_id: int | None
    whole_site: bool

    @classmethod
    def from_pref(cls, pref: PageNotfPref) -> NotfPrefResponse:
        return cls(
            subject_id=pref.subject_id,
            notf_level=int(pref.level),
            notf_level_name=pref.level.name,
            page_id=pref.page_id,
            pages_in_category_id=pref.category_id,
            whole_site=pref.whole_site,
        )


class NotfPrefListResponse(BaseModel):
    prefs: list[NotfPrefResponse]


class DeleteNotfPrefResponse(BaseModel):
    deleted: bool


class EffectiveNotfPrefResponse(BaseModel):
    page_id: str | None
    whole_site: bool
    own_notf_level: int | None
    inherited_pref: NotfPrefResponse | None
    notf_level: int
    notf_level_name: str
    is_inherited: bool
    title: str
    description: str

    @classmethod
    def from_effective(cls, eff_pref: EffectivePreference) -> EffectiveNotfPrefResponse:
        target = eff_pref.target
        inherited = eff_pref.inherited_pref
        return cls(
            page_id=target.page_id if isinstance(target, PageScope) else None,
            whole_site=not isinstance(target, PageScope),
            own_notf_level=int(eff_pref.own_level) if eff_pref.own_level is not None else None,
            inherited_pref=NotfPrefResponse.from_pref(inherited) if inherited is not None else None,
            notf_level=int(eff_pref.level),
            notf_level_name=eff_pref.level.name,
            is_inherited=eff_pref.is_inherited,
            title=notf_pref_title(eff_pref),
            description=notf_pref_description(eff_pref),
        )


class EffectiveNotfPrefListResponse(BaseModel):
    prefs: list[EffectiveNotfPrefResponse]


class OwnNotfLevelsResponse(BaseModel):
    page_id: str
    for_page: int | None
    for_category: int | None
    for_whole_site: int | None
    effective_notf_level: int | None

    @classmethod
    def from_levels(cls, page_id: str, levels: PageNotfLevels) -> OwnNotfLevelsResponse:
        def _as_int(level: NotfLevel | None) -> int | None:
            return int(level) if level is not None else None

        return cls(
            page_id=page_id,
            for_page=_as_int(levels.for_page),
            for_category=_as_int(levels.for_category),
            for_whole_site=_as_int(levels.for_whole_site),
            effective_notf_level=_as_int(levels.effective_level),
        )


class GroupMembershipResponse(BaseModel):
    detail: str
    is_member: bool
