"""SQLModel models package."""

from .category import Category
from .group_membership import GroupMembership
from .member import Member
from .page import Page
from .page_notf_pref import PageNotfPrefRow

__all__ = [
    "Member",
    "GroupMembership",
    "Category",
    "Page",
    "PageNotfPrefRow",
]
