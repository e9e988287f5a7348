"""Business logic services."""

from .memberships import (
    MembershipNotFound,
    add_group_member,
    load_group_ids_for_member,
    remove_group_member,
)

__all__ = [
    "MembershipNotFound",
    "add_group_member",
    "load_group_ids_for_member",
    "remove_group_member",
]
