"""Notification levels, ordered from quietest to most eager."""

from __future__ import annotations

from enum import IntEnum


class NotfLevel(IntEnum):
    """How much a member wants to hear about some content.

    The integer values are stored in ``page_notf_prefs.notf_level`` and their
    order is what "most eager wins" reductions compare.
    """

    # No notifications for this page.
    MUTED = 1
    # Notified of @mentions and direct replies only.
    HUSHED = 2
    # Notified of @mentions and posts in one's sub threads (incl direct replies).
    NORMAL = 3
    # Like NORMAL, plus the topic gets highlighted in topic lists.
    TRACKING = 4
    # Notified about new topics. Only makes sense for categories and the site.
    WATCHING_FIRST = 5
    # Notified when a question gets an accepted answer, or a problem is solved.
    TOPIC_SOLVED = 6
    # Notified about progress posts and status changes.
    TOPIC_PROGRESS = 7
    # Notified about every new post.
    WATCHING_ALL = 8
    # Like WATCHING_ALL, but also notified of edits.
    EVERY_POST_ALL_EDITS = 9

    @classmethod
    def from_int(cls, value: int) -> NotfLevel | None:
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_NOTF_LEVEL = NotfLevel.NORMAL
