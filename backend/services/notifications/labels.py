"""Human readable titles and descriptions for effective notification levels."""

from __future__ import annotations

from .levels import NotfLevel
from .prefs import EffectivePreference, PageScope

NOTF_LEVEL_TITLES: dict[NotfLevel, str] = {
    NotfLevel.EVERY_POST_ALL_EDITS: "Every Post, All Edits",
    NotfLevel.WATCHING_ALL: "Watching All",
    NotfLevel.TOPIC_PROGRESS: "Topic Progress",
    NotfLevel.TOPIC_SOLVED: "Topic Solved",
    NotfLevel.WATCHING_FIRST: "Watching First",
    NotfLevel.TRACKING: "Tracking",
    NotfLevel.NORMAL: "Normal",
    NotfLevel.HUSHED: "Hushed",
    NotfLevel.MUTED: "Muted",
}

WATCHING_ALL_TOPIC = "You'll be notified of all new replies in this topic."
WATCHING_ALL_SITE = "You'll be notified of all new topics and replies, anywhere in this community."
WATCHING_FIRST_DESCR = "You'll be notified of new topics."
WATCHING_FIRST_SITE = "You'll be notified of new topics, anywhere in this community."

_FIXED_DESCRIPTIONS: dict[NotfLevel, str] = {
    NotfLevel.EVERY_POST_ALL_EDITS: "You'll be notified of every new post, and of edits.",
    NotfLevel.TOPIC_PROGRESS: "You'll be notified about progress posts and status changes.",
    NotfLevel.TOPIC_SOLVED: "You'll be notified if this gets answered or solved.",
    NotfLevel.TRACKING: "Like Normal, and new posts get highlighted in topic lists.",
    NotfLevel.NORMAL: (
        "You'll be notified if someone talks to you, also indirectly, "
        "e.g. a reply to a reply to you."
    ),
    NotfLevel.HUSHED: "You'll be notified only if someone talks directly to you.",
    NotfLevel.MUTED: "No notifications at all.",
}


def notf_pref_title(eff_pref: EffectivePreference) -> str:
    return NOTF_LEVEL_TITLES[eff_pref.level]


def notf_pref_description(eff_pref: EffectivePreference) -> str:
    level = eff_pref.level
    is_page = isinstance(eff_pref.target, PageScope)
    if level == NotfLevel.WATCHING_ALL:
        return WATCHING_ALL_TOPIC if is_page else WATCHING_ALL_SITE
    if level == NotfLevel.WATCHING_FIRST:
        # Only inherited on a page, from a category or the site.
        return WATCHING_FIRST_DESCR if is_page else WATCHING_FIRST_SITE
    return _FIXED_DESCRIPTIONS[level]
