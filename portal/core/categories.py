"""Fixed tool categories.

Categories are compiled into the application rather than stored as rows. Adding
one is a code change plus a schema change to the ``tools.category`` check.
"""

from enum import Enum


class Category(str, Enum):
    KNOWLEDGE = 'KNOWLEDGE'
    LEARNING_SPACE = 'LEARNING_SPACE'
    MY_WORK_SPACE = 'MY_WORK_SPACE'
    COMMUNITY = 'COMMUNITY'
    NEW_FUNDS_AND_TALENTS = 'NEW_FUNDS_AND_TALENTS'

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.KNOWLEDGE: 'Knowledge',
    Category.LEARNING_SPACE: 'Learning Space',
    Category.MY_WORK_SPACE: 'My Work Space',
    Category.COMMUNITY: 'Community',
    Category.NEW_FUNDS_AND_TALENTS: 'New Funds and Talents',
}

CATEGORY_KEYS = tuple(category.value for category in Category)


def parse_category(value: str | None) -> Category | None:
    if value is None:
        return None
    try:
        return Category(value)
    except ValueError:
        return None
