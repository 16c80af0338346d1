"""Categories of activities performed during a day.

The time use survey codes activities with 6-digit numbers
(2 digits for the major category, 2 for the second tier and 2 for
the third tier).
Daymod groups them in a small set of :py:class:`ActivityCategory`,
each having a compact code used internally, for example in the
block files.

The compact codes are guaranteed to be:

    1. non negative
    2. consecutive, starting from 0
    3. such that the greatest code is
       :py:attr:`ActivityCategory.MISSING_DATA`

Example::

    category = category_for_raw_code(10101)
    # ActivityCategory.SLEEPING
    compact_code(category)
    # 0

"""
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple


class ActivityCategory(IntEnum):
    """Category of an activity, valued by its compact code."""

    SLEEPING = 0
    PERSONAL_CARE = 1
    HOUSEHOLD_CHORES = 2
    CHILDCARE = 3
    ADULT_CARE = 4
    WORK = 5
    CLASSES = 6
    EXTRACURRICULAR = 7
    HOMEWORK = 8
    OTHER_EDUCATION = 9
    SHOPPING = 10
    SERVICES = 11
    CIVIC_DUTIES = 12
    EATING_DRINKING = 13
    LEISURE = 14
    EXERCISE = 15
    RELIGIOUS_ACTIVITIES = 16
    VOLUNTEERING = 17
    CALLS = 18
    TRAVEL = 19
    MISSING_DATA = 20


# Code of the sentinel category
MAX_CODE = int(ActivityCategory.MISSING_DATA)
# Number of categories, including the sentinel
N_CATEGORIES = MAX_CODE + 1

# Ordered table of (first_code, last_code, category), bounds included.
# The first matching range wins, which matters for 100000 that
# is also inside the services range.
RAW_CODE_RANGES: List[Tuple[int, int, ActivityCategory]] = [
    (10100, 10199, ActivityCategory.SLEEPING),
    (10200, 19999, ActivityCategory.PERSONAL_CARE),
    (100000, 100000, ActivityCategory.PERSONAL_CARE),
    (20000, 29999, ActivityCategory.HOUSEHOLD_CHORES),
    (30000, 30399, ActivityCategory.CHILDCARE),
    (40000, 40399, ActivityCategory.CHILDCARE),
    (30400, 39999, ActivityCategory.ADULT_CARE),
    (40400, 49999, ActivityCategory.ADULT_CARE),
    (50000, 59999, ActivityCategory.WORK),
    (60000, 60199, ActivityCategory.CLASSES),
    (60200, 60299, ActivityCategory.EXTRACURRICULAR),
    (60300, 60399, ActivityCategory.HOMEWORK),
    (60400, 69999, ActivityCategory.OTHER_EDUCATION),
    (70000, 79999, ActivityCategory.SHOPPING),
    (80000, 100199, ActivityCategory.SERVICES),
    (100304, 100304, ActivityCategory.SERVICES),
    (100400, 109999, ActivityCategory.SERVICES),
    (100200, 100299, ActivityCategory.CIVIC_DUTIES),
    (100303, 100303, ActivityCategory.CIVIC_DUTIES),
    (100399, 100399, ActivityCategory.CIVIC_DUTIES),
    (110000, 119999, ActivityCategory.EATING_DRINKING),
    (120000, 129999, ActivityCategory.LEISURE),
    (130200, 130399, ActivityCategory.LEISURE),
    (130000, 130199, ActivityCategory.EXERCISE),
    (130400, 139999, ActivityCategory.EXERCISE),
    (140000, 149999, ActivityCategory.RELIGIOUS_ACTIVITIES),
    (150000, 159999, ActivityCategory.VOLUNTEERING),
    (160000, 169999, ActivityCategory.CALLS),
    (180000, 189999, ActivityCategory.TRAVEL),
    (500000, 509999, ActivityCategory.MISSING_DATA),
]

# Dense lookup, index is the compact code
_CATEGORIES_BY_CODE: Tuple[ActivityCategory, ...] = tuple(
    sorted(ActivityCategory, key=int)
)

_LABELS = {
    ActivityCategory.SLEEPING: 'Sleeping',
    ActivityCategory.PERSONAL_CARE: 'Personal Care',
    ActivityCategory.HOUSEHOLD_CHORES: 'Household Chores',
    ActivityCategory.CHILDCARE: 'Childcare',
    ActivityCategory.ADULT_CARE: 'Adult Care',
    ActivityCategory.WORK: 'Work',
    ActivityCategory.CLASSES: 'Classes',
    ActivityCategory.EXTRACURRICULAR: 'Extracurricular',
    ActivityCategory.HOMEWORK: 'Homework',
    ActivityCategory.OTHER_EDUCATION: 'Other Education',
    ActivityCategory.SHOPPING: 'Shopping',
    ActivityCategory.SERVICES: 'Services',
    ActivityCategory.CIVIC_DUTIES: 'Civic Duties',
    ActivityCategory.EATING_DRINKING: 'Eating and Drinking',
    ActivityCategory.LEISURE: 'Leisure',
    ActivityCategory.EXERCISE: 'Exercise',
    ActivityCategory.RELIGIOUS_ACTIVITIES: 'Religious Activities',
    ActivityCategory.VOLUNTEERING: 'Volunteering',
    ActivityCategory.CALLS: 'Calls',
    ActivityCategory.TRAVEL: 'Travel',
    ActivityCategory.MISSING_DATA: 'Missing Data',
}


def category_for_raw_code(code: int) -> Optional[ActivityCategory]:
    """Find the category of a raw survey activity code.

    Args:
        code: The 6-digit activity code from the survey, as an integer
            (leading zeros are dropped, ex: 010101 -> 10101).

    Returns:
        The matching category, or None if the code is in no known
        range (experimental or deprecated codes) or is not a number.
    """
    try:
        code = int(code)
    except (TypeError, ValueError):
        return None
    for first, last, category in RAW_CODE_RANGES:
        if first <= code <= last:
            return category
    return None


def compact_code(category: ActivityCategory) -> int:
    """Return the compact code used internally for the category."""
    return int(category)


def category_from_compact_code(code: int) -> Optional[ActivityCategory]:
    """Return the category of a compact code, None if out of range."""
    code = int(code)
    if 0 <= code < N_CATEGORIES:
        return _CATEGORIES_BY_CODE[code]
    return None


def display_label(category: ActivityCategory) -> str:
    """Return a human readable name for the category."""
    return _LABELS[category]


def all_categories_excluding_sentinel() -> Iterator[ActivityCategory]:
    """Iterate over the categories that can be selected.

    :py:attr:`ActivityCategory.MISSING_DATA` is excluded.
    Every call starts a new iteration.
    """
    return (category for category in _CATEGORIES_BY_CODE[:MAX_CODE])
