"""Support for Typing in daymod."""
from __future__ import annotations
from typing import Dict, List, NamedTuple, Union

import numpy as np

from .categories import ActivityCategory


class DayKey(NamedTuple):
    """Identity of a surveyed day.

    Tuple ordering sorts on the case id first, then on the year.
    """

    case_id: int
    year: int


# One compact activity code per block of a day, dtype=uint8
BlockArray = np.ndarray
# 2-D array of block arrays, row i is the day with id i
BlockArrays = np.ndarray
DayBlocks = Union[BlockArrays, Dict[int, BlockArray]]
# Counts of transitions, shape=(n_blocks, n_states, n_states)
TransitionCounts = np.ndarray
# Probabilities
PDF = np.ndarray
CDF = np.ndarray
CDFs = np.ndarray
# Labels of the states, ordered by compact code
StateLabels = Union[List[str], np.ndarray]
Activities = List[ActivityCategory]
