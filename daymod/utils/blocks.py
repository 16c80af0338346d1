"""Discretization of the days in blocks of time.

A day is split in blocks of :py:obj:`block_duration` minutes.
Each block gets the category in which the most time was spent during
the block.

For a block spanning the seconds [block_start, block_end), the time
spent in a record is

* ``clip(stop) - clip(start)`` if the record starts before it stops,
* ``block_end - clip(start)`` otherwise, as the record goes past
  midnight. The stop time is then not used.

where ``clip`` bounds a time between block_start and block_end.
Records of missing data are never counted, and a block where no time
is spent in any category is missing data.
"""
from typing import Dict, Union

import numpy as np
import pandas as pd

from .categories import MAX_CODE
from .errors import ConfigurationError
from .error_messages import INVALID_BLOCK_DURATION
from .sim_types import BlockArray, BlockArrays

MINUTES_PER_DAY = 24 * 60


def check_block_duration(block_duration: int) -> int:
    """Check the duration of the blocks and return the blocks per day.

    Args:
        block_duration: The duration of a block in minutes.

    Returns:
        The number of blocks in a day.

    Raises:
        ConfigurationError: If the duration is not a positive integer
            dividing 1440.
    """
    if (
        isinstance(block_duration, (bool, np.bool_))
        or not isinstance(block_duration, (int, np.integer))
        or block_duration <= 0
        or MINUTES_PER_DAY % block_duration != 0
    ):
        raise ConfigurationError(INVALID_BLOCK_DURATION.format(
            block_duration=block_duration
        ))
    return MINUTES_PER_DAY // int(block_duration)


def get_block_seconds(
    block_duration: int,
    starts: np.ndarray,
    stops: np.ndarray,
    activities: np.ndarray,
) -> np.ndarray:
    """Compute the seconds spent in each category, for all the blocks.

    Args:
        block_duration: The duration of a block in minutes.
        starts: Start of the records, in seconds after midnight.
        stops: Stop of the records, in seconds after midnight.
        activities: Compact codes of the records.

    Returns:
        seconds, shape=(blocks_per_day, MAX_CODE). Missing data has no
        column as it is never counted.
    """
    n_blocks = check_block_duration(block_duration)
    starts = np.asarray(starts, dtype=np.int64)
    stops = np.asarray(stops, dtype=np.int64)
    activities = np.asarray(activities, dtype=np.int64)

    block_starts = np.arange(n_blocks, dtype=np.int64) * block_duration * 60
    block_ends = block_starts + block_duration * 60
    # shape=(n_blocks, n_records)
    clipped_starts = np.clip(
        starts[None, :], block_starts[:, None], block_ends[:, None]
    )
    clipped_stops = np.clip(
        stops[None, :], block_starts[:, None], block_ends[:, None]
    )
    overlaps = np.where(
        (starts < stops)[None, :],
        clipped_stops - clipped_starts,
        # the activity goes past midnight
        block_ends[:, None] - clipped_starts,
    )

    # ignore missing data
    mask_valid = activities != MAX_CODE
    # one-hot of the codes, shape=(n_records, MAX_CODE)
    codes_one_hot = (
        activities[mask_valid][:, None] == np.arange(MAX_CODE)[None, :]
    ).astype(np.int64)
    return overlaps[:, mask_valid] @ codes_one_hot


def get_day_blocks(
    block_duration: int,
    starts: np.ndarray,
    stops: np.ndarray,
    activities: np.ndarray,
) -> BlockArray:
    """Get the blocks of a day from its records.

    Ties between categories are won by the lowest code.

    Returns:
        The compact code of each block, dtype=uint8.
    """
    seconds = get_block_seconds(block_duration, starts, stops, activities)
    # argmax returns the first max, so the lowest code on ties
    blocks = np.argmax(seconds, axis=1).astype(np.uint8)
    blocks[seconds.max(axis=1) <= 0] = MAX_CODE
    return blocks


def records_to_blocks(
    block_duration: int,
    day_records: pd.DataFrame,
    return_dict: bool = False,
) -> Union[BlockArrays, Dict[int, BlockArray]]:
    """Convert the records of the days to blocks.

    Args:
        block_duration: The duration of a block in minutes.
        day_records: Records with columns 'day_id', 'start', 'stop'
            and 'activity'.
        return_dict: Whether to return a dictionary day_id -> blocks
            instead of a 2-D array.

    Returns:
        2-D array where row i are the blocks of the i-th smallest day id
        (the day id itself when the day ids are dense), or the dict.
    """
    n_blocks = check_block_duration(block_duration)
    blocks = {}
    for day_id, records in day_records.groupby('day_id', sort=True):
        blocks[int(day_id)] = get_day_blocks(
            block_duration,
            records['start'].to_numpy(),
            records['stop'].to_numpy(),
            records['activity'].to_numpy(),
        )

    if return_dict:
        return blocks
    if not blocks:
        return np.zeros((0, n_blocks), dtype=np.uint8)
    return np.stack([blocks[day_id] for day_id in sorted(blocks)])
