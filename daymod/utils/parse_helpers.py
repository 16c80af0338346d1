"""Helper functions for parsing Datasets."""
from typing import Iterable

import numpy as np

from .categories import MAX_CODE, N_CATEGORIES
from .errors import MalformedTimestamp
from .error_messages import BLOCKS_PER_DAY_MISMATCH, MALFORMED_TIMESTAMP
from .sim_types import BlockArray, CDFs, PDF, TransitionCounts


def time_to_secs_after_midnight(time_str: str) -> int:
    """Convert a time 'hours:minutes:seconds' to seconds after midnight.

    Args:
        time_str: The time, ex: '04:30:00'.

    Returns:
        The number of seconds after midnight.

    Raises:
        MalformedTimestamp: If the time does not have 3 numeric fields,
            or if one of them is out of range.
    """
    parts = str(time_str).split(':')
    if len(parts) != 3:
        raise MalformedTimestamp(MALFORMED_TIMESTAMP.format(
            timestamp=time_str, reason='must have 3 fields'
        ), timestamp=time_str)
    if not all(part.isascii() and part.isdigit() for part in parts):
        raise MalformedTimestamp(MALFORMED_TIMESTAMP.format(
            timestamp=time_str, reason='fields must be numbers'
        ), timestamp=time_str)

    hours, minutes, seconds = (int(part) for part in parts)
    for value, name, limit in (
        (hours, 'hours', 24), (minutes, 'minutes', 60),
        (seconds, 'seconds', 60)
    ):
        if value >= limit:
            raise MalformedTimestamp(MALFORMED_TIMESTAMP.format(
                timestamp=time_str,
                reason='{} must be between 0 and {}'.format(name, limit - 1)
            ), timestamp=time_str)

    return (hours * 60 + minutes) * 60 + seconds


def blocks_to_transition_counts(
    blocks: Iterable[BlockArray],
    n_states: int = N_CATEGORIES,
    include_end_start_transitions: bool = False,
    blocks_per_day: int = None,
) -> TransitionCounts:
    """Count the transitions between consecutive blocks of the days.

    The counts at index i are the transitions from block i to block
    i + 1, for all the days. There are as many count matrices as
    blocks in a day, so the last one (transition from the last block)
    stays empty, unless :py:obj:`include_end_start_transitions` is
    True.
    Transitions from and to missing data are also counted.

    Args:
        blocks: The blocks of the days, either a 2-D array or any
            iterable (ex: :py:func:`~daymod.utils.block_codec.iter_block_file`)
            of 1-D arrays of the same length.
        n_states: The number of states.
        include_end_start_transitions: Whether to count in the last
            matrix the transition from the last block of a day to the
            first block of the same day.
        blocks_per_day: Optional length of the days. If not given, it
            is the length of the first day, and at least one day is
            required. When streaming a block file that may hold no
            days, pass the length from its header:
            ``blocks_per_day=read_block_header(path)[0]``.

    Returns:
        counts, shape=(blocks_per_day, n_states, n_states),
        counts[i, from, to]

    Raises:
        ValueError: If the days have different lengths, if some codes
            are not valid states or if the length of the days is unknown.
    """
    counts = None
    if blocks_per_day is not None:
        counts = np.zeros(
            (blocks_per_day, n_states, n_states), dtype=np.int64
        )
    for i, day in enumerate(blocks):
        day = np.asarray(day, dtype=np.int64)
        if counts is None:
            # allocate the necessary matrices with the first day
            counts = np.zeros(
                (len(day), n_states, n_states), dtype=np.int64
            )
        n_blocks = len(counts)
        if len(day) != n_blocks:
            raise ValueError(BLOCKS_PER_DAY_MISMATCH.format(
                expected=n_blocks, actual=len(day), day=i
            ))
        if day.size and (day.min() < 0 or day.max() >= n_states):
            raise ValueError(
                'Day {} has codes outside of [0, {}).'.format(i, n_states)
            )
        times = np.arange(n_blocks)
        if include_end_start_transitions:
            np.add.at(counts, (times, day, np.roll(day, -1)), 1)
        else:
            np.add.at(counts, (times[:-1], day[:-1], day[1:]), 1)

    if counts is None:
        raise ValueError(
            'No days were given and blocks_per_day is not specified.'
        )
    return counts


def counts_to_cdf(counts: TransitionCounts) -> CDFs:
    """Transform transition counts to cumulative distribution functions.

    The last dimension of counts is the one that is converted.
    Where there are no counts along the dimension, the cdf is uniform:
    cdf[j] = (j + 1) / n.

    Args:
        counts: Counts, for example from
            :py:func:`blocks_to_transition_counts`.

    Returns:
        The cdfs, same shape as counts.
    """
    counts = np.asarray(counts, dtype=float)
    n = counts.shape[-1]
    totals = counts.sum(axis=-1, keepdims=True)
    mask_no_counts = totals == 0
    # Avoid dividing by 0, these rows are replaced below
    cdfs = np.cumsum(counts, axis=-1) / np.where(mask_no_counts, 1., totals)
    uniform = np.arange(1, n + 1) / n
    cdfs = np.where(mask_no_counts, uniform, cdfs)
    return cdfs


def blocks_to_transition_cdfs(
    blocks: Iterable[BlockArray],
    n_states: int = N_CATEGORIES,
    include_end_start_transitions: bool = False,
    blocks_per_day: int = None,
) -> CDFs:
    """Build the transition cdfs of each block from the days blocks.

    Shortcut for :py:func:`blocks_to_transition_counts` followed by
    :py:func:`counts_to_cdf`.
    """
    return counts_to_cdf(blocks_to_transition_counts(
        blocks, n_states=n_states,
        include_end_start_transitions=include_end_start_transitions,
        blocks_per_day=blocks_per_day,
    ))


def get_initial_pdf(
    blocks: np.ndarray, n_states: int = N_CATEGORIES,
    ignore_missing_data: bool = True,
) -> PDF:
    """Compute the pdf of the states at the first block of the days.

    Args:
        blocks: 2-D array of the blocks of the days.
        n_states: The number of states.
        ignore_missing_data: Whether to exclude the missing data from
            the pdf.

    Returns:
        The pdf. Uniform over the states if there is no count.
    """
    blocks = np.asarray(blocks)
    first_blocks = blocks[:, 0] if len(blocks) else np.array([], dtype=int)
    counts = np.bincount(first_blocks, minlength=n_states)[:n_states]
    counts = counts.astype(float)
    if ignore_missing_data and n_states > MAX_CODE:
        counts[MAX_CODE] = 0.
    if counts.sum() == 0:
        n_valid = (
            MAX_CODE if ignore_missing_data and n_states > MAX_CODE
            else n_states
        )
        counts[:n_valid] = 1.
    return counts / counts.sum()
