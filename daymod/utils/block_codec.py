"""Reading and writing of the block files (.ablk).

A block file stores the blocks of many days, without compression.
All the integers are little-endian.

=========================  ===================================
bytes                      content
=========================  ===================================
4                          blocks_per_day (unsigned)
8                          day_count (unsigned)
day_count * blocks_per_day one byte per block, the compact code
=========================  ===================================

The day i in the file is the day with day id i.
"""
import os
from typing import Iterator, Mapping, Tuple, Union

import numpy as np

from .categories import MAX_CODE
from .errors import TruncatedFile
from .error_messages import TRUNCATED_BLOCK_FILE
from .sim_types import BlockArray, BlockArrays, DayBlocks

BLOCK_FILE_EXTENSION = '.ablk'
_BLOCKS_PER_DAY_DTYPE = np.dtype('<u4')
_DAY_COUNT_DTYPE = np.dtype('<u8')
HEADER_SIZE = _BLOCKS_PER_DAY_DTYPE.itemsize + _DAY_COUNT_DTYPE.itemsize


def _as_blocks_array(blocks: DayBlocks) -> BlockArrays:
    """Stack the blocks in ascending day id order."""
    if isinstance(blocks, Mapping):
        if len(blocks) == 0:
            raise ValueError('Cannot infer blocks_per_day from no days.')
        blocks = [blocks[day_id] for day_id in sorted(blocks)]
        lengths = {len(day) for day in blocks}
        if len(lengths) != 1:
            raise ValueError(
                'All days must have the same number of blocks, '
                'got lengths {}.'.format(sorted(lengths))
            )
    blocks = np.asarray(blocks)
    if blocks.ndim != 2:
        raise ValueError(
            'blocks must be 2-D (n_days, blocks_per_day), got shape {}.'
            .format(blocks.shape)
        )
    if blocks.size and (blocks.min() < 0 or blocks.max() > MAX_CODE):
        raise ValueError(
            'Block codes must be between 0 and {}.'.format(MAX_CODE)
        )
    return blocks.astype(np.uint8)


def write_block_file(path: str, blocks: DayBlocks) -> None:
    """Write the blocks of the days to a block file.

    Args:
        path: The path of the file to create, overwritten if it exists.
        blocks: 2-D array with the days sorted by day id, or a mapping
            day_id -> block array, that is written in ascending day id.

    Raises:
        ValueError: If the blocks have inconsistent shapes or codes.
        OSError: If the file cannot be created or written.
    """
    blocks = _as_blocks_array(blocks)
    n_days, blocks_per_day = blocks.shape
    with open(path, 'wb') as f:
        f.write(np.array([blocks_per_day], _BLOCKS_PER_DAY_DTYPE).tobytes())
        f.write(np.array([n_days], _DAY_COUNT_DTYPE).tobytes())
        f.write(blocks.tobytes(order='C'))


def _parse_header(path: str, header: bytes) -> Tuple[int, int]:
    if len(header) < HEADER_SIZE:
        raise TruncatedFile(
            TRUNCATED_BLOCK_FILE.format(
                path=path, part='header',
                expected=HEADER_SIZE, actual=len(header)
            ),
            path=path, expected_size=HEADER_SIZE, actual_size=len(header)
        )
    blocks_per_day = np.frombuffer(
        header, dtype=_BLOCKS_PER_DAY_DTYPE, count=1
    )[0]
    day_count = np.frombuffer(
        header, dtype=_DAY_COUNT_DTYPE, count=1,
        offset=_BLOCKS_PER_DAY_DTYPE.itemsize
    )[0]
    return int(blocks_per_day), int(day_count)


def _check_body_size(
    path: str, blocks_per_day: int, day_count: int, file_size: int
) -> None:
    expected = HEADER_SIZE + blocks_per_day * day_count
    if file_size < expected:
        raise TruncatedFile(
            TRUNCATED_BLOCK_FILE.format(
                path=path, part='header and {} days'.format(day_count),
                expected=expected, actual=file_size
            ),
            path=path, expected_size=expected, actual_size=file_size
        )


def read_block_header(path: str) -> Tuple[int, int]:
    """Read the header of a block file.

    Returns:
        blocks_per_day, day_count

    Raises:
        TruncatedFile: If the file is too short to contain a header.
    """
    with open(path, 'rb') as f:
        return _parse_header(path, f.read(HEADER_SIZE))


def read_block_file(path: str) -> BlockArrays:
    """Read all the days of a block file.

    Bytes after the last declared day are ignored.

    Returns:
        The blocks, shape=(day_count, blocks_per_day), dtype=uint8.

    Raises:
        TruncatedFile: If the file is shorter than declared.
        OSError: If the file cannot be read.
    """
    with open(path, 'rb') as f:
        blocks_per_day, day_count = _parse_header(path, f.read(HEADER_SIZE))
        _check_body_size(
            path, blocks_per_day, day_count, os.fstat(f.fileno()).st_size
        )
        body = f.read(blocks_per_day * day_count)
    # the file could have shrunk since fstat
    _check_body_size(
        path, blocks_per_day, day_count, HEADER_SIZE + len(body)
    )
    return np.frombuffer(body, dtype=np.uint8).reshape(
        day_count, blocks_per_day
    ).copy()


def iter_block_file(path: str) -> Iterator[BlockArray]:
    """Iterate over the days of a block file without loading all of them.

    The size of the file is checked before the first day is yielded.

    Yields:
        The blocks of each day, in day id order.
    """
    with open(path, 'rb') as f:
        blocks_per_day, day_count = _parse_header(path, f.read(HEADER_SIZE))
        _check_body_size(
            path, blocks_per_day, day_count, os.fstat(f.fileno()).st_size
        )
        for i in range(day_count):
            day = f.read(blocks_per_day)
            if len(day) < blocks_per_day:
                _check_body_size(
                    path, blocks_per_day, day_count,
                    HEADER_SIZE + i * blocks_per_day + len(day)
                )
            yield np.frombuffer(day, dtype=np.uint8).copy()
