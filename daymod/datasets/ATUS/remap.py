"""Remapping of the raw activity records of the ATUS.

The raw records contain one row per activity performed by a
respondent, with more information than needed (weights,
demographics, ...).
They are remapped in two steps:

1. :py:func:`remap_original` keeps the year, the serial of the
   respondent, the activity category and the times in seconds
   after midnight.
2. :py:func:`assign_day_ids` replaces (year, serial) by a small day
   id, so that the days can be stored as dense arrays.
"""
from typing import Dict
import warnings

import numpy as np
import pandas as pd

from ...utils.categories import category_for_raw_code, compact_code
from ...utils.errors import UnmappedActivityWarning
from ...utils.error_messages import DROPPED_UNMAPPED_RECORDS
from ...utils.parse_helpers import time_to_secs_after_midnight
from ...utils.sim_types import DayKey

# Names of the columns in the raw data
RAW_COLUMNS: Dict[str, str] = {
    'year': 'YEAR',
    'serial': 'SERIAL',
    'activity': 'ACTIVITY',
    'start': 'START',
    'stop': 'STOP',
}
# Number of unmapped codes shown in the warning
_MAX_CODES_SHOWN = 10


def _category_or_none(code):
    if pd.isna(code):
        return None
    return category_for_raw_code(code)


def remap_original(
    raw: pd.DataFrame, columns: Dict[str, str] = None
) -> pd.DataFrame:
    """Remap the raw records of the survey.

    Records with an activity code that has no category are dropped
    and an :py:class:`UnmappedActivityWarning` counts them.

    Args:
        raw: The raw records.
        columns: Optional names of the raw columns, updating
            :py:data:`RAW_COLUMNS`.

    Returns:
        The remapped records, with columns
        'year', 'serial', 'activity' (compact code), 'start' and
        'stop' (seconds after midnight), in the order of the raw
        records.

    Raises:
        KeyError: If a column is missing.
        MalformedTimestamp: If any start or stop time is invalid,
            nothing is remapped then.
    """
    columns = dict(RAW_COLUMNS, **(columns or {}))
    missing_columns = [
        col for col in columns.values() if col not in raw.columns
    ]
    if missing_columns:
        raise KeyError(
            "Cannot locate columns {}. Columns present: {}".format(
                missing_columns, list(raw.columns)[:20]
            )
        )

    # times are all parsed first, any invalid time aborts the remapping
    starts = raw[columns['start']].map(time_to_secs_after_midnight)
    stops = raw[columns['stop']].map(time_to_secs_after_midnight)

    categories = raw[columns['activity']].map(_category_or_none)
    mask_mapped = categories.notna().to_numpy()

    n_dropped = int(np.sum(~mask_mapped))
    if n_dropped > 0:
        codes = pd.unique(raw[columns['activity']][~mask_mapped])
        warnings.warn(DROPPED_UNMAPPED_RECORDS.format(
            n_dropped=n_dropped, n_records=len(raw),
            codes=np.asarray(codes[:_MAX_CODES_SHOWN]).tolist()
        ), UnmappedActivityWarning)

    return pd.DataFrame({
        'year': raw[columns['year']].to_numpy()[mask_mapped],
        'serial': raw[columns['serial']].to_numpy()[mask_mapped],
        'activity': np.array(
            [compact_code(c) for c in categories[mask_mapped]],
            dtype=np.uint8
        ),
        'start': starts.to_numpy(dtype=np.int64)[mask_mapped],
        'stop': stops.to_numpy(dtype=np.int64)[mask_mapped],
    })


def day_keys(records: pd.DataFrame) -> Dict[DayKey, int]:
    """Map the days of the records to their day id.

    The day ids follow the ordering of :py:class:`DayKey`, so they do
    not depend on the order of the records.

    Args:
        records: Records with columns 'year' and 'serial'.

    Returns:
        Dictionary DayKey -> day id.
    """
    keys = records[['serial', 'year']].drop_duplicates().sort_values(
        ['serial', 'year']
    )
    return {
        DayKey(case_id=int(serial), year=int(year)): day_id
        for day_id, (serial, year) in enumerate(
            keys.itertuples(index=False, name=None)
        )
    }


def assign_day_ids(records: pd.DataFrame) -> pd.DataFrame:
    """Replace the (year, serial) of the records by day ids.

    The ids are consecutive, starting from 0, in the order given by
    :py:func:`day_keys`.

    Args:
        records: Remapped records from :py:func:`remap_original`.

    Returns:
        Records with columns 'day_id', 'start', 'stop' and 'activity',
        in the order of the input records.
    """
    # groups are numbered in sorted order of (serial, year)
    day_ids = records.groupby(['serial', 'year'], sort=True).ngroup()
    return pd.DataFrame({
        'day_id': day_ids.to_numpy(dtype=np.int64),
        'start': records['start'].to_numpy(),
        'stop': records['stop'].to_numpy(),
        'activity': records['activity'].to_numpy(dtype=np.uint8),
    })
