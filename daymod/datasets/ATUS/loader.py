"""Data loader for the American Time Use Survey (ATUS).

The raw data is an extract of the activity file of the ATUS, for
example from `IPUMS <https://www.atusdata.org/>`_, with one row per
activity and at least the columns 'YEAR', 'SERIAL', 'ACTIVITY',
'START' and 'STOP'.

The loader chains the parsing steps, and stores the result of each
step in the parsed_data folder::

    raw_data/timedata.csv
    -> parsed_data/timedata_remap.csv        (load_remapped_records)
    -> parsed_data/timedata_remap_dayid.csv  (load_day_records)
    -> parsed_data/15blocks.ablk             (load_blocks)
    -> parsed_data/15blocks_cdfs.npz         (load_transition_cdfs)

"""
import json
import os
from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from ..base_loader import DatasetLoader
from .remap import RAW_COLUMNS, assign_day_ids, day_keys, remap_original
from ...utils.block_codec import (
    BLOCK_FILE_EXTENSION, read_block_file, write_block_file
)
from ...utils.blocks import check_block_duration, records_to_blocks
from ...utils.categories import ActivityCategory, display_label
from ...utils.parse_helpers import (
    blocks_to_transition_cdfs, get_initial_pdf
)
from ...utils.sim_types import BlockArrays, CDFs, DayKey, PDF, StateLabels


class ATUS(DatasetLoader):
    """American Time Use Survey loader.

    Loads the days of the survey as blocks of activities, and the
    probabilities of transition between the activities of consecutive
    blocks.

    Attributes:
        block_duration: The duration of the blocks in minutes.
        blocks_per_day: The number of blocks in a day.
        raw_file_name: The name of the file in raw_data, .csv or .xlsx.
        columns: The names of the raw columns, see
            :py:data:`~daymod.datasets.ATUS.remap.RAW_COLUMNS`.
    """

    DATASET_NAME = 'ATUS'
    download_website = 'https://www.atusdata.org/'
    columns: Dict[str, str] = dict(RAW_COLUMNS)
    remapped_file_name = 'timedata_remap.csv'
    day_records_file_name = 'timedata_remap_dayid.csv'
    day_keys_file_name = 'timedata_day_keys.json'

    def __init__(
        self, block_duration: int = 15, raw_file_name: str = 'timedata.csv',
        **kwargs
    ) -> Any:
        """Create a loader for the ATUS.

        Args:
            block_duration: The duration of the blocks in minutes, must
                divide 1440.
            raw_file_name: The name of the raw file.
            **kwargs: see :py:class:`DatasetLoader`

        Raises:
            ConfigurationError: If the block duration is invalid. No
                file is accessed in that case.
        """
        self.blocks_per_day = check_block_duration(block_duration)
        self.block_duration = block_duration
        self.raw_file_name = raw_file_name
        super().__init__(**kwargs)

        self.blocks_file_name = '{}blocks'.format(block_duration)

    def _read_raw(self) -> pd.DataFrame:
        file_path = self._raw_file(self.raw_file_name)
        if not os.path.isfile(file_path):
            self._raise_missing_raw(
                self.raw_file_name,
                optional_download_website=self.download_website
            )
        if file_path.endswith(('.xlsx', '.xls')):
            return pd.read_excel(file_path)
        return pd.read_csv(file_path, low_memory=False)

    def load_remapped_records(self) -> pd.DataFrame:
        """Load the records remapped to the activity categories.

        Returns:
            DataFrame with columns 'year', 'serial', 'activity',
            'start' and 'stop'.
        """
        file_path = self._parsed_file(self.remapped_file_name)
        try:
            records = pd.read_csv(file_path)
        except FileNotFoundError as err:
            self._warn_could_not_load_parsed(err, self.remapped_file_name)
            records = self._parse_remapped_records()
            self._check_make_parsed_dir()
            records.to_csv(file_path, index=False)
        return records

    def _parse_remapped_records(self) -> pd.DataFrame:
        return remap_original(self._read_raw(), columns=self.columns)

    def load_day_records(self) -> pd.DataFrame:
        """Load the records with their day id.

        Returns:
            DataFrame with columns 'day_id', 'start', 'stop' and
            'activity'.
        """
        file_path = self._parsed_file(self.day_records_file_name)
        try:
            day_records = pd.read_csv(file_path)
        except FileNotFoundError as err:
            self._warn_could_not_load_parsed(err, self.day_records_file_name)
            day_records, keys = self._parse_day_records()
            self._check_make_parsed_dir()
            day_records.to_csv(file_path, index=False)
            self._save_day_keys(keys)
        return day_records

    def _parse_day_records(self) -> Tuple[pd.DataFrame, Dict[DayKey, int]]:
        records = self.load_remapped_records()
        return assign_day_ids(records), day_keys(records)

    def _save_day_keys(self, keys: Dict[DayKey, int]):
        """Save a legend of the day ids."""
        self._check_make_parsed_dir()
        with open(self._parsed_file(self.day_keys_file_name), 'w') as fp:
            json.dump([
                {'day_id': day_id, 'case_id': key.case_id, 'year': key.year}
                for key, day_id in keys.items()
            ], fp, indent=4)

    def load_day_keys(self) -> Dict[DayKey, int]:
        """Load the mapping from the surveyed days to their day id."""
        file_path = self._parsed_file(self.day_keys_file_name)
        try:
            with open(file_path, 'r') as fp:
                legend = json.load(fp)
        except FileNotFoundError as err:
            self._warn_could_not_load_parsed(err, self.day_keys_file_name)
            keys = day_keys(self.load_remapped_records())
            self._save_day_keys(keys)
            return keys
        return {
            DayKey(case_id=item['case_id'], year=item['year']):
                item['day_id']
            for item in legend
        }

    def load_blocks(self) -> BlockArrays:
        """Load the blocks of all the days.

        Returns:
            2-D array, shape=(n_days, blocks_per_day), row i is the
            day with day id i.
        """
        file_name = self.blocks_file_name + BLOCK_FILE_EXTENSION
        file_path = self._parsed_file(file_name)
        try:
            blocks = read_block_file(file_path)
        except FileNotFoundError as err:
            self._warn_could_not_load_parsed(err, file_name)
            blocks = self._parse_blocks()
            self._check_make_parsed_dir()
            write_block_file(file_path, blocks)

        if blocks.shape[1] != self.blocks_per_day:
            raise ValueError(
                "Block file '{}' has {} blocks per day, expected {}.".format(
                    file_path, blocks.shape[1], self.blocks_per_day
                )
            )
        return blocks

    def _parse_blocks(self) -> BlockArrays:
        return records_to_blocks(self.block_duration, self.load_day_records())

    def load_transition_cdfs(
        self, include_end_start_transitions: bool = False
    ) -> Tuple[CDFs, StateLabels, PDF]:
        """Load the transition cdfs between the blocks.

        Args:
            include_end_start_transitions: Whether the last cdfs should
                use the transitions from the end to the start of the
                days. Otherwise they are uniform.

        Returns:
            the cdfs (shape=(blocks_per_day, n_states, n_states)),
            the labels of the states and the pdf of the first block.
        """
        file_name = '{}_cdfs{}'.format(
            self.blocks_file_name,
            '_end_start' if include_end_start_transitions else ''
        )
        try:
            cdfs, labels, initial_pdf = self._load_parsed_arrays(
                file_name, ('cdfs', 'labels', 'initial_pdf')
            )
        except FileNotFoundError as err:
            self._warn_could_not_load_parsed(err, file_name)
            cdfs, labels, initial_pdf = self._parse_transition_cdfs(
                include_end_start_transitions
            )
            self._save_parsed_arrays(
                file_name, cdfs=cdfs, labels=labels, initial_pdf=initial_pdf
            )

        return cdfs, labels, initial_pdf

    def _parse_transition_cdfs(
        self, include_end_start_transitions: bool
    ) -> Tuple[CDFs, StateLabels, PDF]:
        blocks = self.load_blocks()
        cdfs = blocks_to_transition_cdfs(
            blocks,
            include_end_start_transitions=include_end_start_transitions,
            blocks_per_day=self.blocks_per_day,
        )
        labels = np.array([display_label(c) for c in ActivityCategory])
        return cdfs, labels, get_initial_pdf(blocks)
