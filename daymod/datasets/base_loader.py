"""Module implementing base classes for loading datasets."""
from __future__ import annotations
import inspect
import os
import shutil
from typing import Any, Sequence, Tuple
import warnings

import numpy as np


DATASET_PATH = os.path.dirname(__file__)


class DatasetLoader:
    """Base class for loading Datasets.

    Children parse a raw survey file in several stages. Each stage is
    cached in the parsed data folder, and regenerated with a warning
    when its file is missing.

    Attributes:
        DATASET_NAME: The name of the dataset folder, should always be
            specified.
        raw_path: The path of the raw data folder, can be used to help
            accessing raw files
        parsed_path: The path of the parsed data folder,
            can be used to help accessing parsed files.
        version: The version name of the data.

    """

    DATASET_NAME: str
    DATASET_PATH: str
    raw_path: str
    parsed_path: str
    version: str

    def __init__(
        self, /, version: str = None,
        clear_parsed_data: bool = False, data_path: str = None,
    ) -> Any:
        """Initailize a Dataset Loader.

        Children of this class should have their attribute
        DATASET_NAME defined as it will be used for the handling
        of data files.

        Args:
            version: Optional version of the dataset.
                parsed data will contain several version
                None if there is only a single version.
            clear_parsed_data: Whether to clear the parsed data.
            data_path: Optional folder containing 'raw_data' and
                'parsed_data'. Defaults to the DATASET_NAME folder
                in daymod.datasets.
        """
        if not hasattr(self, "DATASET_NAME"):
            raise ValueError(
                (
                    "You must set the attribute DATASET_NAME "
                    "to {} as it is mandatory for children of DatasetLoader. "
                    "DATASET_NAME should be the exact same name as you name "
                    "the dataset folder."
                ).format(inspect.getmodule(self))
            )
        self.DATASET_PATH = (
            os.path.join(DATASET_PATH, self.DATASET_NAME)
            if data_path is None else data_path
        )
        self.raw_path = os.path.join(self.DATASET_PATH, "raw_data")
        self.parsed_path = os.path.join(self.DATASET_PATH, "parsed_data")

        if version is not None:
            self.parsed_path = os.path.join(self.parsed_path, version)
        self.version = version

        if clear_parsed_data:
            self._clear_parsed_data()

    def _clear_parsed_data(self):
        """Remove all the parsed files of this version."""
        if os.path.isdir(self.parsed_path):
            shutil.rmtree(self.parsed_path)
        self._check_make_parsed_dir()

    def _raise_missing_raw(
        self,
        file_name: str,
        optional_download_website: str = None,
    ):
        """Raise custom error for missing raw data files.

        Args:
            file_name: The file that is missing
            optional_download_website: a website where the data could be
                 found

        Raises:
            FileNotFoundError: The error specifying the missing file.
        """
        file_path = self._raw_file(file_name)
        msg = (
            "Dataset '{}' has no data file '{}'. If you have it,"
            " you can place it in '{}' ."
        ).format(self.DATASET_NAME, file_name, file_path)
        if optional_download_website:
            msg = "".join(
                (
                    msg,
                    " You can download the data from : ",
                    optional_download_website,
                )
            )
        raise FileNotFoundError(2, msg, file_path)

    def _warn_could_not_load_parsed(
        self, exception_raised: Exception, data_name: str
    ):
        """Warn that a parsed file is regenerated.

        Args:
            exception_raised: The exception that was raised during the
                loading of the data
            data_name: The name of the data that was loaded
        """
        warnings.warn(
            "Could not load parsed data for '{}', due to: \n '{}'"
            "with message: '{}'.\nGenerating now from previous data.".format(
                data_name, type(exception_raised).__name__, exception_raised
            )
        )

    def _parsed_file(self, file_name: str) -> str:
        return os.path.join(self.parsed_path, file_name)

    def _raw_file(self, file_name: str) -> str:
        return os.path.join(self.raw_path, file_name)

    def _load_parsed_arrays(
        self, file_name: str, names: Sequence[str]
    ) -> Tuple[np.ndarray, ...]:
        """Load named arrays from a .npz file of the parsed data.

        Object arrays are refused, the arrays must hold numbers or
        strings.

        Args:
            file_name: The name of the file, without extension.
            names: The names of the arrays to load, in the returned
                order.

        Raises:
            FileNotFoundError: If the file or one of the arrays is
                missing.

        Returns:
            The requested arrays.
        """
        file_path = self._parsed_file(file_name + ".npz")
        with np.load(file_path) as npz_file:
            missing = [name for name in names if name not in npz_file.files]
            if missing:
                raise FileNotFoundError(
                    2, "Parsed file has no array {}".format(missing),
                    file_path
                )
            return tuple(npz_file[name] for name in names)

    def _save_parsed_arrays(self, file_name: str, **arrays: np.ndarray):
        """Save named arrays in a .npz file of the parsed data.

        Args:
            file_name: The name of the file, without extension.
            **arrays: The arrays to save, loaded back with
                :py:meth:`_load_parsed_arrays`.
        """
        self._check_make_parsed_dir()
        np.savez(self._parsed_file(file_name), **arrays)

    def _check_make_parsed_dir(self):
        """Create the parsed path dir if it does not exists."""
        os.makedirs(self.parsed_path, exist_ok=True)
