"""Forecasters of the rest of a day.

A forecaster receives the categories observed during the first blocks
of a day, and predicts several possible continuations of the day,
each with a certainty.

Example::

    cdfs, labels, initial_pdf = ATUS(block_duration=15).load_transition_cdfs()
    forecaster = MarkovChainForecaster(cdfs, initial_pdf)
    observed = [ActivityCategory.SLEEPING] * 28
    for forecast in forecaster.forecast(observed, 5):
        print(forecast.certainty, forecast.prediction[:4])

"""
from typing import List, Sequence, Tuple, Union

import numpy as np

from .activity_simulators import BlockMarkovChain
from .base_simulators import SimLogger
from ..utils.blocks import MINUTES_PER_DAY, check_block_duration
from ..utils.categories import (
    MAX_CODE, ActivityCategory, category_from_compact_code
)
from ..utils.monte_carlo import RandomSource, monte_carlo_from_1d_pdf
from ..utils.sim_types import Activities, CDFs, PDF

ActivityInput = Union[ActivityCategory, int]


def _as_categories(activities: Sequence[ActivityInput]) -> Tuple:
    categories = tuple(category_from_compact_code(a) for a in activities)
    if None in categories:
        raise ValueError(
            'Invalid activity codes in {}.'.format(list(activities))
        )
    return categories


class Forecast():
    """A forecast of the activities of a day.

    Attributes:
        initial_conditions: The observed categories that lead to the
            forecast.
        prediction: The predicted categories of the rest of the day.
        certainty: The certainty that the forecast comes true, between
            0 and 1.
        block_duration: The duration of the blocks in minutes.
    """

    initial_conditions: Tuple[ActivityCategory, ...]
    prediction: Tuple[ActivityCategory, ...]
    certainty: float
    block_duration: int

    def __init__(
        self,
        initial_conditions: Sequence[ActivityInput],
        prediction: Sequence[ActivityInput],
        certainty: float,
        block_duration: int = 15,
    ) -> None:
        """Create a forecast.

        Args:
            initial_conditions: The observed categories.
            prediction: The predicted categories.
            certainty: The certainty of the forecast.
            block_duration: The duration of the blocks in minutes.

        Raises:
            ConfigurationError: If the block duration is invalid.
            ValueError: If the observed and predicted blocks do not
                make a full day, or if the certainty is not in [0, 1].
        """
        blocks_per_day = check_block_duration(block_duration)
        self.initial_conditions = _as_categories(initial_conditions)
        self.prediction = _as_categories(prediction)
        n_blocks = len(self.initial_conditions) + len(self.prediction)
        if n_blocks != blocks_per_day:
            raise ValueError(
                'A forecast with block_duration {} must contain {} blocks, '
                'got {}.'.format(block_duration, blocks_per_day, n_blocks)
            )
        if not 0. <= certainty <= 1.:
            raise ValueError(
                'certainty must be between 0 and 1, got {}.'.format(certainty)
            )
        self.certainty = float(certainty)
        self.block_duration = block_duration

    @property
    def full_day(self) -> Activities:
        """The categories of all the blocks of the day."""
        return list(self.initial_conditions + self.prediction)

    def __repr__(self) -> str:
        return '{}(n_observed={}, n_predicted={}, certainty={:.3g})'.format(
            type(self).__name__, len(self.initial_conditions),
            len(self.prediction), self.certainty
        )


class DayForecaster():
    """Base class of the forecasters.

    Children must implement :py:meth:`forecast`.

    Attributes:
        block_duration: The duration of the blocks in minutes.
        blocks_per_day: The number of blocks in a day.
    """

    block_duration: int
    blocks_per_day: int

    def __init__(self, block_duration: int = 15) -> None:
        self.blocks_per_day = check_block_duration(block_duration)
        self.block_duration = block_duration

    def forecast(
        self,
        initial_conditions: Sequence[ActivityInput],
        forecast_count: int,
    ) -> List[Forecast]:
        """Forecast the rest of the day.

        Args:
            initial_conditions: The categories observed since the start
                of the day.
            forecast_count: The number of forecasts to produce.

        Returns:
            The forecasts, their certainties sum to 1.
        """
        raise NotImplementedError()

    def _check_forecast_inputs(
        self,
        initial_conditions: Sequence[ActivityInput],
        forecast_count: int,
    ) -> Tuple[Tuple[ActivityCategory, ...], int]:
        """Validate the inputs of :py:meth:`forecast`.

        Returns:
            The observed categories and the number of blocks to predict.
        """
        if (
            not isinstance(forecast_count, (int, np.integer))
            or isinstance(forecast_count, bool)
            or forecast_count < 0
        ):
            raise ValueError(
                'forecast_count must be a non negative integer, got {}.'
                .format(forecast_count)
            )
        observed = _as_categories(initial_conditions)
        if len(observed) > self.blocks_per_day:
            raise ValueError(
                '{} blocks were observed, but a day has only {} blocks.'
                .format(len(observed), self.blocks_per_day)
            )
        return observed, self.blocks_per_day - len(observed)

    def _make_forecasts(
        self,
        observed: Tuple[ActivityCategory, ...],
        predictions: np.ndarray,
        certainties: np.ndarray,
    ) -> List[Forecast]:
        return [
            Forecast(
                observed, prediction, certainty,
                block_duration=self.block_duration
            )
            for prediction, certainty in zip(predictions, certainties)
        ]


class RandomForecaster(DayForecaster):
    """Forecast days randomly.

    Each predicted block is drawn uniformly among the categories,
    missing data excluded. All the forecasts have the same certainty.
    """

    def __init__(
        self, block_duration: int = 15, rng: RandomSource = None
    ) -> None:
        """Create a random forecaster.

        Args:
            block_duration: The duration of the blocks in minutes.
            rng: optional. The random generator used for the draws.
        """
        super().__init__(block_duration)
        self.rng = rng

    def forecast(
        self,
        initial_conditions: Sequence[ActivityInput],
        forecast_count: int,
    ) -> List[Forecast]:
        observed, n_predicted = self._check_forecast_inputs(
            initial_conditions, forecast_count
        )
        if forecast_count == 0:
            return []
        uniform_pdf = np.full(MAX_CODE, 1. / MAX_CODE)
        predictions = monte_carlo_from_1d_pdf(
            uniform_pdf, n_samples=forecast_count * n_predicted, rng=self.rng
        ).reshape(forecast_count, n_predicted)
        certainties = np.full(forecast_count, 1. / forecast_count)
        return self._make_forecasts(observed, predictions, certainties)


class MarkovChainForecaster(DayForecaster):
    """Forecast days with a :py:class:`BlockMarkovChain`.

    The rest of the day is simulated from the last observed category,
    using the transition cdfs of the following blocks. When nothing is
    observed, the first block is drawn from the initial pdf.

    The certainty of a forecast is the probability of its predicted
    path, normalized over the forecasts of the same call.

    Attributes:
        transition_cdfs: The cdfs of the transitions from each block.
        initial_pdf: The pdf of the first block of the day.
    """

    def __init__(
        self,
        transition_cdfs: CDFs,
        initial_pdf: PDF = None,
        rng: RandomSource = None,
    ) -> None:
        """Create a Markov chain forecaster.

        Args:
            transition_cdfs: The cdfs of the transitions,
                shape=(blocks_per_day, n_states, n_states), for example
                from :py:meth:`~daymod.datasets.ATUS.loader.ATUS.load_transition_cdfs`.
            initial_pdf: optional. The pdf of the first block. Defaults
                to uniform over the categories, missing data excluded.
            rng: optional. The random generator used for the draws.

        Raises:
            ValueError: If the number of cdfs is not a valid number of
                blocks per day.
        """
        transition_cdfs = np.asarray(transition_cdfs)
        n_blocks = transition_cdfs.shape[0]
        if n_blocks == 0 or MINUTES_PER_DAY % n_blocks != 0:
            raise ValueError(
                '{} transition cdfs do not match any block duration.'
                .format(n_blocks)
            )
        super().__init__(MINUTES_PER_DAY // n_blocks)
        self.transition_cdfs = transition_cdfs

        n_states = transition_cdfs.shape[-1]
        if initial_pdf is None:
            initial_pdf = np.zeros(n_states)
            initial_pdf[:min(MAX_CODE, n_states)] = 1.
            initial_pdf /= initial_pdf.sum()
        self.initial_pdf = np.asarray(initial_pdf, dtype=float)
        self.rng = rng

    def forecast(
        self,
        initial_conditions: Sequence[ActivityInput],
        forecast_count: int,
    ) -> List[Forecast]:
        observed, n_predicted = self._check_forecast_inputs(
            initial_conditions, forecast_count
        )
        if forecast_count == 0:
            return []
        if n_predicted == 0:
            return self._make_forecasts(
                observed, np.zeros((forecast_count, 0), dtype=int),
                np.full(forecast_count, 1. / forecast_count)
            )

        sim = BlockMarkovChain(
            forecast_count, self.transition_cdfs, rng=self.rng,
            logger=SimLogger('get_current_states')
        )
        if observed:
            sim.initialize_starting_state(
                starting_states=int(observed[-1]),
                start_time_step=len(observed) - 1,
            )
            n_steps = n_predicted
        else:
            # the first block is part of the prediction
            sim.initialize_starting_state(starting_state_pdf=self.initial_pdf)
            n_steps = n_predicted - 1
        for _ in range(n_steps):
            sim.step()

        # shape=(n_visits, forecast_count)
        states = sim.logger.get()
        predicted = sim.logger.get_time_steps() >= len(observed)
        predictions = states[predicted].T

        return self._make_forecasts(
            observed, predictions,
            self._normalize_certainties(sim.get_log_probabilities())
        )

    @staticmethod
    def _normalize_certainties(log_probabilities: np.ndarray) -> np.ndarray:
        if not np.any(np.isfinite(log_probabilities)):
            return np.full(len(log_probabilities), 1. / len(log_probabilities))
        weights = np.exp(log_probabilities - np.max(log_probabilities))
        return weights / weights.sum()
