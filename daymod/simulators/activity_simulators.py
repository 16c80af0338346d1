"""Activity simulators module.

Simulators of the activities performed by many subjects during a day,
block by block.
"""
from typing import Any, List, Union

import numpy as np

from .base_simulators import SimLogger, Simulator, cached_getter
from ..utils.categories import ActivityCategory, category_from_compact_code
from ..utils.distribution_functions import cdf_to_pdf, check_valid_cdf
from ..utils.monte_carlo import RandomSource, monte_carlo_from_cdf
from ..utils.sim_types import CDFs, PDF, StateLabels


class BlockMarkovChain(Simulator):
    """Markov chain over the blocks of a day.

    Implements a 1^{rst} order Markov chain, with one transition table
    per block of the day. At time step t, the subjects are in the
    states of block t, and the transition to the block t + 1 uses
    the cdfs at index t. The time steps wrap around at the end of the
    day.

    The log probability of the path followed by each subject, since
    the initialization, is kept in :py:attr:`log_probabilities`.

    Attributes:
        n_states: The number of states availables.
        n_blocks: The number of blocks in a day.
        current_states: The current states of the subjects.
        transition_cdfs: The cdfs of the transitions,
            shape=(n_blocks, n_states, n_states).
        state_labels: The labels of the states.
        log_probabilities: The log probability of the paths.
    """

    n_states: int
    n_blocks: int
    current_states: np.ndarray
    transition_cdfs: CDFs
    log_probabilities: np.ndarray
    corresponding_loader: str = 'load_transition_cdfs'

    def __init__(
            self, n_subjects: int, transition_cdfs: CDFs,
            labels: StateLabels = None, rng: RandomSource = None,
            logger: SimLogger = None
    ):
        """Initialize a simulator for a group of subjects.

        Args:
            n_subjects: The number of subjects to be simulated.
            transition_cdfs: An array containing the cdfs of the state
                transitions from each block, shape=(n_blocks,
                n_states, n_states), for example from
                :py:func:`~daymod.utils.parse_helpers.blocks_to_transition_cdfs`.
            labels: optional. A list of labels for the states.
            rng: optional. The random generator used for the draws.
            logger: optional. A logger for the simulation.

        Raises:
            ValueError: If the parameters have wrong shapes
            TypeError: If the parameters have wrong types
        """
        super().__init__(n_subjects, logger=logger)
        if not isinstance(transition_cdfs, np.ndarray):
            raise TypeError('transition_cdfs must be numpy array')
        if transition_cdfs.ndim != 3:
            raise ValueError(
                'transition_cdfs must have shape '
                '(n_blocks, n_states, n_states), got {}.'.format(
                    transition_cdfs.shape
                )
            )
        if transition_cdfs.shape[-1] != transition_cdfs.shape[-2]:
            raise ValueError(
                'last two elements of transition_cdfs'
                ' must be the same size (n possible states)'
            )
        self.transition_cdfs = transition_cdfs
        self.n_blocks, self.n_states = transition_cdfs.shape[:2]

        # get the labels if correctly given or generates them
        if labels is not None:
            if len(labels) != self.n_states:
                raise ValueError(
                    'Length of labels is not the same as the '
                    'number of States'
                )
            self.state_labels = np.asarray(labels)
        else:
            self.state_labels = np.arange(self.n_states)

        self.rng = rng

    def initialize_starting_state(
            self, starting_state_pdf: PDF = None,
            start_time_step: int = 0,
            starting_states: Union[np.ndarray, List[int]] = None,
            checkcdf: bool = True) -> None:
        """Initialize the starting states of the subjects.

        The states are either drawn from :py:obj:`starting_state_pdf`
        at the block 0, and then simulated until
        :py:obj:`start_time_step`, or set to the given
        :py:obj:`starting_states` at the block
        :py:obj:`start_time_step`.

        Args:
            starting_state_pdf: An array containing the pdf for each of
                the state at the block 0.
            start_time_step: The block at which the simulation starts.
            starting_states: The states of the subjects at
                :py:obj:`start_time_step`. A single state is used for
                all subjects.
            checkcdf: optional. Will check if the transition_cdfs
                have correct values using
                the :py:func:`check_valid_cdf` function

        Raises:
            ValueError: If none or both of the starting pdf and states
                are given, or if they do not match the states.
        """
        if (starting_state_pdf is None) == (starting_states is None):
            raise ValueError(
                'Exactly one of starting_state_pdf and starting_states '
                'must be given.'
            )
        if checkcdf:
            check_valid_cdf(self.transition_cdfs)
        self.log_probabilities = np.zeros(self.n_subjects)

        if starting_states is not None:
            states = np.broadcast_to(
                np.asarray(starting_states, dtype=int), (self.n_subjects,)
            ).copy()
            if np.any(states < 0) or np.any(states >= self.n_states):
                raise ValueError(
                    'starting_states must be between 0 and {}.'.format(
                        self.n_states - 1
                    )
                )
            if not 0 <= start_time_step < self.n_blocks:
                raise ValueError(
                    'start_time_step must be between 0 and {}.'.format(
                        self.n_blocks - 1
                    )
                )
            self.current_states = states
            # start directly at the requested block
            self.current_time_step = int(start_time_step)
            self._cache.clear()
            if self.logger:
                self.logger.clear()
                self.logger.visit_simulator(self)
            return

        if len(starting_state_pdf) != self.n_states:
            raise ValueError(
                'the starting states do not correspond to the size of the '
                'transition matrices'
            )
        # broadcast to the number of subjects as they all have this same cdf
        starting_state_cdf = np.broadcast_to(
            np.cumsum(starting_state_pdf), (self.n_subjects, self.n_states)
        )
        if checkcdf:
            check_valid_cdf(starting_state_cdf)
        self.current_states = monte_carlo_from_cdf(
            starting_state_cdf, rng=self.rng
        )
        self.log_probabilities += self._log(
            np.asarray(starting_state_pdf)[self.current_states]
        )
        super().initialize_starting_state(start_time_step=start_time_step)

    @staticmethod
    def _log(probabilities: np.ndarray) -> np.ndarray:
        # impossible paths get -inf
        with np.errstate(divide='ignore'):
            return np.log(probabilities)

    def step(self) -> None:
        """Perform a Markov chain step.

        Update the current states using the cdfs of the current block.
        """
        cdf = self.transition_cdfs[self.current_time_step % self.n_blocks]
        old_states = self.current_states
        self.current_states = monte_carlo_from_cdf(
            cdf[old_states, :], rng=self.rng
        )
        pdf = cdf_to_pdf(cdf)
        self.log_probabilities = self.log_probabilities + self._log(
            pdf[old_states, self.current_states]
        )
        # update the time
        super().step()

    @cached_getter
    def get_current_states(self) -> np.ndarray:
        """Get the states of the subjects at the current block."""
        return self.current_states.copy()

    def get_current_categories(self) -> List[ActivityCategory]:
        """Get the categories of the subjects at the current block."""
        return [
            category_from_compact_code(state)
            for state in self.current_states
        ]

    def get_n_doing_state(self, state: int) -> int:
        return int(np.sum(self.current_states == state))

    def get_n_doing_activity(self, activity: Any) -> int:
        """Count the subjects doing the activity.

        Args:
            activity: A state label, or an :py:class:`ActivityCategory`.
        """
        labels = list(self.state_labels)
        if not isinstance(activity, ActivityCategory) and activity in labels:
            return self.get_n_doing_state(labels.index(activity))
        return self.get_n_doing_state(int(activity))

    @cached_getter
    def get_log_probabilities(self) -> np.ndarray:
        """Get the log probability of the path of each subject."""
        return self.log_probabilities.copy()
