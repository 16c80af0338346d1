"""Base simulators module.

This Module contains the base classes for running simulations of
days of activities.
The Simulators contained in this module serve as basis for new
implementations of simulations.
"""
from __future__ import annotations

from typing import Callable, Union

import numpy as np
import pandas as pd

from ..utils.sim_types import StateLabels


def cached_getter(getter: GetMethod) -> GetMethod:
    """Decorate getter methods.

    Uses a cache system to store the arrays.
    Cache is cleared at each simulator step().

    Args:
        getter: The getter method to decorate.
    """

    def decorated_getter(self: Simulator, n_ieth_subject: int = None):
        # add getter to the cache if not there
        if getter not in self._cache:
            self._cache[getter] = getter(self)
        # Check if a subject is specified
        if n_ieth_subject is None:
            return self._cache[getter]

        return self._cache[getter][n_ieth_subject]

    decorated_getter.__name__ = getter.__name__
    decorated_getter.__doc__ = getter.__doc__
    return decorated_getter


class SimLogger():
    """Record one variable of a :py:class:`Simulator` along the day.

    Once set to a :py:class:`Simulator`, the :py:class:`SimLogger`
    collects the variable at the initialization and after each step,
    together with the time step of the simulator.
    The records are read with :py:meth:`SimLogger.get`, or as a table
    of the subjects with :py:meth:`SimLogger.to_dataframe`.

    Attributes:
        attribute: The name of the simulator getter or attribute.
        aggregated: Whether the values are summed over the subjects.
        length: The number of records.
    """

    attribute: str
    aggregated: bool
    length: int

    def __init__(self, attribute: str, aggregated: bool = False) -> None:
        """Create a logger.

        Args:
            attribute: the name of the simulator method or attribute
                to be recorded.
            aggregated: Whether the values should be summed over all
                the subjects. Defaults to False.

        Raises:
            TypeError: If the inputs have wrong types.
        """
        if not isinstance(attribute, str):
            raise TypeError('attribute must be the name of a getter')
        if not isinstance(aggregated, bool):
            raise TypeError('aggregated variable must be bool')
        self.attribute = attribute
        self.aggregated = aggregated
        self.clear()

    def get(self) -> np.ndarray:
        """Get the recorded values.

        Returns:
            Array with the recorded values, the first dimension being
            the visits of the logger.
        """
        return np.asarray(self._values)

    def get_time_steps(self) -> np.ndarray:
        """Get the time step of the simulator at each record."""
        return np.asarray(self._time_steps, dtype=int)

    def to_dataframe(self, labels: StateLabels = None) -> pd.DataFrame:
        """Get the records of the subjects as a table.

        Args:
            labels: optional. Labels replacing the recorded states,
                for example the ones given by
                :py:meth:`~daymod.datasets.ATUS.loader.ATUS.load_transition_cdfs`.

        Returns:
            DataFrame indexed by the time steps, with one column per
            subject, or a single column if the logger is aggregated.

        Raises:
            ValueError: If the records are not states that the labels
                can replace.
        """
        values = self.get()
        if values.ndim == 1:
            values = values[:, None]
        if labels is not None:
            if self.aggregated:
                raise ValueError(
                    'Labels cannot replace the aggregated values of {}.'
                    .format(self.attribute)
                )
            values = np.asarray(labels)[values.astype(int)]
        columns = (
            [self.attribute] if self.aggregated
            else list(range(values.shape[1]))
        )
        return pd.DataFrame(
            values,
            index=pd.Index(self.get_time_steps(), name='time_step'),
            columns=columns,
        )

    def clear(self) -> None:
        """Remove all the records."""
        self._values = []
        self._time_steps = []
        self.length = 0

    def copy(self) -> SimLogger:
        """Create an empty logger recording the same variable."""
        return SimLogger(self.attribute, aggregated=self.aggregated)

    def visit_simulator(self, sim: Simulator) -> None:
        """Visit a simulator object.

        Args:
            sim: The simulator that is visited. The SimLogger will
                request and store the registered attribute.

        Note:
            You usually won't need to use this method, as it is called
            in :py:meth:`Simulator.step`
        """
        result = getattr(sim, self.attribute)
        # if it is a callable, call it
        if callable(result):
            result = result()
        # Aggregates the result over the subjects
        if self.aggregated:
            result = np.sum(result)
        self._values.append(np.array(result))
        self._time_steps.append(sim.current_time_step)
        self.length += 1


class Simulator():
    """Abstract mother class for all the simulators.

    The 3 methods of this simulator are meant to be called by its
    children.

    Attributes:
        n_subjects: The number of subjects simulated.
        current_time_step: The current time step of the simulation.
        logger: A logger object, that can log the value of variables
            during the simulation.
    """

    _cache: dict
    n_subjects: int
    current_time_step: int
    logger: SimLogger

    def __init__(
            self, n_subjects: int, logger: SimLogger = None) -> None:
        """Initialize the simulator.

        This method is supposed to be called in the :py:func:`__init__`
        of all children of :py:class:`Simulator` .

        Args:
            n_subjects: The number of simulated subjects.
            logger: Optional logger, it is copied.

        Raises:
            TypeError: If the type of n_subjects is not an integer
            ValueError: If n_subjects is non positive
        """
        self._cache = {}

        try:
            n_subjects = int(n_subjects)
        except (TypeError, ValueError) as exc:
            raise TypeError(
                "'n_subjects' must be castable to integer, "
                "not:'{}'.".format(type(n_subjects))) from exc

        if n_subjects <= 0:
            raise ValueError('n_subjects must be positive')

        self.n_subjects = n_subjects

        # check that logger is None or SimLogger
        if logger is None:
            self.logger = logger
        elif isinstance(logger, SimLogger):
            self.logger = logger.copy()
        else:
            raise TypeError('logger kwargs is not instance of SimLogger')

    def initialize_starting_state(
        self, start_time_step: int = 0, *args, **kwargs
    ) -> None:
        r"""Initialize the values of the variables.

        If a :py:obj:`start_time_step` is given, the initilization will
        call the step function to simulate the requested number of
        time steps.
        Any arguments to be used by the step function can be passed as
        :py:obj:`*args`, :py:obj:`**kwargs`.

        Args:
            start_time_step: The time step at which the
                simulation should start. Defaults to 0.

        Raises:
            TypeError: If the type of start_time_step is not int.
            ValueError: If the start_time_step is negative.
        """
        if not isinstance(start_time_step, (int, np.integer)):
            raise TypeError('start_time_step must be an integer')
        if start_time_step < 0:
            raise ValueError('start_time_step must be non-negative')
        self.current_time_step = 0
        self._cache.clear()
        for _ in range(start_time_step):
            self.step(*args, **kwargs)

        # clears the logger after initialization
        if self.logger:
            self.logger.clear()
            # visit to store the first step
            self.logger.visit_simulator(self)

    def step(self) -> None:
        """Perform a simulation step.

        Increment the :py:attr:`current_time_step`,
        calls :py:attr:`logger`, and clear cached variables.
        """
        self.current_time_step += 1
        self._cache.clear()
        if self.logger:
            self.logger.visit_simulator(self)


# Support for Typing in simulators.
GetMethod = Callable[[Simulator, Union[None, int]], np.ndarray]
