"""Support for Monte Carlo sampling.

Daymod provides some helper function for
`Monte Carlo (MC) sampling <https://en.wikipedia.org/wiki/Monte_Carlo_method>`_
with numpy arrays and using discrete domains.

Discrete Probability and Cumlative distribution functions (PDF and CDF)
can be used for sampling.
See the following example::

    pdf = np.array([0.3, 0.65, 0.05])
    # 30% chance return 0, 65% chance return 1, 5% chance return 2
    out = monte_carlo_from_1d_pdf(pdf)

All the functions accept an optional ``rng``, a
:py:class:`numpy.random.Generator`. When it is not given, the global
numpy random state is used (seedable with ``np.random.seed``).

For a value ``r`` drawn uniformly in [0, 1), the sampled index is the
first one whose cdf value is >= ``r`` and whose own probability is
not 0. If roundoff errors leave no such index (the last cdf value
is slightly smaller than ``r``), the last index is returned.
"""
from typing import Union

import numpy as np

from .categories import ActivityCategory, category_from_compact_code

PDF = np.ndarray
CDF = np.ndarray
CDFs = np.ndarray
MC_choices = np.ndarray
RandomSource = Union[np.random.Generator, None]


def _get_rng(rng: RandomSource):
    return np.random if rng is None else rng


def monte_carlo_from_cdf(cdf_s: CDFs, rng: RandomSource = None) -> MC_choices:
    """Sample from a set of given cumlative distribution functions (CDFs).

    Args:
        cdf_s: A 2-D ndarray with
            dimension 0 = number of sample,
            dimension 1 = size of the CDFs.
        rng: Optional random generator.

    Returns:
        The result of the MC draw for each samples.

    Notes:
        The MC algo performs no checks on the CDFs
    """
    cdf_s = np.asarray(cdf_s)
    # sample MC distibution
    rand = _get_rng(rng).uniform(size=cdf_s.shape[0])
    # index with a non zero probability
    mask_possible = np.diff(cdf_s, axis=1, prepend=0.) > 0
    # gets the approptiate CDFs values
    mask = (cdf_s >= rand[:, None]) & mask_possible
    choices = np.argmax(mask, axis=1)
    # roundoff errors fall back on the last index
    choices[~np.any(mask, axis=1)] = cdf_s.shape[1] - 1
    return choices


def monte_carlo_from_1d_cdf(
    cdf: CDF, n_samples: int = 1, rng: RandomSource = None
) -> MC_choices:
    """Sample MC from a given CDF.

    Args:
        cdf: A 1-D ndarray with values being the CDF
        n_samples: the number of samples to draw from the CDF
        rng: Optional random generator.

    Returns:
        The result of the MC draw for each samples.
    """
    cdf_s = np.broadcast_to(cdf, (n_samples, len(cdf)))
    return monte_carlo_from_cdf(cdf_s, rng=rng)


def monte_carlo_from_1d_pdf(
    pdf: PDF, n_samples: int = 1, rng: RandomSource = None
) -> MC_choices:
    """Sample for given PDF.

    Args:
        pdf: A 1-D ndarray with values being the PDF
        n_samples: the number of samples to draw from the PDF
        rng: Optional random generator.

    Returns:
        The result of the MC draw for each samples.
    """
    return monte_carlo_from_1d_cdf(np.cumsum(pdf), n_samples=n_samples, rng=rng)


def sample_transition(
    cdf_table: CDFs,
    from_category: Union[ActivityCategory, int],
    rng: RandomSource = None,
) -> ActivityCategory:
    """Draw the category following :py:obj:`from_category`.

    Args:
        cdf_table: The transition table of a block, shape=(n_states,
            n_states), row i being the cdf of the destinations from
            state i.
        from_category: The current category.
        rng: Optional random generator, use a seeded one for
            reproducible draws.

    Returns:
        The sampled category. If roundoff errors prevent finding one,
        :py:attr:`ActivityCategory.MISSING_DATA`.
    """
    row = np.asarray(cdf_table)[int(from_category)]
    code = monte_carlo_from_cdf(row[None, :], rng=rng)[0]
    return category_from_compact_code(code)
