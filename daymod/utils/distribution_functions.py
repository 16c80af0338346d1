"""Various helpers for statistical distribution functions.

pdf = probability distribution function
cdf = cumulative distribution function

"""
import numpy as np


def check_valid_cdf(cdf: np.ndarray, epsilon: float = 1e-9):
    """Check the validity of the given cdf.

    Check that the values are increasing.
    Check that it ends at 1.

    Parameters:
        cdf : ndarray, of any size, with last dimension being the cdfs
        epsilon: tolerance on the final value

    Returns:
        True if the cdf is valid

    Raises:
        ValueError:
            if the cdf is invalid
    """
    # first reduces the dimension of the given cdfs
    shape = np.shape(cdf)
    cdf = np.reshape(cdf, (-1, shape[-1]))
    # checks that cdfs ends with value 1
    if not np.all(
        np.logical_and(cdf[:, -1] > 1.0 - epsilon, cdf[:, -1] < 1.0 + epsilon)
    ):
        raise ValueError(
            "Last elements of each arrays in cdf are not all == 1"
        )
    # checks that elements of the cdfs are never decreasing
    if not np.all(cdf[:, :-1] <= cdf[:, 1:]):
        raise ValueError("Some cdfs are decreasing")
    # checks that cdfs are always between 0 and 1
    if not np.all(np.logical_and(cdf <= 1 + epsilon, cdf >= 0)):
        raise ValueError("Some values in the cdf are not between 0 and 1")
    return True


def cdf_to_pdf(cdf: np.ndarray) -> np.ndarray:
    """Convert cdfs back to pdfs, along the last dimension."""
    return np.diff(cdf, axis=-1, prepend=0.)
