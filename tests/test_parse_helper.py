import os
import tempfile

from daymod.utils.block_codec import (
    iter_block_file, read_block_header, write_block_file
)
from daymod.utils.parse_helpers import (
    blocks_to_transition_cdfs,
    blocks_to_transition_counts,
    counts_to_cdf,
    get_initial_pdf,
)
from daymod.utils.categories import MAX_CODE, N_CATEGORIES
from daymod.utils.distribution_functions import check_valid_cdf
import unittest

import numpy as np


class TestTransitionCounts(unittest.TestCase):
    def test_simple(self):
        blocks = np.array([
            [0, 0, 1],
            [0, 1, 1],
        ], dtype=np.uint8)
        counts = blocks_to_transition_counts(blocks, n_states=2)
        self.assertEqual(counts.shape, (3, 2, 2))
        self.assertTrue(np.all(
            counts[0] == np.array([[1, 1], [0, 0]])
        ))
        self.assertTrue(np.all(
            counts[1] == np.array([[0, 1], [0, 1]])
        ))
        # no transition from the last block
        self.assertTrue(np.all(counts[2] == 0))

    def test_end_start_transitions(self):
        blocks = np.array([
            [0, 0, 1],
            [0, 1, 1],
        ], dtype=np.uint8)
        counts = blocks_to_transition_counts(
            blocks, n_states=2, include_end_start_transitions=True
        )
        self.assertTrue(np.all(
            counts[2] == np.array([[0, 0], [2, 0]])
        ))
        self.assertTrue(np.all(
            counts[0] == np.array([[1, 1], [0, 0]])
        ))

    def test_default_states(self):
        blocks = np.array([[3, MAX_CODE, 3]])
        counts = blocks_to_transition_counts(blocks)
        self.assertEqual(counts.shape, (3, N_CATEGORIES, N_CATEGORIES))
        # the missing data is counted
        self.assertEqual(counts[0, 3, MAX_CODE], 1)
        self.assertEqual(counts[1, MAX_CODE, 3], 1)
        self.assertEqual(counts.sum(), 2)

    def test_iterable(self):
        days = (np.array([0, 1]) for _ in range(3))
        counts = blocks_to_transition_counts(days, n_states=2)
        self.assertEqual(counts[0, 0, 1], 3)

    def test_unequal_days(self):
        days = [np.array([0, 1]), np.array([0, 1, 1])]
        self.assertRaises(
            ValueError, blocks_to_transition_counts, days, n_states=2
        )

    def test_invalid_codes(self):
        self.assertRaises(
            ValueError, blocks_to_transition_counts,
            np.array([[0, 2]]), n_states=2
        )

    def test_no_days(self):
        self.assertRaises(ValueError, blocks_to_transition_counts, [])
        counts = blocks_to_transition_counts([], blocks_per_day=4)
        self.assertEqual(counts.shape, (4, N_CATEGORIES, N_CATEGORIES))
        self.assertEqual(counts.sum(), 0)

    def test_streamed_file_without_days(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, 'empty.ablk')
            write_block_file(path, np.zeros((0, 96), dtype=np.uint8))
            self.assertRaises(
                ValueError, blocks_to_transition_counts,
                iter_block_file(path)
            )
            counts = blocks_to_transition_counts(
                iter_block_file(path),
                blocks_per_day=read_block_header(path)[0]
            )
        self.assertEqual(counts.shape, (96, N_CATEGORIES, N_CATEGORIES))
        self.assertEqual(counts.sum(), 0)


class TestCountsToCDF(unittest.TestCase):
    def test_simple(self):
        counts = np.array([[1, 3], [2, 2]])
        cdf = counts_to_cdf(counts)
        self.assertTrue(np.allclose(cdf, [[0.25, 1.], [0.5, 1.]]))

    def test_uniform_rows(self):
        counts = np.zeros((2, N_CATEGORIES, N_CATEGORIES))
        counts[0, 4, 2] = 5
        cdfs = counts_to_cdf(counts)
        uniform = (np.arange(N_CATEGORIES) + 1) / 21
        for row in [0, 3, MAX_CODE]:
            self.assertTrue(np.allclose(cdfs[0, row], uniform))
        self.assertTrue(np.allclose(cdfs[1, 4], uniform))
        self.assertEqual(cdfs[0, 4, 1], 0.)
        self.assertEqual(cdfs[0, 4, 2], 1.)

    def test_valid_cdfs(self):
        rng = np.random.default_rng(0)
        counts = rng.integers(0, 5, size=(6, N_CATEGORIES, N_CATEGORIES))
        counts[0, 0] = 0
        cdfs = counts_to_cdf(counts)
        self.assertTrue(check_valid_cdf(cdfs))
        self.assertTrue(np.all(np.diff(cdfs, axis=-1) >= 0))
        self.assertTrue(np.all(np.abs(cdfs[..., -1] - 1.) < 1e-9))


class TestTransitionCDFs(unittest.TestCase):
    def test_blocks(self):
        blocks = np.array([
            [0, 5, 5, 5],
            [0, 5, 5, 7],
            [0, 7, 5, 7],
        ])
        cdfs = blocks_to_transition_cdfs(blocks)
        self.assertEqual(cdfs.shape, (4, N_CATEGORIES, N_CATEGORIES))
        pdf = np.diff(cdfs[0, 0], prepend=0.)
        self.assertAlmostEqual(pdf[5], 2 / 3)
        self.assertAlmostEqual(pdf[7], 1 / 3)
        pdf = np.diff(cdfs[2, 5], prepend=0.)
        self.assertAlmostEqual(pdf[5], 1 / 3)
        self.assertAlmostEqual(pdf[7], 2 / 3)
        # the last cdfs are all uniform
        uniform = (np.arange(N_CATEGORIES) + 1) / 21
        self.assertTrue(np.allclose(cdfs[3], uniform))
        self.assertTrue(check_valid_cdf(cdfs))


class TestInitialPDF(unittest.TestCase):
    def test_simple(self):
        blocks = np.array([[0, 1], [0, 2], [3, 3], [MAX_CODE, 0]])
        pdf = get_initial_pdf(blocks)
        self.assertEqual(len(pdf), N_CATEGORIES)
        self.assertAlmostEqual(pdf[0], 2 / 3)
        self.assertAlmostEqual(pdf[3], 1 / 3)
        self.assertEqual(pdf[MAX_CODE], 0.)

    def test_keep_missing_data(self):
        blocks = np.array([[0, 1], [MAX_CODE, 0]])
        pdf = get_initial_pdf(blocks, ignore_missing_data=False)
        self.assertAlmostEqual(pdf[MAX_CODE], 0.5)

    def test_no_days(self):
        pdf = get_initial_pdf(np.zeros((0, 4), dtype=np.uint8))
        self.assertAlmostEqual(pdf.sum(), 1.)
        self.assertEqual(pdf[MAX_CODE], 0.)
        self.assertAlmostEqual(pdf[0], 1 / 20)


if __name__ == '__main__':
    unittest.main()
