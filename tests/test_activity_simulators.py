import unittest

import numpy as np

from daymod.simulators.activity_simulators import BlockMarkovChain
from daymod.simulators.base_simulators import SimLogger
from daymod.utils.categories import ActivityCategory, N_CATEGORIES

from test_base_simulators import BaseSimulatorChildrenTests


def deterministic_cdfs(n_blocks, n_states):
    """All the subjects go to state (t + 1) % n_states at block t + 1."""
    cdfs = np.zeros((n_blocks, n_states, n_states))
    for t in range(n_blocks):
        cdfs[t, :, (t + 1) % n_states:] = 1.
    return cdfs


def uniform_cdfs(n_blocks, n_states):
    return np.broadcast_to(
        (np.arange(n_states) + 1) / n_states, (n_blocks, n_states, n_states)
    ).copy()


class BlockMarkovChainTests(BaseSimulatorChildrenTests):
    sim = BlockMarkovChain
    n_subjects = 4
    args = [4, deterministic_cdfs(6, 3)]
    kwargs = {}
    init_kwargs = {'starting_state_pdf': np.array([1., 0., 0.])}
    getter_args = {
        'get_n_doing_activity': [0],
        'get_n_doing_state': [0],
    }

    def test_deterministic_path(self):
        sim = self.get_instantiated_sim()
        self.assertTrue(np.all(sim.get_current_states() == 0))
        for t in range(1, 6):
            sim.step()
            self.assertTrue(np.all(sim.current_states == t % 3))
        self.assertTrue(np.all(sim.get_log_probabilities() == 0.))

    def test_wraps_around_the_day(self):
        sim = self.get_instantiated_sim()
        for _ in range(6):
            sim.step()
        # back to the first block, uses the cdfs of block 5 -> 0
        self.assertEqual(sim.current_time_step, 6)
        self.assertTrue(np.all(sim.current_states == 0))
        sim.step()
        self.assertTrue(np.all(sim.current_states == 1))

    def test_logger_records_blocks(self):
        sim = self.sim(
            *self.args, labels=['Sleeping', 'Work', 'Leisure'],
            logger=SimLogger('get_current_states')
        )
        sim.initialize_starting_state(starting_states=2, start_time_step=3)
        sim.step()
        self.assertTrue(np.all(sim.logger.get_time_steps() == [3, 4]))
        days = sim.logger.to_dataframe(labels=sim.state_labels)
        self.assertEqual(list(days.loc[3]), ['Leisure'] * 4)
        self.assertEqual(list(days.loc[4]), ['Work'] * 4)

    def test_starting_states(self):
        sim = self.sim(*self.args)
        sim.initialize_starting_state(starting_states=2, start_time_step=3)
        self.assertEqual(sim.current_time_step, 3)
        self.assertTrue(np.all(sim.current_states == 2))
        sim.step()
        self.assertTrue(np.all(sim.current_states == 1))

    def test_start_time_step_from_pdf(self):
        sim = self.sim(*self.args)
        sim.initialize_starting_state(
            starting_state_pdf=np.array([1., 0., 0.]), start_time_step=2
        )
        self.assertEqual(sim.current_time_step, 2)
        self.assertTrue(np.all(sim.current_states == 2))

    def test_invalid_initialization(self):
        sim = self.sim(*self.args)
        self.assertRaises(ValueError, sim.initialize_starting_state)
        self.assertRaises(
            ValueError, sim.initialize_starting_state,
            starting_state_pdf=np.array([1., 0., 0.]), starting_states=1
        )
        self.assertRaises(
            ValueError, sim.initialize_starting_state,
            starting_state_pdf=np.array([1., 0.])
        )
        self.assertRaises(
            ValueError, sim.initialize_starting_state, starting_states=3
        )
        self.assertRaises(
            ValueError, sim.initialize_starting_state,
            starting_states=0, start_time_step=6
        )

    def test_invalid_cdfs(self):
        self.assertRaises(TypeError, self.sim, 2, [[[1.]]])
        self.assertRaises(ValueError, self.sim, 2, np.ones((3, 2)))
        self.assertRaises(ValueError, self.sim, 2, np.ones((3, 2, 3)))
        self.assertRaises(
            ValueError, self.sim, 2, deterministic_cdfs(3, 3), labels=['a']
        )
        sim = self.sim(2, np.full((3, 2, 2), 0.5))
        self.assertRaises(
            ValueError, sim.initialize_starting_state,
            starting_state_pdf=np.array([1., 0.])
        )

    def test_n_doing_activity(self):
        sim = self.sim(*self.args, labels=['a', 'b', 'c'])
        sim.initialize_starting_state(starting_states=1)
        self.assertEqual(sim.get_n_doing_activity('b'), 4)
        self.assertEqual(sim.get_n_doing_activity('a'), 0)
        self.assertEqual(sim.get_n_doing_activity(1), 4)
        self.assertEqual(sim.get_n_doing_state(1), 4)

    def test_categories(self):
        sim = self.sim(*self.args)
        sim.initialize_starting_state(starting_states=2)
        self.assertEqual(
            sim.get_current_categories(),
            [ActivityCategory.HOUSEHOLD_CHORES] * 4
        )

    def test_log_probabilities(self):
        sim = self.sim(5, uniform_cdfs(4, 4))
        sim.initialize_starting_state(
            starting_state_pdf=np.array([0.5, 0.5, 0., 0.])
        )
        self.assertTrue(np.allclose(sim.log_probabilities, np.log(0.5)))
        sim.step()
        sim.step()
        self.assertTrue(np.allclose(
            sim.get_log_probabilities(), np.log(0.5) + 2 * np.log(0.25)
        ))

    def test_seeded(self):
        cdfs = uniform_cdfs(96, N_CATEGORIES)
        paths = []
        for _ in range(2):
            sim = self.sim(
                10, cdfs, rng=np.random.default_rng(7),
                logger=SimLogger('get_current_states')
            )
            sim.initialize_starting_state(starting_states=0)
            for _ in range(20):
                sim.step()
            paths.append(sim.logger.get())
        self.assertEqual(paths[0].shape, (21, 10))
        self.assertTrue(np.all(paths[0] == paths[1]))


if __name__ == '__main__':
    unittest.main()
