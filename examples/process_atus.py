import os
import sys

sys.path.insert(1, os.path.join(sys.path[0], '..'))

import numpy as np

from daymod.datasets.ATUS.loader import ATUS
from daymod.simulators.activity_simulators import BlockMarkovChain
from daymod.simulators.base_simulators import SimLogger
from daymod.utils.categories import ActivityCategory

# The raw data must be in daymod/datasets/ATUS/raw_data/timedata.csv
# or in the folder given as first argument.
data_path = sys.argv[1] if len(sys.argv) > 1 else None
loader = ATUS(block_duration=15, data_path=data_path)

# Each call parses the previous step if it is not in parsed_data
blocks = loader.load_blocks()
print('Loaded {} days of {} blocks.'.format(*blocks.shape))

cdfs, labels, initial_pdf = loader.load_transition_cdfs()
print('Activities at the first block:')
for label, p in zip(labels, initial_pdf):
    print('  {:<22} {:.3f}'.format(label, p))

# Simulates a population with the estimated transitions
sim = BlockMarkovChain(
    1000, cdfs, labels=labels,
    logger=SimLogger('get_current_states')
)
sim.initialize_starting_state(starting_state_pdf=initial_pdf)
for _ in range(loader.blocks_per_day - 1):
    sim.step()

states = sim.logger.get()
sleeping = np.mean(states == ActivityCategory.SLEEPING, axis=1)
for hour in range(0, 24, 3):
    block = hour * 60 // loader.block_duration
    print('{:02d}:00 sleeping: {:.1%}'.format(hour, sleeping[block]))

# The days of the first subjects, every 3 hours
days = sim.logger.to_dataframe(labels=labels)
print(days.iloc[::12, :3])

