import os
import sys

sys.path.insert(1, os.path.join(sys.path[0], '..'))

from daymod.datasets.ATUS.loader import ATUS
from daymod.simulators.day_forecasters import (
    MarkovChainForecaster, RandomForecaster
)
from daymod.utils.categories import ActivityCategory, display_label

data_path = sys.argv[1] if len(sys.argv) > 1 else None
loader = ATUS(block_duration=15, data_path=data_path)
cdfs, labels, initial_pdf = loader.load_transition_cdfs()

# A morning: sleeping until 7:00, personal care and travel to work
observed = (
    [ActivityCategory.SLEEPING] * 28
    + [ActivityCategory.PERSONAL_CARE] * 2
    + [ActivityCategory.TRAVEL] * 2
)

for forecaster in (MarkovChainForecaster(cdfs, initial_pdf), RandomForecaster()):
    print(type(forecaster).__name__)
    forecasts = forecaster.forecast(observed, 5)
    for forecast in sorted(forecasts, key=lambda f: -f.certainty):
        next_hour = [display_label(c) for c in forecast.prediction[:4]]
        print('  {:.3f} {}'.format(forecast.certainty, ', '.join(next_hour)))
