"""American Time Use Survey dataset."""
from .loader import ATUS
