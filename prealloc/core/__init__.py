from .config import PreallocConfig
from .controller import ConvergenceController, ConvergenceResult, Direction
from .errors import ConfigurationError, PreallocError, StatisticsError, StorageIOError

__all__ = [
    'PreallocConfig',
    'ConvergenceController',
    'ConvergenceResult',
    'Direction',
    'PreallocError',
    'ConfigurationError',
    'StorageIOError',
    'StatisticsError',
]
