"""
Pipeline cech kowariancyjnych

- CovarianceFeaturesFilter: Orchestrator (rejestracja pól, walidacja, obliczenia)
- ParallelPointDispatcher: Statyczny podział punktów na wątki
"""

from .covariance_filter import CovarianceFeaturesFilter, PartitionStats
from .dispatcher import ParallelPointDispatcher

__all__ = [
    'CovarianceFeaturesFilter',
    'PartitionStats',
    'ParallelPointDispatcher'
]
