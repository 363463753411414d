"""
Moduły podstawowe (core)

- PointCloud: Chmura punktów w pamięci (pozycje + pola)
- KDIndex: Indeks przestrzenny (k-NN, radius)
- Partition / partition_range: Podział punktów na zakresy dla wątków
"""

from .point_cloud import PointCloud
from .spatial_index import KDIndex
from .partitioning import Partition, partition_range

__all__ = [
    'PointCloud',
    'KDIndex',
    'Partition',
    'partition_range'
]
