"""
Indeks przestrzenny chmury punktów (scipy cKDTree)

Budowany raz na przebieg i czytany współbieżnie przez wszystkie wątki.
Drzewo i współrzędne nie mogą się zmieniać w trakcie obliczania cech.
"""

import numpy as np
from scipy.spatial import cKDTree
from typing import List
import logging

from .point_cloud import PointCloud

logger = logging.getLogger(__name__)


class KDIndex:
    """
    KD-tree 3D - zapytania k-NN i radius po id punktu

    Przykład użycia:
        index = KDIndex(cloud)
        ids = index.k_nearest(42, k=11, stride=2)
    """

    def __init__(self, cloud: PointCloud):
        self.cloud = cloud
        self.n_points = cloud.size()
        self.kdtree = cKDTree(cloud.coords)

        logger.info(f"KDIndex: {self.n_points:,} punktów")

    def k_nearest(self, point_id: int, k: int, stride: int = 1) -> List[int]:
        """
        Uporządkowane id k najbliższych sąsiadów, co stride-ty kandydat

        Pobiera k * stride kandydatów (najbliżsi pierwsi) i zostawia
        kandydatów 0, stride, 2 * stride, ... Punkt zapytania jest zwykle
        pierwszym kandydatem. Dla małej chmury zwraca mniej niż k id.
        """
        if k <= 0 or self.n_points == 0:
            return []

        n_candidates = min(k * stride, self.n_points)
        _, idx = self.kdtree.query(self.cloud.position(point_id), k=n_candidates)
        idx = np.atleast_1d(idx)

        # cKDTree uzupełnia brakujących sąsiadów wartością n_points
        idx = idx[idx < self.n_points]
        return idx[::stride][:k].tolist()

    def radius(self, point_id: int, radius: float) -> List[int]:
        """Id wszystkich punktów w promieniu (łącznie z punktem zapytania)"""
        return self.kdtree.query_ball_point(self.cloud.position(point_id), radius)
