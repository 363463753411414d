"""
Macierz kowariancji sąsiedztwa (3x3)

Środek = centroid sąsiedztwa (nie punkt zapytania), jak w lokalnym PCA.
Dwuprzebiegowo z przesunięciem do pierwszego punktu - stabilne także dla
dużych współrzędnych (np. układ PL-2000).
"""

import numpy as np
from typing import List

from ..core import PointCloud
from .neighborhood import Neighborhood


class CovarianceBuilder:
    """Buduje próbkową macierz kowariancji pozycji sąsiadów"""

    def __init__(self, cloud: PointCloud):
        self.cloud = cloud

    def build(self, neighborhood: Neighborhood) -> np.ndarray:
        """
        Args:
            neighborhood: Sąsiedztwo z NeighborhoodResolver

        Returns:
            (3, 3) Symetryczna macierz kowariancji (PSD)
        """
        ids = self.neighbor_ids(neighborhood)
        return self.covariance(self.cloud.coords[ids])

    @staticmethod
    def neighbor_ids(neighborhood: Neighborhood) -> List[int]:
        """Sąsiedzi bez dodatkowego punktu zapytania (tryb KNN)"""
        ids = list(neighborhood.ids)
        if not neighborhood.includes_query or not ids:
            return ids

        if neighborhood.query_id in ids:
            ids.remove(neighborhood.query_id)
        else:
            # Duplikaty pozycji: zapytanie mogło wypaść - odrzuć najdalszego
            ids.pop()
        return ids

    @staticmethod
    def covariance(points: np.ndarray) -> np.ndarray:
        """(M, 3) -> (3, 3), dzielnik M-1"""
        n = len(points)
        if n == 0:
            return np.zeros((3, 3))

        # Przesunięcie do pierwszego punktu: identyczne punkty -> dokładnie 0
        offsets = points - points[0]
        centered = offsets - offsets.mean(axis=0)
        cov = (centered.T @ centered) / max(n - 1, 1)

        # Wymuś dokładną symetrię
        return (cov + cov.T) / 2
