"""
Dekompozycja spektralna macierzy kowariancji

np.linalg.eigh zwraca wartości rosnąco - tu odwracamy kolejność
(największa pierwsza) i obcinamy ujemny szum numeryczny do 0.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from ..errors import DecompositionFailure, DegenerateSpectrum


@dataclass(frozen=True)
class EigenSpectrum:
    """
    Wartości i wektory własne w kolejności malejącej

    Attributes:
        values: (3,) λ0 >= λ1 >= λ2 >= 0
        vectors: (3, 3) kolumna i = jednostkowy wektor własny dla λi
        total: λ0 + λ1 + λ2 (przed jakimkolwiek skalowaniem)
    """
    values: np.ndarray
    vectors: np.ndarray
    total: float

    @property
    def e1(self) -> np.ndarray:
        return self.vectors[:, 0]

    @property
    def e2(self) -> np.ndarray:
        return self.vectors[:, 1]

    @property
    def e3(self) -> np.ndarray:
        return self.vectors[:, 2]

    def reconstruct(self) -> np.ndarray:
        """V · diag(λ) · Vᵗ"""
        return self.vectors @ np.diag(self.values) @ self.vectors.T


class SpectralDecomposer:
    """Symetryczna macierz 3x3 -> EigenSpectrum"""

    def decompose(self, matrix: np.ndarray, point_id: Optional[int] = None) -> EigenSpectrum:
        """
        Args:
            matrix: (3, 3) Macierz kowariancji
            point_id: Id punktu (tylko do komunikatów błędów)

        Raises:
            DecompositionFailure: solver nie zbiegł lub dane nieskończone
            DegenerateSpectrum: λ0 == 0 po obcięciu
        """
        where = f" (punkt {point_id})" if point_id is not None else ""

        if not np.all(np.isfinite(matrix)):
            raise DecompositionFailure(
                f"Nie można wykonać dekompozycji: macierz zawiera NaN/Inf{where}",
                point_id
            )

        try:
            eigenvalues, eigenvectors = np.linalg.eigh(matrix)
        except np.linalg.LinAlgError as e:
            raise DecompositionFailure(
                f"Nie można wykonać dekompozycji: {e}{where}", point_id
            ) from e

        # Sortuj malejąco (stabilnie przy równych wartościach)
        order = np.argsort(-eigenvalues, kind='stable')
        values = np.maximum(eigenvalues[order], 0.0)
        vectors = eigenvectors[:, order]

        if values[0] == 0:
            raise DegenerateSpectrum(
                f"Wszystkie wartości własne = 0, nie można obliczyć cech{where}",
                point_id
            )

        return EigenSpectrum(values=values, vectors=vectors, total=float(values.sum()))
