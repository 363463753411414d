"""
Katalog cech kowariancyjnych

Cechy wg Weinmann et al. / Guinard & Landrieu (2017):
- Linearity, Planarity, Scattering (wymiarowość)
- Verticality (ważona wektorami własnymi) i DemantkeVerticality (1 - |e3.z|)
- Omnivariance, Sum, Eigenentropy, Anisotropy, SurfaceVariation
- Density (tylko tryb OPTIMAL: OptimalKNN + OptimalRadius)

Każda cecha to czysta funkcja (λ, spektrum, aux) -> float.
Liczone są tylko cechy zamówione.
"""

import numpy as np
from scipy.special import entr
from typing import Callable, Dict, Iterable, Optional

from ..config import FeatureKind, ScaleMode
from .spectral import EigenSpectrum


def scale_eigenvalues(values: np.ndarray, mode: ScaleMode) -> np.ndarray:
    """
    Skaluje trójkę wartości własnych

    - RAW: bez zmian
    - SQRT: λi -> √λi (lepiej oddaje wymiarowość liniową, Gressin et al. 2012)
    - NORMALIZED: λi -> λi / (λ0 + λ1 + λ2), suma z wartości nieskalowanych
    """
    values = np.asarray(values, dtype=np.float64)

    if mode is ScaleMode.SQRT:
        return np.sqrt(values)
    if mode is ScaleMode.NORMALIZED:
        return values / values.sum()
    return values.copy()


def _linearity(lam, spectrum, aux):
    return (lam[0] - lam[1]) / lam[0]


def _planarity(lam, spectrum, aux):
    return (lam[1] - lam[2]) / lam[0]


def _scattering(lam, spectrum, aux):
    return lam[2] / lam[0]


def _verticality(lam, spectrum, aux):
    # u[oś] = λ0|e1| + λ1|e2| + λ2|e3|, znormalizowany; bierzemy składową z
    unary = np.abs(spectrum.vectors) @ lam
    return unary[2] / np.linalg.norm(unary)


def _omnivariance(lam, spectrum, aux):
    return np.cbrt(lam[0] * lam[1] * lam[2])


def _sum(lam, spectrum, aux):
    return spectrum.total


def _eigenentropy(lam, spectrum, aux):
    # entr(x) = -x ln x, entr(0) = 0
    return entr(lam).sum()


def _anisotropy(lam, spectrum, aux):
    return (lam[0] - lam[2]) / lam[0]


def _surface_variation(lam, spectrum, aux):
    return lam[2] / spectrum.total


def _demantke_verticality(lam, spectrum, aux):
    return 1.0 - abs(spectrum.e3[2])


def _density(lam, spectrum, aux):
    kopt = int(aux['kopt'])
    ropt = float(aux['ropt'])
    return (kopt + 1) / ((4.0 / 3.0) * np.pi * ropt ** 3)


FORMULAS: Dict[FeatureKind, Callable] = {
    FeatureKind.LINEARITY: _linearity,
    FeatureKind.PLANARITY: _planarity,
    FeatureKind.SCATTERING: _scattering,
    FeatureKind.VERTICALITY: _verticality,
    FeatureKind.OMNIVARIANCE: _omnivariance,
    FeatureKind.SUM: _sum,
    FeatureKind.EIGENENTROPY: _eigenentropy,
    FeatureKind.ANISOTROPY: _anisotropy,
    FeatureKind.SURFACE_VARIATION: _surface_variation,
    FeatureKind.DEMANTKE_VERTICALITY: _demantke_verticality,
    FeatureKind.DENSITY: _density,
}


class FeatureCatalog:
    """
    Oblicza zamówione cechy dla jednego spektrum

    Przykład użycia:
        catalog = FeatureCatalog(ScaleMode.SQRT)
        values = catalog.compute(spectrum, [FeatureKind.LINEARITY])
        # {'Linearity': 0.83}
    """

    def __init__(self, scale_mode: ScaleMode = ScaleMode.RAW):
        self.scale_mode = scale_mode

    def compute(self,
                spectrum: EigenSpectrum,
                requested: Iterable[FeatureKind],
                aux: Optional[Dict[str, float]] = None) -> Dict[str, float]:
        """
        Args:
            spectrum: Spektrum (λ malejąco, λ0 > 0)
            requested: Zamówione cechy
            aux: {'kopt', 'ropt'} - tylko w trybie OPTIMAL (wymagane dla Density)

        Returns:
            Dict {nazwa pola: wartość}
        """
        requested = set(requested)
        lam = scale_eigenvalues(spectrum.values, self.scale_mode)

        results = {}
        for kind in FeatureKind:
            if kind not in requested:
                continue
            if kind is FeatureKind.DENSITY and not _has_density_inputs(aux):
                continue
            results[kind.value] = float(FORMULAS[kind](lam, spectrum, aux))

        return results


def _has_density_inputs(aux: Optional[Dict[str, float]]) -> bool:
    return bool(aux) and 'kopt' in aux and 'ropt' in aux
