"""
Moduły obliczania cech kowariancyjnych (per punkt)

- NeighborhoodResolver: Wybór sąsiedztwa (KNN / radius / optimal)
- CovarianceBuilder: Macierz kowariancji 3x3
- SpectralDecomposer: Wartości i wektory własne (malejąco)
- FeatureCatalog: Linearity, Planarity, Scattering, Verticality, ...
"""

from .neighborhood import Neighborhood, NeighborhoodResolver
from .covariance import CovarianceBuilder
from .spectral import EigenSpectrum, SpectralDecomposer
from .catalog import FeatureCatalog, FORMULAS, scale_eigenvalues

__all__ = [
    'Neighborhood',
    'NeighborhoodResolver',
    'CovarianceBuilder',
    'EigenSpectrum',
    'SpectralDecomposer',
    'FeatureCatalog',
    'FORMULAS',
    'scale_eigenvalues'
]
