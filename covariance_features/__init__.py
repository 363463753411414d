"""
Covariance Features - lokalne cechy geometryczne chmur punktów

Moduły:
- core: Chmura punktów, indeks przestrzenny, partycjonowanie
- features: Sąsiedztwo, kowariancja, dekompozycja, katalog cech
- pipeline: Filtr + równoległe przetwarzanie

Przykład użycia:
    from covariance_features import CovarianceFeaturesFilter, PointCloud

    cloud = PointCloud(coords)
    stats = CovarianceFeaturesFilter({'knn': 10, 'threads': 4}).run(cloud)
"""

from .config import (
    CovarianceFeaturesConfig,
    FeatureKind,
    NeighborhoodMode,
    NeighborhoodSpec,
    ScaleMode,
)
from .errors import (
    ConfigurationError,
    CovarianceFeaturesError,
    DecompositionFailure,
    DegenerateSpectrum,
)
from .core import KDIndex, PointCloud
from .features import (
    CovarianceBuilder,
    EigenSpectrum,
    FeatureCatalog,
    NeighborhoodResolver,
    SpectralDecomposer,
)
from .pipeline import CovarianceFeaturesFilter, ParallelPointDispatcher

__version__ = "1.0.0"
__all__ = [
    'CovarianceFeaturesConfig',
    'FeatureKind',
    'NeighborhoodMode',
    'NeighborhoodSpec',
    'ScaleMode',
    'ConfigurationError',
    'CovarianceFeaturesError',
    'DecompositionFailure',
    'DegenerateSpectrum',
    'KDIndex',
    'PointCloud',
    'CovarianceBuilder',
    'EigenSpectrum',
    'FeatureCatalog',
    'NeighborhoodResolver',
    'SpectralDecomposer',
    'CovarianceFeaturesFilter',
    'ParallelPointDispatcher'
]
