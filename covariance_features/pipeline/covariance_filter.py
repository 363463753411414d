"""
Filtr cech kowariancyjnych - orchestrator

Dla każdego punktu:
    sąsiedztwo -> kowariancja -> wartości/wektory własne -> cechy -> zapis do pól

Implementacja deskryptorów lokalnych z:
    Guinard, Landrieu (2017) "Weakly supervised segmentation-aided
    classification of urban scenes from 3D LiDAR point clouds"
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, Optional, Union
import threading
import time
import logging

from ..config import (
    CovarianceFeaturesConfig,
    OPTIMAL_KNN_FIELD,
    OPTIMAL_RADIUS_FIELD,
)
from ..core import KDIndex, Partition, PointCloud
from ..errors import ConfigurationError
from ..features import (
    CovarianceBuilder,
    FeatureCatalog,
    NeighborhoodResolver,
    SpectralDecomposer,
)
from .dispatcher import ParallelPointDispatcher

logger = logging.getLogger(__name__)


@dataclass
class PartitionStats:
    """Liczniki jednej partycji (bez współdzielonego stanu między wątkami)"""
    partition_id: int
    n_computed: int = 0
    n_skipped: int = 0


class CovarianceFeaturesFilter:
    """
    Oblicza cechy kowariancyjne dla wszystkich punktów chmury

    Przykład użycia:
        cloud = PointCloud(coords)
        stats = CovarianceFeaturesFilter({'knn': 10, 'threads': 4}).run(cloud)
        linearity = cloud.field('Linearity')

    Punkty z za małym sąsiedztwem (tryb radius) zostają pominięte
    (pola = NaN). DecompositionFailure / DegenerateSpectrum przerywają cały przebieg.
    """

    def __init__(self, config: Union[CovarianceFeaturesConfig, Dict, None] = None):
        """
        Args:
            config: CovarianceFeaturesConfig lub dict opcji (knn, threads, ...)
        """
        if not isinstance(config, CovarianceFeaturesConfig):
            config = CovarianceFeaturesConfig.from_options(config)
        self.config = config

        nb = config.neighborhood
        logger.info(f"CovarianceFeaturesFilter zainicjalizowany:")
        logger.info(f"  Sąsiedztwo: {nb.mode.value} (knn={nb.knn}, stride={nb.stride}, "
                    f"radius={nb.radius}, min_k={nb.min_k})")
        logger.info(f"  Cechy: {', '.join(config.feature_names)}")
        logger.info(f"  Skalowanie: {config.scale_mode.value}")
        logger.info(f"  Wątki: {config.threads}")

    def add_dimensions(self, cloud: PointCloud) -> Dict[str, np.ndarray]:
        """Rejestruje pola wyjściowe (raz, przed przetwarzaniem)"""
        return {name: cloud.register_field(name) for name in self.config.feature_names}

    def prepare(self, cloud: PointCloud) -> None:
        """
        Walidacja przed przetwarzaniem

        Raises:
            ConfigurationError: brak OptimalKNN / OptimalRadius w trybie optimal
        """
        if not self.config.optimal:
            return

        for name in (OPTIMAL_KNN_FIELD, OPTIMAL_RADIUS_FIELD):
            if not cloud.has_field(name):
                raise ConfigurationError(f"Brak pola \"{name}\".")

    def run(self, cloud: PointCloud, index: Optional[KDIndex] = None) -> Dict:
        """
        Uruchamia filtr na całej chmurze (zapis in-place do pól chmury)

        Args:
            cloud: Chmura punktów
            index: Gotowy indeks przestrzenny (None = zbuduj)

        Returns:
            Dict ze statystykami:
                - n_points, n_computed, n_skipped, n_partitions
                - processing_time, points_per_second
                - features, scale_mode
        """
        start_time = time.time()
        logger.info(f"Obliczanie cech kowariancyjnych: {cloud.size():,} punktów")

        self.prepare(cloud)
        self.add_dimensions(cloud)

        if index is None:
            index = KDIndex(cloud)

        worker = _PointWorker(cloud, index, self.config)
        dispatcher = ParallelPointDispatcher(self.config.threads)
        partition_stats = dispatcher.run(cloud.size(), worker)

        processing_time = time.time() - start_time
        n_computed = sum(s.n_computed for s in partition_stats)
        n_skipped = sum(s.n_skipped for s in partition_stats)

        stats = {
            'n_points': cloud.size(),
            'n_computed': n_computed,
            'n_skipped': n_skipped,
            'n_partitions': len(partition_stats),
            'processing_time': processing_time,
            'points_per_second': cloud.size() / processing_time if processing_time > 0 else 0.0,
            'features': list(self.config.feature_names),
            'scale_mode': self.config.scale_mode.value
        }

        logger.info(f"Cechy obliczone: {n_computed:,} punktów, pominięto {n_skipped:,}")
        logger.info(f"  Czas: {processing_time:.2f}s ({stats['points_per_second']:,.0f} pkt/s)")

        return stats


class _PointWorker:
    """
    Pipeline pojedynczego punktu, wywoływany per partycja

    Współdzielone (tylko odczyt): chmura, indeks, konfiguracja.
    Zapis: wyłącznie pola punktów z własnej partycji.
    """

    def __init__(self, cloud: PointCloud, index: KDIndex, config: CovarianceFeaturesConfig):
        self.cloud = cloud
        self.config = config
        self.resolver = NeighborhoodResolver(cloud, index, config.neighborhood)
        self.builder = CovarianceBuilder(cloud)
        self.decomposer = SpectralDecomposer()
        self.catalog = FeatureCatalog(config.scale_mode)
        self.outputs = {name: cloud.field(name) for name in config.feature_names}

    def __call__(self, partition: Partition, stop_event: threading.Event) -> PartitionStats:
        stats = PartitionStats(partition.partition_id)

        for point_id in partition:
            if stop_event.is_set():
                break

            if self.process_point(point_id):
                stats.n_computed += 1
            else:
                stats.n_skipped += 1

        logger.debug(f"  ✓ {partition}: {stats.n_computed:,} obliczonych, "
                     f"{stats.n_skipped:,} pominiętych")
        return stats

    def process_point(self, point_id: int) -> bool:
        """Zwraca False gdy sąsiedztwo niewystarczające (pola nietknięte)"""
        neighborhood = self.resolver.resolve(point_id)
        if not neighborhood.sufficient:
            return False

        matrix = self.builder.build(neighborhood)
        spectrum = self.decomposer.decompose(matrix, point_id)

        aux = None
        if self.config.optimal:
            aux = {
                'kopt': self.cloud.get_field(point_id, OPTIMAL_KNN_FIELD),
                'ropt': self.cloud.get_field(point_id, OPTIMAL_RADIUS_FIELD),
            }

        values = self.catalog.compute(spectrum, self.config.features, aux)
        for name, value in values.items():
            self.outputs[name][point_id] = value

        return True
