"""
Konfiguracja filtra cech kowariancyjnych

Wszystkie opcje w jednym, niemutowalnym snapshocie budowanym raz przed
przetwarzaniem i przekazywanym (tylko do odczytu) do każdego wątku.

Rozpoznawane opcje:
    knn, threads, feature_set, features, stride, radius, min_k, mode, optimized
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple, Union
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# Pola wejściowe trybu "optimal" (liczone zewnętrznie)
OPTIMAL_KNN_FIELD = "OptimalKNN"
OPTIMAL_RADIUS_FIELD = "OptimalRadius"


class ScaleMode(Enum):
    """Skalowanie trójki wartości własnych przed wzorami cech"""
    RAW = "Raw"
    SQRT = "SQRT"
    NORMALIZED = "NORM"

    @classmethod
    def parse(cls, value: Union[str, "ScaleMode", None]) -> "ScaleMode":
        if value is None or value == "":
            return cls.RAW
        if isinstance(value, cls):
            return value

        aliases = {
            'raw': cls.RAW,
            'sqrt': cls.SQRT,
            'norm': cls.NORMALIZED,
            'normalized': cls.NORMALIZED,
        }
        mode = aliases.get(str(value).strip().lower())
        if mode is None:
            raise ConfigurationError(
                f"Nieznany tryb skalowania: {value!r} (dozwolone: Raw, SQRT, NORM)"
            )
        return mode


class FeatureKind(Enum):
    """Katalog cech - wartość = nazwa pola wyjściowego"""
    LINEARITY = "Linearity"
    PLANARITY = "Planarity"
    SCATTERING = "Scattering"
    VERTICALITY = "Verticality"
    OMNIVARIANCE = "Omnivariance"
    SUM = "Sum"
    EIGENENTROPY = "Eigenentropy"
    ANISOTROPY = "Anisotropy"
    SURFACE_VARIATION = "SurfaceVariation"
    DEMANTKE_VERTICALITY = "DemantkeVerticality"
    DENSITY = "Density"

    @classmethod
    def parse(cls, name: Union[str, "FeatureKind"]) -> "FeatureKind":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip())
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise ConfigurationError(
                f"Nieznana cecha: {name!r} (dostępne: {known})"
            ) from None


class NeighborhoodMode(Enum):
    """Sposób wyboru sąsiedztwa - dokładnie jeden aktywny na przebieg"""
    KNN = "knn"
    RADIUS = "radius"
    OPTIMAL = "optimal"


# Predefiniowane zestawy cech
DIMENSIONALITY_FEATURES: Tuple[FeatureKind, ...] = (
    FeatureKind.LINEARITY,
    FeatureKind.PLANARITY,
    FeatureKind.SCATTERING,
    FeatureKind.VERTICALITY,
)

FEATURE_SETS: Dict[str, Tuple[FeatureKind, ...]] = {
    'Dimensionality': DIMENSIONALITY_FEATURES,
    'All': tuple(FeatureKind),
}


@dataclass(frozen=True)
class NeighborhoodSpec:
    """Opis wyboru sąsiadów dla pojedynczego przebiegu"""
    mode: NeighborhoodMode = NeighborhoodMode.KNN
    knn: int = 10
    stride: int = 1
    radius: float = 0.0
    min_k: int = 3

    def __post_init__(self):
        if self.knn < 1:
            raise ConfigurationError(f"knn musi być >= 1 (podano {self.knn})")
        if self.stride < 1:
            raise ConfigurationError(f"stride musi być >= 1 (podano {self.stride})")
        if self.radius < 0:
            raise ConfigurationError(f"radius nie może być ujemny (podano {self.radius})")
        if self.mode is NeighborhoodMode.RADIUS and self.radius <= 0:
            raise ConfigurationError("Tryb radius wymaga radius > 0")


@dataclass(frozen=True)
class CovarianceFeaturesConfig:
    """
    Snapshot konfiguracji filtra

    Args:
        neighborhood: Wybór sąsiedztwa
        features: Cechy do obliczenia (w kolejności katalogu)
        scale_mode: Skalowanie wartości własnych
        threads: Liczba wątków (1 = sekwencyjnie)
        feature_set: Nazwa presetu (informacyjnie)
    """
    neighborhood: NeighborhoodSpec = field(default_factory=NeighborhoodSpec)
    features: Tuple[FeatureKind, ...] = DIMENSIONALITY_FEATURES
    scale_mode: ScaleMode = ScaleMode.SQRT
    threads: int = 1
    feature_set: Optional[str] = 'Dimensionality'

    def __post_init__(self):
        if self.threads < 1:
            raise ConfigurationError(f"threads musi być >= 1 (podano {self.threads})")
        if not self.features:
            raise ConfigurationError("Pusta lista cech")

    @property
    def optimal(self) -> bool:
        return self.neighborhood.mode is NeighborhoodMode.OPTIMAL

    @property
    def feature_names(self) -> Tuple[str, ...]:
        return tuple(kind.value for kind in self.features)

    @classmethod
    def from_options(cls, options: Optional[Dict] = None) -> "CovarianceFeaturesConfig":
        """
        Buduje konfigurację z opcji w stylu stage'a pipeline

        Lista `features` nadpisuje `feature_set` i wyłącza automatyczny
        wybór trybu skalowania. Preset "Dimensionality" wymusza SQRT.
        """
        options = dict(options or {})

        knn = int(options.get('knn', 10))
        threads = int(options.get('threads', 1))
        stride = int(options.get('stride', 1))
        radius = float(options.get('radius', 0.0))
        min_k = int(options.get('min_k', 3))
        optimized = _parse_bool(options.get('optimized', False))
        feature_set = options.get('feature_set', 'Dimensionality')
        mode = ScaleMode.parse(options.get('mode'))

        if optimized:
            nb_mode = NeighborhoodMode.OPTIMAL
        elif radius > 0:
            nb_mode = NeighborhoodMode.RADIUS
        else:
            nb_mode = NeighborhoodMode.KNN

        neighborhood = NeighborhoodSpec(
            mode=nb_mode,
            knn=knn,
            stride=stride,
            radius=radius,
            min_k=min_k
        )

        if nb_mode is NeighborhoodMode.KNN and knn < min_k:
            logger.warning(f"knn={knn} < min_k={min_k}: wszystkie punkty zostaną pominięte")

        requested = options.get('features')
        if requested:
            features = _parse_features(requested)
            logger.info(f"Podano listę cech. Ignoruję feature_set {feature_set}.")
            feature_set = None
        else:
            if feature_set not in FEATURE_SETS:
                known = ", ".join(FEATURE_SETS)
                raise ConfigurationError(
                    f"Nieznany feature_set: {feature_set!r} (dostępne: {known})"
                )
            features = FEATURE_SETS[feature_set]
            if feature_set == 'Dimensionality':
                mode = ScaleMode.SQRT

        return cls(
            neighborhood=neighborhood,
            features=features,
            scale_mode=mode,
            threads=threads,
            feature_set=feature_set
        )


def _parse_features(requested: Union[str, Iterable]) -> Tuple[FeatureKind, ...]:
    """Nazwy cech -> FeatureKind, bez duplikatów, w kolejności katalogu"""
    if isinstance(requested, str):
        requested = [name for name in requested.split(',') if name.strip()]

    kinds = {FeatureKind.parse(name) for name in requested}
    return tuple(kind for kind in FeatureKind if kind in kinds)


def _parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


# Singleton z domyślną konfiguracją
DEFAULTS = CovarianceFeaturesConfig()
