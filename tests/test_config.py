"""
Tests for option parsing into the immutable configuration snapshot
"""

import dataclasses

import pytest

from covariance_features.config import (
    DEFAULTS,
    CovarianceFeaturesConfig,
    FeatureKind,
    NeighborhoodMode,
    ScaleMode,
)
from covariance_features.errors import ConfigurationError


def test_defaults():
    config = CovarianceFeaturesConfig.from_options({})

    assert config == DEFAULTS
    assert config.neighborhood.mode is NeighborhoodMode.KNN
    assert config.neighborhood.knn == 10
    assert config.neighborhood.stride == 1
    assert config.neighborhood.min_k == 3
    assert config.threads == 1
    assert config.feature_names == ('Linearity', 'Planarity', 'Scattering', 'Verticality')
    assert config.scale_mode is ScaleMode.SQRT


def test_dimensionality_preset_forces_sqrt():
    config = CovarianceFeaturesConfig.from_options({'mode': 'NORM'})
    assert config.scale_mode is ScaleMode.SQRT


def test_all_preset_uses_mode_option():
    config = CovarianceFeaturesConfig.from_options({'feature_set': 'All', 'mode': 'NORM'})

    assert config.features == tuple(FeatureKind)
    assert config.scale_mode is ScaleMode.NORMALIZED

    config = CovarianceFeaturesConfig.from_options({'feature_set': 'All'})
    assert config.scale_mode is ScaleMode.RAW


def test_explicit_features_override_preset():
    config = CovarianceFeaturesConfig.from_options({
        'feature_set': 'Dimensionality',
        'features': ['Sum', 'Linearity', 'Sum'],
    })

    assert config.features == (FeatureKind.LINEARITY, FeatureKind.SUM)
    assert config.scale_mode is ScaleMode.RAW
    assert config.feature_set is None


def test_features_from_comma_string():
    config = CovarianceFeaturesConfig.from_options({
        'features': 'Eigenentropy, Omnivariance',
        'mode': 'sqrt',
    })

    assert config.feature_names == ('Omnivariance', 'Eigenentropy')
    assert config.scale_mode is ScaleMode.SQRT


def test_neighborhood_mode_selection():
    radius = CovarianceFeaturesConfig.from_options({'radius': 1.5, 'min_k': 5})
    assert radius.neighborhood.mode is NeighborhoodMode.RADIUS
    assert radius.neighborhood.min_k == 5

    optimal = CovarianceFeaturesConfig.from_options({'radius': 1.5, 'optimized': 'true'})
    assert optimal.neighborhood.mode is NeighborhoodMode.OPTIMAL
    assert optimal.optimal


@pytest.mark.parametrize("options", [
    {'features': ['Linearity', 'Curvature']},
    {'feature_set': 'Everything'},
    {'mode': 'log'},
    {'threads': 0},
    {'knn': 0},
    {'stride': 0},
    {'radius': -1.0},
])
def test_invalid_options(options):
    with pytest.raises(ConfigurationError):
        CovarianceFeaturesConfig.from_options(options)


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULTS.threads = 8


def test_scale_mode_aliases():
    assert ScaleMode.parse(None) is ScaleMode.RAW
    assert ScaleMode.parse('Raw') is ScaleMode.RAW
    assert ScaleMode.parse('Normalized') is ScaleMode.NORMALIZED
    assert ScaleMode.parse(ScaleMode.SQRT) is ScaleMode.SQRT
