"""
Wyjątki modułu cech kowariancyjnych

- ConfigurationError: błędna konfiguracja (zgłaszany przed przetwarzaniem)
- DecompositionFailure: solver wartości własnych nie zbiegł (przerywa cały przebieg)
- DegenerateSpectrum: największa wartość własna = 0 (przerywa cały przebieg)

Za mała liczba sąsiadów NIE jest wyjątkiem - patrz Neighborhood.sufficient.
"""


class CovarianceFeaturesError(Exception):
    """Bazowy wyjątek pakietu"""


class ConfigurationError(CovarianceFeaturesError, ValueError):
    """Nieprawidłowe opcje lub brak wymaganych pól wejściowych"""


class DecompositionFailure(CovarianceFeaturesError, RuntimeError):
    """Dekompozycja macierzy kowariancji nie powiodła się"""

    def __init__(self, message: str, point_id: int = None):
        super().__init__(message)
        self.point_id = point_id


class DegenerateSpectrum(CovarianceFeaturesError, RuntimeError):
    """Wszystkie wartości własne są zerowe - cechy niezdefiniowane"""

    def __init__(self, message: str, point_id: int = None):
        super().__init__(message)
        self.point_id = point_id
