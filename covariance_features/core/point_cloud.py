"""
Kontener chmury punktów w pamięci

Pozycje XYZ + nazwane pola per-punkt (np. OptimalKNN, Linearity).
Filtr tylko czyta i zapisuje pola po nazwie - nigdy nie dodaje ani nie
usuwa punktów.
"""

import numpy as np
from typing import Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class PointCloud:
    """
    Chmura punktów: współrzędne (N, 3) + słownik pól (N,)

    Zapis do różnych punktów z różnych wątków jest bezpieczny
    (każdy wątek pisze tylko do swoich indeksów).
    """

    def __init__(self,
                 coords: np.ndarray,
                 fields: Optional[Dict[str, np.ndarray]] = None):
        """
        Args:
            coords: (N, 3) Współrzędne XYZ
            fields: Opcjonalne pola wejściowe {nazwa: (N,) tablica}
        """
        coords = np.asarray(coords, dtype=np.float64)
        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError(f"Oczekiwano współrzędnych (N, 3), otrzymano {coords.shape}")

        self.coords = coords
        self.n_points = len(coords)
        self._fields: Dict[str, np.ndarray] = {}

        for name, values in (fields or {}).items():
            values = np.asarray(values)
            if values.shape != (self.n_points,):
                raise ValueError(f"Pole {name}: oczekiwano ({self.n_points},), "
                                 f"otrzymano {values.shape}")
            self._fields[name] = values

    def __len__(self):
        return self.n_points

    def __repr__(self):
        return f"PointCloud(points={self.n_points:,}, fields={list(self._fields)})"

    def size(self) -> int:
        return self.n_points

    def position(self, point_id: int) -> np.ndarray:
        return self.coords[point_id]

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self._fields)

    def has_field(self, name: str) -> bool:
        return name in self._fields

    def register_field(self, name: str, dtype=np.float64) -> np.ndarray:
        """
        Rejestruje pole wyjściowe lub zwraca istniejące (register-or-assign)

        Nowe pole zmiennoprzecinkowe startuje jako NaN = "nieustawione".
        """
        if name in self._fields:
            return self._fields[name]

        dtype = np.dtype(dtype)
        if np.issubdtype(dtype, np.floating):
            values = np.full(self.n_points, np.nan, dtype=dtype)
        else:
            values = np.zeros(self.n_points, dtype=dtype)

        self._fields[name] = values
        logger.debug(f"Zarejestrowano pole {name} ({dtype})")
        return values

    def field(self, name: str) -> np.ndarray:
        try:
            return self._fields[name]
        except KeyError:
            raise KeyError(f"Brak pola: {name}") from None

    def get_field(self, point_id: int, name: str):
        return self.field(name)[point_id]

    def set_field(self, point_id: int, name: str, value) -> None:
        self.field(name)[point_id] = value
