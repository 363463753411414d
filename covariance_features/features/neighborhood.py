"""
Wybór sąsiedztwa punktu

Trzy tryby (dokładnie jeden aktywny):
- KNN: k+1 najbliższych (z krokiem stride) - punkt zapytania jest
  dodatkowym sąsiadem i zostaje odrzucony dopiero przy kowariancji
- RADIUS: wszystkie punkty w promieniu
- OPTIMAL: k = OptimalKNN danego punktu, stride 1

We wszystkich trybach: mniej niż min_k punktów do kowariancji =
sąsiedztwo niewystarczające (bez wyjątku, punkt pomijany).
"""

from dataclasses import dataclass
from typing import List

from ..config import NeighborhoodMode, NeighborhoodSpec, OPTIMAL_KNN_FIELD
from ..core import KDIndex, PointCloud


@dataclass(frozen=True)
class Neighborhood:
    """Sąsiedztwo punktu zapytania (tymczasowe, liczone per punkt)"""
    query_id: int
    ids: List[int]
    includes_query: bool = False
    sufficient: bool = True

    def __len__(self):
        return len(self.ids)

    @property
    def n_neighbors(self) -> int:
        """Liczba punktów, które trafią do kowariancji"""
        if self.includes_query and self.ids:
            return len(self.ids) - 1
        return len(self.ids)


class NeighborhoodResolver:
    """Zwraca uporządkowaną listę sąsiadów wg NeighborhoodSpec"""

    def __init__(self, cloud: PointCloud, index: KDIndex, spec: NeighborhoodSpec):
        self.cloud = cloud
        self.index = index
        self.spec = spec

    def resolve(self, query_id: int) -> Neighborhood:
        spec = self.spec

        if spec.mode is NeighborhoodMode.OPTIMAL:
            k = int(self.cloud.get_field(query_id, OPTIMAL_KNN_FIELD))
            ids = self.index.k_nearest(query_id, k, 1)
            includes_query = False
        elif spec.mode is NeighborhoodMode.RADIUS:
            ids = self.index.radius(query_id, spec.radius)
            includes_query = False
        else:
            # +1: punkt zapytania jest swoim najbliższym sąsiadem
            ids = self.index.k_nearest(query_id, spec.knn + 1, spec.stride)
            includes_query = True

        neighborhood = Neighborhood(query_id=query_id, ids=ids, includes_query=includes_query)
        if neighborhood.n_neighbors < spec.min_k:
            return Neighborhood(
                query_id=query_id,
                ids=ids,
                includes_query=includes_query,
                sufficient=False
            )
        return neighborhood
