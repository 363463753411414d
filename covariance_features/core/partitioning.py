"""
Podział zakresu identyfikatorów punktów na partycje

Stały, deterministyczny podział [0, N) na ciągłe, rozłączne zakresy
o (prawie) równej liczności - po jednym na wątek.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Partition:
    """Ciągły zakres punktów [start, end)"""
    partition_id: int
    start: int
    end: int

    @property
    def point_count(self) -> int:
        return self.end - self.start

    def __iter__(self):
        return iter(range(self.start, self.end))

    def __repr__(self):
        return f"Partition(id={self.partition_id}, [{self.start:,}, {self.end:,}))"


def partition_range(n_points: int, n_partitions: int) -> List[Partition]:
    """
    Dzieli [0, n_points) na n_partitions ciągłych zakresów

    Granice: start = t * N // T, end = (t + 1) * N // T (ostatnia kończy się na N).
    Przy N < T część partycji jest pusta.
    """
    if n_partitions < 1:
        raise ValueError(f"n_partitions musi być >= 1 (podano {n_partitions})")

    partitions = []
    for t in range(n_partitions):
        start = t * n_points // n_partitions
        end = n_points if t + 1 == n_partitions else (t + 1) * n_points // n_partitions
        partitions.append(Partition(partition_id=t, start=start, end=end))

    return partitions
