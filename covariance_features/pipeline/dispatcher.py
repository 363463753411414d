"""
Równoległe przetwarzanie punktów (statyczne partycje)

Zakres [0, N) dzielony na `n_threads` ciągłych partycji - jedna partycja
na wątek, bez kolejki zadań per punkt. Wątek zapisuje tylko pola swoich
punktów, więc nie potrzeba locków. Błąd krytyczny w dowolnej partycji
zatrzymuje pozostałe i jest przekazywany do wywołującego.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, TypeVar
import threading
import logging

from ..core import Partition, partition_range

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ParallelPointDispatcher:
    """
    Uruchamia `worker(partition, stop_event)` dla każdej partycji

    n_threads = 1 -> wykonanie sekwencyjne w bieżącym wątku.
    Wyniki zwracane w kolejności partycji (niezależnie od kolejności zakończenia).
    """

    def __init__(self, n_threads: int = 1):
        if n_threads < 1:
            raise ValueError(f"n_threads musi być >= 1 (podano {n_threads})")
        self.n_threads = n_threads

    def run(self,
            n_points: int,
            worker: Callable[[Partition, threading.Event], T]) -> List[T]:
        partitions = partition_range(n_points, self.n_threads)
        stop_event = threading.Event()

        if self.n_threads == 1:
            logger.debug("  Przetwarzanie sekwencyjne...")
            return [worker(partition, stop_event) for partition in partitions]

        logger.debug(f"  Przetwarzanie równoległe ({self.n_threads} wątków)...")

        def partition_wrapper(partition: Partition) -> T:
            """Wrapper dla ThreadPoolExecutor - sygnalizuje błąd pozostałym"""
            try:
                return worker(partition, stop_event)
            except Exception as e:
                stop_event.set()
                logger.error(f"Błąd w partycji {partition.partition_id}: {e}")
                raise

        with ThreadPoolExecutor(max_workers=self.n_threads) as executor:
            futures = [executor.submit(partition_wrapper, p) for p in partitions]

            # Czekaj na wszystkie (join) zanim zgłosisz pierwszy błąd
            results = []
            first_error = None
            for future in futures:
                try:
                    results.append(future.result())
                except Exception as e:
                    if first_error is None:
                        first_error = e

        if first_error is not None:
            raise first_error

        return results
