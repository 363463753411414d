#!/usr/bin/env python3
"""
Covariance Features Benchmark - Test wydajnosci filtra

Syntetyczna chmura (plaszczyzna + linia + szum objetosciowy), kilka
liczb watkow, porownanie wynikow miedzy przebiegami.

Uruchom:
    python benchmark.py                        # 50k punktow, watki 1,2,4
    python benchmark.py --quick                # Szybki test (10k punktow)
    python benchmark.py --points 500000 --threads 1 8
    python benchmark.py --feature-set All --json wyniki.json
"""

import argparse
import sys
import time
import json
import logging
from pathlib import Path
from datetime import datetime
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

sys.path.insert(0, str(Path(__file__).parent))

import numpy as np

from covariance_features import CovarianceFeaturesFilter, PointCloud


@dataclass
class BenchmarkResult:
    """Wynik pojedynczego przebiegu"""
    n_points: int
    threads: int
    processing_time: float
    points_per_second: float
    n_computed: int
    n_skipped: int
    identical_to_baseline: bool


def make_synthetic_cloud(n_points: int, seed: int = 0) -> np.ndarray:
    """
    Generuje chmure testowa (N, 3)

    40% plaszczyzna z=0, 30% linia wzdluz X, 30% szum w szescianie 10m.
    """
    rng = np.random.default_rng(seed)
    n_plane = int(n_points * 0.4)
    n_line = int(n_points * 0.3)
    n_scatter = n_points - n_plane - n_line

    plane = np.column_stack([
        rng.uniform(0, 50, n_plane),
        rng.uniform(0, 50, n_plane),
        rng.normal(0, 0.01, n_plane)
    ])
    line = np.column_stack([
        rng.uniform(60, 110, n_line),
        rng.normal(25, 0.01, n_line),
        rng.normal(5, 0.01, n_line)
    ])
    scatter = rng.uniform(0, 10, (n_scatter, 3)) + np.array([120.0, 0.0, 0.0])

    return np.vstack([plane, line, scatter])


def run_benchmark(coords: np.ndarray,
                  options: Dict,
                  threads: int,
                  baseline: Optional[Dict[str, np.ndarray]] = None):
    """
    Uruchamia filtr z dana liczba watkow

    Returns:
        (BenchmarkResult, wyniki {cecha: (N,)})
    """
    cloud = PointCloud(coords)
    filt = CovarianceFeaturesFilter({**options, 'threads': threads})

    start_time = time.perf_counter()
    stats = filt.run(cloud)
    elapsed = time.perf_counter() - start_time

    outputs = {name: cloud.field(name).copy() for name in stats['features']}

    identical = True
    if baseline is not None:
        identical = all(
            np.array_equal(outputs[name], baseline[name], equal_nan=True)
            for name in outputs
        )

    result = BenchmarkResult(
        n_points=len(coords),
        threads=threads,
        processing_time=elapsed,
        points_per_second=len(coords) / elapsed,
        n_computed=stats['n_computed'],
        n_skipped=stats['n_skipped'],
        identical_to_baseline=identical
    )
    return result, outputs


def print_result(result: BenchmarkResult):
    """Drukuje wynik przebiegu"""
    status = "OK" if result.identical_to_baseline else "ROZNICA!"
    print(f"  Watki: {result.threads:>2} | "
          f"Czas: {result.processing_time:8.2f} s | "
          f"Predkosc: {result.points_per_second:>10,.0f} pkt/s | "
          f"Pominiete: {result.n_skipped:,} | {status}")


def main():
    parser = argparse.ArgumentParser(
        description="Covariance Features Benchmark - Test wydajnosci"
    )

    parser.add_argument(
        "--points", "-n",
        type=int,
        default=50_000,
        help="Liczba punktow chmury syntetycznej (default: 50000)"
    )

    parser.add_argument(
        "--quick", "-q",
        action="store_true",
        help="Szybki test (10k punktow)"
    )

    parser.add_argument(
        "--threads", "-t",
        type=int,
        nargs='+',
        default=[1, 2, 4],
        help="Liczby watkow do porownania (default: 1 2 4)"
    )

    parser.add_argument("--knn", type=int, default=10, help="k najblizszych sasiadow")
    parser.add_argument("--radius", type=float, default=0.0, help="Promien (0 = tryb knn)")
    parser.add_argument("--stride", type=int, default=1, help="Krok sasiadow")

    parser.add_argument(
        "--feature-set",
        choices=["Dimensionality", "All"],
        default="Dimensionality",
        help="Zestaw cech (default: Dimensionality)"
    )

    parser.add_argument(
        "--json", "-j",
        type=str,
        default=None,
        help="Zapisz wyniki do pliku JSON"
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Logi INFO")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    n_points = 10_000 if args.quick else args.points
    options = {
        'knn': args.knn,
        'radius': args.radius,
        'stride': args.stride,
        'feature_set': args.feature_set,
    }

    print("=" * 60)
    print("COVARIANCE FEATURES BENCHMARK")
    print("=" * 60)
    print(f"Data: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Punkty: {n_points:,}")
    print(f"Zestaw cech: {args.feature_set}")

    coords = make_synthetic_cloud(n_points)
    results: List[BenchmarkResult] = []
    baseline = None

    try:
        for threads in args.threads:
            result, outputs = run_benchmark(coords, options, threads, baseline)
            if baseline is None:
                baseline = outputs
            results.append(result)
            print_result(result)

    except KeyboardInterrupt:
        print("\n\nPrzerwano przez uzytkownika")
        sys.exit(1)

    all_identical = all(r.identical_to_baseline for r in results)
    print("=" * 60)
    print(f"Wyniki identyczne dla wszystkich liczb watkow: {'TAK' if all_identical else 'NIE'}")

    if args.json and results:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)

        output = {
            "timestamp": datetime.now().isoformat(),
            "options": options,
            "results": [asdict(r) for r in results]
        }

        with open(json_path, 'w') as f:
            json.dump(output, f, indent=2)

        print(f"\nWyniki zapisane: {json_path}")

    sys.exit(0 if all_identical else 1)


if __name__ == "__main__":
    main()
