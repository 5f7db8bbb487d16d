#!/usr/bin/env python3
"""Latency benchmark for skipmap, optionally against sortedcontainers."""

import argparse
import json
import random
import time
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
try:
    from sortedcontainers import SortedDict
    HAS_SORTEDCONTAINERS = True
except ImportError:
    HAS_SORTEDCONTAINERS = False
    print("sortedcontainers not available, skipping SortedDict benchmarks")
from tqdm import tqdm

from skipmap import SkipListMap

class Metrics:
    def __init__(self):
        self.put_latencies: List[float] = []
        self.get_latencies: List[float] = []
        self.scan_times: List[float] = []

    def to_dict(self) -> Dict:
        return {
            "put_latencies": {
                "p50": np.percentile(self.put_latencies, 50),
                "p95": np.percentile(self.put_latencies, 95),
                "p99": np.percentile(self.put_latencies, 99),
            },
            "get_latencies": {
                "p50": np.percentile(self.get_latencies, 50),
                "p95": np.percentile(self.get_latencies, 95),
                "p99": np.percentile(self.get_latencies, 99),
            },
            "scan_avg_time": np.mean(self.scan_times),
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()

        fig.add_trace(go.Box(
            y=self.put_latencies,
            name="Put Latency",
            boxpoints="outliers"
        ))

        fig.add_trace(go.Box(
            y=self.get_latencies,
            name="Get Latency",
            boxpoints="outliers"
        ))

        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )

        fig.write_html(output_path)

class BenchmarkSuite:
    def __init__(self, num_entries: int, seed: int):
        self.num_entries = num_entries
        rnd = random.Random(seed)
        self._keys = rnd.sample(range(num_entries * 10), num_entries)
        self._seed = seed

    def _run(self, m, label: str) -> Metrics:
        metrics = Metrics()

        for k in tqdm(self._keys, desc=f"{label} Put"):
            start = time.perf_counter()
            m[k] = k
            metrics.put_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys, desc=f"{label} Get"):
            start = time.perf_counter()
            m.get(k)
            metrics.get_latencies.append((time.perf_counter() - start) * 1e6)

        for _ in range(3):
            start = time.perf_counter()
            for _ in m.items():
                pass
            metrics.scan_times.append(time.perf_counter() - start)

        return metrics

    def run_skipmap_benchmark(self) -> Metrics:
        return self._run(SkipListMap(rng=random.Random(self._seed)), "SkipListMap")

    def run_sorteddict_benchmark(self) -> Metrics:
        return self._run(SortedDict(), "SortedDict")

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of entries")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for keys and node heights")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.seed)

    skipmap_metrics = suite.run_skipmap_benchmark()
    sorted_metrics = suite.run_sorteddict_benchmark() if HAS_SORTEDCONTAINERS else None

    skipmap_metrics.plot_latencies(
        "SkipListMap Latency Distribution",
        args.output / "skipmap_latencies.html"
    )

    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "skipmap": skipmap_metrics.to_dict(),
            "sorteddict": sorted_metrics.to_dict() if sorted_metrics else None,
        }, f, indent=2)

if __name__ == "__main__":
    main()
