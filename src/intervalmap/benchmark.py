"""
Benchmarking module for CompressedIntervalMap.

Times seeded random workloads of ``assign`` and ``lookup`` calls and reports
timing, memory usage and CPU utilization metrics.
"""

import argparse
import logging
import os
import random
import statistics
import sys
import timeit
from collections.abc import Callable
from dataclasses import dataclass
from textwrap import dedent
from typing import Any

import psutil

from .config import BenchmarkConfig, config
from .interval_map import CompressedIntervalMap

logger = logging.getLogger(__name__)
logger.setLevel(config.log_level)


@dataclass
class BenchmarkResult:
    """Container for benchmark results with comprehensive metrics."""

    function_name: str
    repeat_count: int
    number_per_repeat: int
    times: list[float]
    memory_rss_mb: float
    memory_vms_mb: float
    cpu_percent: float

    @property
    def avg_time(self) -> float:
        """Average execution time per call."""
        return statistics.mean(self.times) / self.number_per_repeat

    @property
    def min_time(self) -> float:
        return min(self.times) / self.number_per_repeat

    @property
    def max_time(self) -> float:
        return max(self.times) / self.number_per_repeat

    @property
    def std_dev(self) -> float:
        if len(self.times) > 1:
            return statistics.stdev(self.times) / self.number_per_repeat
        return 0.0

    @property
    def median_time(self) -> float:
        return statistics.median(self.times) / self.number_per_repeat


@dataclass
class Workload:
    ranges: list[tuple[int, int, int]]
    keys: list[int]


def generate_workload(settings: BenchmarkConfig) -> Workload:
    """
    Draw ``settings.operations`` random assign ranges and lookup keys.

    Ranges may be empty or reversed; those exercise the no-op path.
    """
    rng = random.Random(settings.seed)
    ranges = []
    for _ in range(settings.operations):
        begin = rng.randrange(settings.key_space)
        end = begin + rng.randrange(-1, settings.key_space // 10 + 1)
        ranges.append((begin, end, rng.randrange(settings.value_space)))
    keys = [rng.randrange(settings.key_space) for _ in range(settings.operations)]
    return Workload(ranges=ranges, keys=keys)


def run_assign(workload: Workload) -> CompressedIntervalMap[int, int]:
    return CompressedIntervalMap.from_ranges(0, workload.ranges)


def make_lookup(workload: Workload) -> Callable[[], None]:
    interval_map = run_assign(workload)

    def run_lookup() -> None:
        for key in workload.keys:
            interval_map.lookup(key)

    return run_lookup


def benchmark(
    func: Callable[..., Any],
    repeat: int,
    number: int,
    warmup: bool = True,
    *args: Any,
    **kwargs: Any,
) -> BenchmarkResult:
    """
    Benchmark a function with comprehensive performance metrics.

    Args:
        func: Function to benchmark
        repeat: Number of times to repeat the benchmark
        number: Number of function calls per repeat
        warmup: Whether to perform a warmup run before benchmarking
        *args: Positional arguments to pass to the function
        **kwargs: Keyword arguments to pass to the function

    Returns:
        BenchmarkResult containing all performance metrics

    Raises:
        RuntimeError: If benchmark execution fails
    """
    logger.info(f"Benchmarking function: {func.__name__}")
    logger.info(f"Parameters: repeat={repeat}, number={number}, warmup={warmup}")

    try:
        process = psutil.Process(os.getpid())

        if warmup:
            logger.debug("Performing warmup run...")
            func(*args, **kwargs)

        mem_before = process.memory_info()

        timer = timeit.Timer(lambda: func(*args, **kwargs))
        times = timer.repeat(repeat=repeat, number=number)

        mem_after = process.memory_info()
        cpu_percent = process.cpu_percent(interval=0.1)

        result = BenchmarkResult(
            function_name=func.__name__,
            repeat_count=repeat,
            number_per_repeat=number,
            times=times,
            memory_rss_mb=max(mem_before.rss, mem_after.rss) / 1024**2,
            memory_vms_mb=max(mem_before.vms, mem_after.vms) / 1024**2,
            cpu_percent=cpu_percent,
        )

        logger.info(f"Benchmark completed successfully for {func.__name__}")
    except Exception as e:
        logger.exception(f"Benchmark failed for {func.__name__}")
        raise RuntimeError(f"Benchmark execution failed: {e}") from e
    else:
        return result


def format_benchmark_result(result: BenchmarkResult, operations: int) -> str:
    output = []
    output.append("=" * 60)
    output.append("BENCHMARK RESULTS")
    output.append("=" * 60)

    output.append(f"Function: {result.function_name}")
    output.append(
        f"Configuration: {result.repeat_count} repeats, "
        f"{result.number_per_repeat} calls per repeat, "
        f"{operations} operations per call"
    )
    output.append("")

    output.append("TIMING STATISTICS:")
    output.append(f"  Average: {result.avg_time:.6f} seconds")
    output.append(f"  Median:  {result.median_time:.6f} seconds")
    output.append(f"  Minimum: {result.min_time:.6f} seconds")
    output.append(f"  Maximum: {result.max_time:.6f} seconds")
    output.append(f"  Std Dev: {result.std_dev:.6f} seconds")
    output.append(f"  Per operation: {result.avg_time / operations * 1e6:.3f} us")
    output.append("")

    output.append("MEMORY USAGE:")
    output.append(f"  RSS (Resident Set Size): {result.memory_rss_mb:.2f} MB")
    output.append(f"  VMS (Virtual Memory Size): {result.memory_vms_mb:.2f} MB")
    output.append("")

    output.append("CPU USAGE:")
    output.append(f"  CPU Percentage: {result.cpu_percent:.2f}%")
    output.append("")

    return "\n".join(output)


def run_benchmarks(settings: BenchmarkConfig, warmup: bool = True) -> list[BenchmarkResult]:
    """
    Benchmark the assign and lookup workloads and print a report for each.
    """
    logger.info(f"Starting benchmark suite: {settings}")
    workload = generate_workload(settings)

    results = [
        benchmark(run_assign, settings.repeat, settings.number, warmup, workload),
        benchmark(make_lookup(workload), settings.repeat, settings.number, warmup),
    ]
    for result in results:
        print(format_benchmark_result(result, settings.operations))

    logger.info("Benchmark suite completed.")
    return results


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = config.benchmark
    epilog = dedent("""
    Examples:
        intervalmap-benchmark                         # Run with default settings
        intervalmap-benchmark --repeat 20             # Run 20 repeats per workload
        intervalmap-benchmark --operations 100000     # Larger workloads
        intervalmap-benchmark --no-warmup             # Skip warmup runs
    """)

    parser = argparse.ArgumentParser(
        description="Benchmark CompressedIntervalMap assign and lookup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=defaults.repeat,
        help=f"Number of times to repeat each benchmark (default: {defaults.repeat})",
    )
    parser.add_argument(
        "--number",
        type=int,
        default=defaults.number,
        help=f"Number of workload runs per repeat (default: {defaults.number})",
    )
    parser.add_argument(
        "--operations",
        type=int,
        default=defaults.operations,
        help=f"Assign/lookup calls per workload (default: {defaults.operations})",
    )
    parser.add_argument(
        "--key-space",
        type=int,
        default=defaults.key_space,
        help=f"Upper bound of generated keys (default: {defaults.key_space})",
    )
    parser.add_argument(
        "--value-space",
        type=int,
        default=defaults.value_space,
        help=f"Number of distinct generated values (default: {defaults.value_space})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.seed,
        help=f"Random seed for the workload (default: {defaults.seed})",
    )
    parser.add_argument(
        "--no-warmup", action="store_true", help="Skip warmup runs before benchmarking"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the benchmark script."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)

    settings = BenchmarkConfig(
        repeat=args.repeat,
        number=args.number,
        operations=args.operations,
        key_space=args.key_space,
        value_space=args.value_space,
        seed=args.seed,
    )

    try:
        run_benchmarks(settings, warmup=not args.no_warmup)
    except RuntimeError:
        logger.exception("Benchmark suite failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
