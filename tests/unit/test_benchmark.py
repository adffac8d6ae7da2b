import io
import unittest
from contextlib import redirect_stdout

from intervalmap import benchmark
from intervalmap.config import BenchmarkConfig, config

SMALL = BenchmarkConfig(
    repeat=2, number=1, operations=50, key_space=200, value_space=3, seed=42
)


class TestWorkload(unittest.TestCase):
    def test_workload_is_deterministic(self) -> None:
        first = benchmark.generate_workload(SMALL)
        second = benchmark.generate_workload(SMALL)
        self.assertEqual(first, second)
        self.assertEqual(len(first.ranges), SMALL.operations)
        self.assertEqual(len(first.keys), SMALL.operations)

    def test_workload_within_bounds(self) -> None:
        workload = benchmark.generate_workload(SMALL)
        for begin, _, value in workload.ranges:
            self.assertTrue(0 <= begin < SMALL.key_space)
            self.assertTrue(0 <= value < SMALL.value_space)
        self.assertTrue(all(0 <= key < SMALL.key_space for key in workload.keys))

    def test_run_assign_builds_canonical_map(self) -> None:
        interval_map = benchmark.run_assign(benchmark.generate_workload(SMALL))
        self.assertTrue(interval_map.is_canonical())
        self.assertEqual(interval_map.base_value, 0)


class TestBenchmark(unittest.TestCase):
    def test_benchmark_collects_metrics(self) -> None:
        workload = benchmark.generate_workload(SMALL)
        result = benchmark.benchmark(benchmark.run_assign, 2, 1, False, workload)
        self.assertEqual(result.function_name, "run_assign")
        self.assertEqual(len(result.times), 2)
        self.assertLessEqual(result.min_time, result.avg_time)
        self.assertLessEqual(result.avg_time, result.max_time)
        self.assertGreater(result.memory_rss_mb, 0)

    def test_benchmark_wraps_failures(self) -> None:
        def broken() -> None:
            raise ValueError("boom")

        with self.assertLogs(benchmark.logger, level="ERROR"):
            with self.assertRaises(RuntimeError) as cm:
                benchmark.benchmark(broken, 1, 1, False)
        self.assertIsInstance(cm.exception.__cause__, ValueError)

    def test_format_benchmark_result(self) -> None:
        result = benchmark.BenchmarkResult(
            function_name="run_lookup",
            repeat_count=2,
            number_per_repeat=1,
            times=[0.5, 1.5],
            memory_rss_mb=10.0,
            memory_vms_mb=20.0,
            cpu_percent=50.0,
        )
        text = benchmark.format_benchmark_result(result, 1000)
        self.assertIn("Function: run_lookup", text)
        self.assertIn("Average: 1.000000 seconds", text)
        self.assertIn("Std Dev: 0.707107 seconds", text)
        self.assertIn("Per operation: 1000.000 us", text)

    def test_run_benchmarks_prints_both_workloads(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            results = benchmark.run_benchmarks(SMALL, warmup=False)
        self.assertEqual(
            [r.function_name for r in results], ["run_assign", "run_lookup"]
        )
        self.assertEqual(out.getvalue().count("BENCHMARK RESULTS"), 2)


class TestCli(unittest.TestCase):
    def test_parse_args_defaults_from_config(self) -> None:
        args = benchmark.parse_args([])
        self.assertEqual(args.repeat, config.benchmark.repeat)
        self.assertEqual(args.operations, config.benchmark.operations)
        self.assertFalse(args.no_warmup)

    def test_main(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            benchmark.main(
                ["--repeat", "1", "--operations", "20", "--key-space", "100", "--no-warmup"]
            )
        self.assertIn("Function: run_assign", out.getvalue())
        self.assertIn("Function: run_lookup", out.getvalue())


if __name__ == "__main__":
    unittest.main()
