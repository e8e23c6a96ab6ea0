#!/usr/bin/env python3
"""
Performance Test Script for the Person Database

Tests:
1. Sequential insert throughput
2. Random insert throughput
3. Exact lookup throughput
4. Last-name scan vs first-name scan
5. Delete throughput
6. Save / load of the whole file

Metrics:
- Operations per second (ops/sec)
- Latency (p50, p95, p99)
"""

import asyncio
import os
import random
import shutil
import statistics
import string
import time
from decimal import Decimal
from typing import List

from persondb import PersonDatabase
from persondb.models.person import PersonRecord


class PerformanceTest:
    def __init__(self, storage_dir: str):
        self.storage_dir = storage_dir
        self.file_path = os.path.join(storage_dir, "bench.txt")
        self.database: PersonDatabase | None = None

    async def setup(self):
        """Initialize an empty database."""
        os.makedirs(self.storage_dir, exist_ok=True)
        self.database = PersonDatabase(self.file_path)

    async def teardown(self):
        """Clean up resources."""
        if self.database:
            await self.database.close()

    @staticmethod
    def generate_random_string(length: int) -> str:
        """Generate a random string of specified length."""
        return ''.join(random.choices(string.ascii_letters, k=length))

    @staticmethod
    def generate_person(i: int, family_size: int = 10) -> PersonRecord:
        """Generate a record; every family_size records share a last name."""
        return PersonRecord(
            last_name=f"Last{i // family_size:08d}",
            first_name=f"First{i % family_size:04d}",
            state="NY",
            zip_code=f"{i % 100000:05d}",
            birth_year=1900 + i % 120,
            birth_month=1 + i % 12,
            birth_day=1 + i % 28,
            password=PerformanceTest.generate_random_string(12),
            balance=Decimal(i) / 100,
            ssn=f"{i:09d}",
        )

    @staticmethod
    def calculate_stats(latencies: List[int]) -> dict:
        """Calculate latency statistics (latencies in nanoseconds)."""
        if not latencies:
            return {}

        sorted_latencies = sorted(latencies)
        return {
            "min_ms": min(latencies) / 1_000_000,
            "max_ms": max(latencies) / 1_000_000,
            "mean_ms": statistics.mean(latencies) / 1_000_000,
            "median_ms": statistics.median(latencies) / 1_000_000,
            "p95_ms": sorted_latencies[int(len(sorted_latencies) * 0.95)] / 1_000_000,
            "p99_ms": sorted_latencies[int(len(sorted_latencies) * 0.99)] / 1_000_000,
        }

    async def _timed(self, description: str, operations) -> dict:
        """Run awaitable factories one by one and collect latencies."""
        print(f"\n{'='*60}")
        print(f"{description} Test: {len(operations)} operations")
        print(f"{'='*60}")

        latencies = []
        start_time = time.perf_counter_ns()

        for i, operation in enumerate(operations):
            op_start = time.perf_counter_ns()
            await operation()
            latencies.append(time.perf_counter_ns() - op_start)

            if (i + 1) % 10000 == 0:
                print(f"  Progress: {i + 1}/{len(operations)} operations")

        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": description,
            "count": len(operations),
            "elapsed_sec": elapsed,
            "ops_per_sec": len(operations) / elapsed if elapsed else 0.0,
            **self.calculate_stats(latencies)
        }

        self.print_results(results)
        return results

    async def test_sequential_insert(self, count: int) -> dict:
        records = [self.generate_person(i) for i in range(count)]
        return await self._timed(
            "Sequential Insert",
            [lambda r=r: self.database.insert(r) for r in records],
        )

    async def test_random_insert(self, count: int) -> dict:
        records = [self.generate_person(i) for i in range(count)]
        random.shuffle(records)
        return await self._timed(
            "Random Insert",
            [lambda r=r: self.database.insert(r) for r in records],
        )

    async def test_random_find(self, count: int, key_space: int) -> dict:
        people = [self.generate_person(random.randrange(key_space)) for _ in range(count)]
        return await self._timed(
            "Random Find",
            [lambda p=p: self.database.find(p.first_name, p.last_name) for p in people],
        )

    async def test_name_scans(self, count: int, key_space: int) -> list[dict]:
        people = [self.generate_person(random.randrange(key_space)) for _ in range(count)]
        by_last = await self._timed(
            "Last Name Scan",
            [lambda p=p: self.database.find_by_last_name(p.last_name) for p in people],
        )
        by_first = await self._timed(
            "First Name Scan",
            [lambda p=p: self.database.find_by_first_name(p.first_name) for p in people[: max(1, count // 100)]],
        )
        return [by_last, by_first]

    async def test_random_delete(self, count: int, key_space: int) -> dict:
        people = [self.generate_person(i) for i in random.sample(range(key_space), count)]
        return await self._timed(
            "Random Delete",
            [lambda p=p: self.database.delete(p.first_name, p.last_name) for p in people],
        )

    async def test_save_and_load(self) -> dict:
        print(f"\n{'='*60}")
        print("Save / Load Test")
        print(f"{'='*60}")

        start = time.perf_counter()
        saved = await self.database.save()
        save_sec = time.perf_counter() - start

        start = time.perf_counter()
        reloaded = await PersonDatabase.create(self.file_path)
        load_sec = time.perf_counter() - start

        report = await reloaded.verify()
        results = {
            "test": "Save / Load",
            "count": saved,
            "save_sec": save_sec,
            "load_sec": load_sec,
            "reloaded_height": report.height,
            "reloaded_balanced": report.balanced,
        }
        await reloaded.close()

        self.print_results(results)
        return results

    @staticmethod
    def print_results(results: dict):
        """Print test results in a formatted way."""
        print(f"\nResults for {results['test']}:")
        for key, value in results.items():
            if key == "test":
                continue
            if isinstance(value, float):
                print(f"  {key}: {value:.4f}")
            else:
                print(f"  {key}: {value}")


async def run_tests(count: int):
    storage_dir = "perf_test_data"
    if os.path.exists(storage_dir):
        shutil.rmtree(storage_dir)

    all_results = []
    test = PerformanceTest(storage_dir)
    try:
        await test.setup()
        all_results.append(await test.test_random_insert(count))
        all_results.append(await test.test_random_find(count, count))
        all_results.extend(await test.test_name_scans(count // 10, count))
        all_results.append(await test.test_save_and_load())
        all_results.append(await test.test_random_delete(count // 2, count))
        await test.teardown()

        await test.setup()
        all_results.append(await test.test_sequential_insert(count))

        report = await test.database.verify()
        print(f"\nTree after sequential insert: height={report.height} balanced={report.balanced}")
    finally:
        await test.teardown()
        if os.path.exists(storage_dir):
            shutil.rmtree(storage_dir)

    print(f"\n{'#'*60}")
    print("# SUMMARY")
    print(f"{'#'*60}")
    for result in all_results:
        if "ops_per_sec" in result:
            print(f"  {result['test']:<20} {result['ops_per_sec']:>12.0f} ops/sec")


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "quick":
        asyncio.run(run_tests(10_000))
    else:
        asyncio.run(run_tests(100_000))
