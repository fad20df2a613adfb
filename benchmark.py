import argparse
from pathlib import Path
from random import randrange
from tempfile import TemporaryDirectory
from timeit import timeit

from kvs import KvStore, ReplayOnReadKvStore

benchmark_fns = []
implementations = {impl.__name__: impl for impl in [KvStore, ReplayOnReadKvStore]}


def benchmark(fn):
    benchmark_fns.append(fn)
    return fn


@benchmark
def sequential_set_and_get(store: KvStore, iterations: int):
    """Appends a record and reads the key straight back, once per key.

    The replaying store pays a full replay on each read, so it grows with the log.
    """
    numbers = iter(range(iterations))

    def workload():
        i = next(numbers)
        store.set(f"key_{i}", f"value_{i}")
        store.get(f"key_{i}")

    return timeit(workload, number=iterations)


@benchmark
def sequential_sets(store: KvStore, iterations: int):
    """Repeatedly sets a sequence of key-value pairs.

    Every set is flushed to disk before returning, so this is bound by fsync.
    """
    numbers = iter(range(iterations))

    def workload():
        i = next(numbers)
        store.set(f"key_{i}", f"value_{i}")

    return timeit(workload, number=iterations)


@benchmark
def random_gets(store: KvStore, iterations: int):
    """Looks up random keys after one append per key.

    The cached store never touches the file here; the replaying store rereads it each time.
    """
    for i in range(iterations):
        store.set(f"key_{i}", f"value_{i}")

    def workload():
        i = randrange(iterations)
        store.get(f"key_{i}")

    return timeit(workload, number=iterations)


@benchmark
def reopen(store: KvStore, iterations: int):
    """Reopens a store whose log holds every key overwritten ten times.

    Measures replay, which scales with the length of the log.
    """
    for _ in range(10):
        for i in range(iterations):
            store.set(f"key_{i}", f"value_{i}")
    store.close()
    return timeit(lambda: type(store).open(store.path).close(), number=1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run benchmarks on kvs stores.")
    parser.add_argument(
        "--iterations",
        dest="iterations",
        type=int,
        default=1000,
        help="Number of iterations to run for the benchmarks",
    )
    parser.add_argument(
        "--implementation",
        dest="implementation",
        type=str,
        choices=implementations.keys(),
        default="KvStore",
        help="The store implementation to run benchmarks against",
    )
    parser.add_argument(
        "--no-sync",
        dest="sync",
        action="store_false",
        help="Flush without fsync after each mutation",
    )
    args = parser.parse_args()
    line = "=============================="
    print(line)
    for benchmark_fn in benchmark_fns:
        print(f"Running: {benchmark_fn.__name__}")
        print(benchmark_fn.__doc__)
        with TemporaryDirectory() as tmpdir:
            store = implementations[args.implementation](path=Path(tmpdir), sync=args.sync)
            try:
                time_taken = benchmark_fn(store, args.iterations)
            finally:
                store.close()
        print(f"Completed in {time_taken:.4f} seconds")
        print(line)
