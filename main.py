import argparse
import sys

import numpy as np
import pandas as pd

from benchmarking import BenchmarkRunner

from graph_generators.erdos_renyi import generate_er
from graph_generators.barabasi_albert import generate_ba
from graph_io.adjacency_list import load_adjacency_list

from algorithms.contraction import contract_to_cut
from algorithms.graph import GraphError
from algorithms.karger import karger_min_cut

RNG_SEED = 42

# fixed trial count for the CLI; --auto-trials uses n^2 ln n instead
DEFAULT_TRIALS = 10

# Graph sizes (n) for benchmark mode. One trial is O(n^2), repeated runs add more.
BENCH_N_VALUES = [10, 20, 30, 40]

# graphs per (model, n) pair
BENCH_GRAPHS = 20

# contraction trials per graph for the repeated estimator in benchmark mode
BENCH_KARGER_TRIALS = 100

MODEL_PARAMS = {
    'ER': {'p': 0.3},  # G(n, p) with p=0.3
    'BA': {'m': 3}     # G(n, m) with m=3 new edges per node
}

GENERATORS = {
    'ER': generate_er,
    'BA': generate_ba,
}


def single_trial(graph, rng):
    cut, _ = contract_to_cut(graph, rng)
    return cut


def repeated_trials(graph, rng):
    seed = int(rng.integers(2**32))
    return karger_min_cut(graph, trials=BENCH_KARGER_TRIALS, seed=seed).min_cut


def run_benchmark(args):
    runner = BenchmarkRunner(
        {'karger_single': single_trial, 'karger_repeated': repeated_trials},
        GENERATORS,
        seed=args.seed,
        workers=args.workers,
    )
    results_df = runner.run(
        models=list(GENERATORS),
        n_values=BENCH_N_VALUES,
        trials=BENCH_GRAPHS,
        model_params=MODEL_PARAMS,
        progress=True,
    )

    pd.set_option('display.width', 1000)
    pd.set_option('display.max_rows', None)

    print("\nBenchmark Results:")
    print(results_df)

    results_df.to_csv(args.csv, index=False)
    print(f"\nResults saved to {args.csv}")


def load_graph(args):
    if args.random is not None:
        rng = np.random.default_rng(args.seed)
        graph = GENERATORS[args.random](n=args.n, rng=rng, **MODEL_PARAMS[args.random])
        print(f"Generated Graph: {graph.vertex_count()} nodes, {graph.edge_count()} edges")
    else:
        graph = load_adjacency_list(args.input)
        print(f"Loaded {args.input}: {graph.vertex_count()} nodes, {graph.edge_count()} edges")
    return graph


def estimate(args):
    graph = load_graph(args)

    if args.auto_trials:
        trials = None
    elif args.trials is not None:
        trials = args.trials
    else:
        trials = DEFAULT_TRIALS

    print("Starting MinCut...")
    result = karger_min_cut(graph,
                            trials=trials,
                            seed=args.seed,
                            workers=args.workers,
                            time_budget=args.time_budget,
                            progress=args.progress)

    print(f"KargerMinCut() took {result.elapsed_s * 1000:.3f} milliseconds "
          f"({result.trials} trials)")
    print(f"Final minimum cut: {result.min_cut}")
    print(f"All cuts: {', '.join(str(c) for c in result.cuts)}")
    return result


def build_parser():
    parser = argparse.ArgumentParser(description="Karger random-contraction min cut")

    parser.add_argument("--input", type=str, default="kargerMinCut.txt",
                        help="Adjacency list file: vertex id followed by its neighbours, one per line")

    parser.add_argument("--random", type=str, default=None,
                        choices=list(GENERATORS),
                        help="Estimate on a generated ER or BA graph instead of --input")

    parser.add_argument("--n", type=int, default=50,
                        help="Number of nodes for --random")

    parser.add_argument("--trials", type=int, default=None,
                        help=f"Number of contraction trials (default {DEFAULT_TRIALS})")

    parser.add_argument("--auto-trials", action="store_true",
                        help="Use n^2 ln(n) trials")

    parser.add_argument("--seed", type=int, default=RNG_SEED,
                        help="Random seed")

    parser.add_argument("--workers", type=int, default=1,
                        help="Worker processes for the trials (or the graphs in --benchmark)")

    parser.add_argument("--time-budget", type=float, default=None,
                        help="Stop starting new trials after this many seconds")

    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar")

    parser.add_argument("--benchmark", action="store_true",
                        help="Compare against NetworkX Stoer-Wagner on generated graphs")

    parser.add_argument("--csv", type=str, default="benchmark_results.csv",
                        help="Where --benchmark writes its results")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        if args.benchmark:
            run_benchmark(args)
        else:
            estimate(args)
    except (GraphError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
