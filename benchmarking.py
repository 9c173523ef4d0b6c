import numpy as np
import pandas as pd
import networkx as nx
import time
import concurrent.futures
from typing import List, Dict, Callable, Any, Optional

from algorithms.graph import Graph


def true_min_cut(graph: Graph) -> int:
    """
    Exact min cut via NetworkX Stoer-Wagner, parallel edges folded into weights.
    A disconnected graph has min cut 0.
    """
    G = nx.Graph()
    G.add_nodes_from(graph.vertices())
    for u, v in graph.to_networkx().edges():
        if G.has_edge(u, v):
            G[u][v]['weight'] += 1
        else:
            G.add_edge(u, v, weight=1)

    if G.number_of_nodes() < 2 or not nx.is_connected(G):
        return 0

    cut_value, _ = nx.stoer_wagner(G, weight='weight')
    return int(cut_value)


# worker
def run_single_graph(algorithms: Dict[str, Callable],
                     gen_func: Callable,
                     params: Dict[str, Any],
                     n: int,
                     seed: Optional[list]) -> Dict[str, tuple]:
    """
    Generates ONE graph and runs every algorithm on its own copy of it.

    Returns:
        Dict of {'algo_name': (time_s, cut, true_cut)}
    """
    rng = np.random.default_rng(seed)
    graph = gen_func(n=n, rng=rng, **params)
    true_val = true_min_cut(graph)

    record = {}
    for algo_name, algo_func in algorithms.items():
        graph_copy = graph.copy()

        start_time = time.perf_counter()
        cut_val = algo_func(graph_copy, rng)
        end_time = time.perf_counter()

        record[algo_name] = (end_time - start_time, cut_val, true_val)
    return record


class BenchmarkRunner:
    """
    Handles running benchmarks for different graph models and min-cut estimators.
    """

    def __init__(self,
                 algorithms: Dict[str, Callable],
                 generators: Dict[str, Callable],
                 seed: Optional[int] = None,
                 workers: int = 1):
        """
        Args:
            algorithms (Dict[str, Callable]):
                Dict of {'algo_name': algorithm_function}
                Each function must accept a Graph and a np.random.Generator
                and return the cut size it found.

            generators (Dict[str, Callable]):
                Dict of {'model_name': generator_function}
                Each function must accept n, rng and **kwargs and return a Graph.

            seed (Optional[int]):
                Base seed for reproducibility.
                If None, randomness is uncontrolled.

            workers (int):
                Processes to spread the graphs of a (model, n) pair over.
                With more than 1, algorithms and generators must be picklable
                (module-level functions), and a failing graph is reported and
                skipped instead of stopping the run.
        """
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.algorithms = algorithms
        self.generators = generators
        self.base_seed = seed
        self.workers = workers

    def _seed(self, model_idx: int, n: int, trial: int) -> Optional[list]:
        if self.base_seed is None:
            return None
        return [self.base_seed, model_idx, n, trial]

    def _run_jobs(self, jobs: List[tuple]) -> List[Dict[str, tuple]]:
        if self.workers == 1:
            return [run_single_graph(*job) for job in jobs]

        records = []
        with concurrent.futures.ProcessPoolExecutor(max_workers=self.workers) as executor:
            futures = {executor.submit(run_single_graph, *job): job for job in jobs}
            for future in concurrent.futures.as_completed(futures):
                try:
                    records.append(future.result())
                except Exception as exc:
                    print(f"Job generated an exception: {exc}")
        return records

    def run(self,
            models: List[str],
            n_values: List[int],
            trials: int,
            model_params: Dict[str, Dict[str, Any]],
            progress: bool = False) -> pd.DataFrame:
        """
        Runs the full benchmark.

        Args:
            models (List[str]): List of model names (e.g., ['ER', 'BA']).
            n_values (List[int]): List of graph sizes (n).
            trials (int): Number of graphs to generate for each (model, n) pair.
            model_params (Dict): Parameters for each model generator.
                                 e.g., {'ER': {'p': 0.1}, 'BA': {'m': 3}}
            progress (bool): Print a line per (model, n) pair.

        Returns:
            pd.DataFrame: One row per (model, n, algorithm). `trials` counts the
                          graphs that finished; `below_true` counts cuts smaller
                          than the exact minimum, which a correct estimator never
                          reports.
        """
        all_results = []

        for model_idx, model_name in enumerate(models):
            if model_name not in self.generators:
                print(
                    f"Warning: Generator '{model_name}' not found. Skipping.")
                continue
            gen_func = self.generators[model_name]
            params = model_params.get(model_name, {})

            for n in n_values:
                if progress:
                    print(
                        f"--- Running: Model={model_name}, n={n}, Trials={trials} ---")

                jobs = [(self.algorithms, gen_func, params, n, self._seed(model_idx, n, i))
                        for i in range(trials)]

                trial_results = {name: {'times': [], 'cuts': [], 'exact': 0, 'below': 0}
                                 for name in self.algorithms}

                for record in self._run_jobs(jobs):
                    for algo_name, (elapsed, cut_val, true_val) in record.items():
                        data = trial_results[algo_name]
                        data['times'].append(elapsed)
                        data['cuts'].append(cut_val)
                        data['exact'] += int(cut_val == true_val)
                        data['below'] += int(cut_val < true_val)

                for algo_name, data in trial_results.items():
                    done = len(data['cuts'])
                    if done == 0:
                        continue
                    all_results.append({
                        'model': model_name,
                        'n': n,
                        'algorithm': algo_name,
                        'trials': done,
                        'mean_time_s': np.mean(data['times']),
                        'std_time_s': np.std(data['times']),
                        'mean_cut': np.mean(data['cuts']),
                        'std_cut': np.std(data['cuts']),
                        'min_found_cut': np.min(data['cuts']),
                        'max_found_cut': np.max(data['cuts']),
                        'success_rate': data['exact'] / done,
                        'below_true': data['below'],
                    })

        if progress:
            print("--- Benchmark Complete ---")
        return pd.DataFrame(all_results)
