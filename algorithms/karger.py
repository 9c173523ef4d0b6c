import concurrent.futures
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import numpy as np
from tqdm import tqdm

from algorithms.contraction import contract_to_cut
from algorithms.graph import Graph, InsufficientVertices


@dataclass(frozen=True)
class KargerResult:
    """
    min_cut: smallest cut seen over all completed trials.
    cuts: every trial's cut size, in trial order.
    """
    min_cut: int
    cuts: List[int] = field(default_factory=list)
    elapsed_s: float = 0.0

    @property
    def trials(self) -> int:
        return len(self.cuts)


def default_trials(n: int) -> int:
    """
    n^2 ln(n) trials push the chance of missing the minimum cut below 1/n.
    """
    if n <= 2:
        return 1
    return max(1, int(np.ceil(n ** 2 * np.log(n))))


def _run_trials(graph: Graph, seeds: Iterable, deadline: Optional[float] = None,
                min_trials: int = 0) -> List[int]:
    """
    Runs one trial per seed, each on its own copy of `graph`.
    Stops early once `deadline` (time.time()) passes, after at least `min_trials`.
    """
    cuts = []
    for i, seed_seq in enumerate(seeds):
        if deadline is not None and i >= min_trials and time.time() >= deadline:
            break
        rng = np.random.default_rng(seed_seq)
        cut, _ = contract_to_cut(graph.copy(), rng)
        cuts.append(cut)
    return cuts


def _chunk(seq: list, size: int) -> list:
    return [seq[i:i + size] for i in range(0, len(seq), size)]


def _join_prefix(chunks: list, results: dict) -> List[int]:
    """
    Concatenates chunk results in trial order, stopping at the first chunk that
    was cancelled or cut short, so the cuts are always trials 0..T-1.
    """
    cuts = []
    for idx, chunk in enumerate(chunks):
        if idx not in results:
            break
        cuts.extend(results[idx])
        if len(results[idx]) < len(chunk):
            break
    return cuts


def karger_min_cut(graph: Graph,
                   trials: Optional[int] = None,
                   seed=None,
                   workers: int = 1,
                   time_budget: Optional[float] = None,
                   progress: bool = False) -> KargerResult:
    """
    Repeats the random contraction trial and keeps the smallest cut.

    Args:
        graph (Graph): Input multigraph. Never mutated; every trial contracts a copy.
        trials (Optional[int]): Number of trials. Defaults to default_trials(n).
        seed: Anything numpy.random.SeedSequence accepts. Each trial gets its
              own child generator, so the cuts only depend on the seed and the
              trial index, whatever the number of workers.
        workers (int): Processes to spread trials over. 1 runs inline.
        time_budget (Optional[float]): Seconds after which no new trial starts.
                                       At least one trial always completes.
        progress (bool): Show a tqdm progress bar.

    Returns:
        KargerResult: minimum cut and the per-trial cuts.
    """
    graph.validate()
    n = graph.vertex_count()
    if n < 2:
        raise InsufficientVertices(f"a cut needs at least 2 vertices, graph has {n}")

    if trials is None:
        trials = default_trials(n)
    if trials < 1:
        raise ValueError("trials must be >= 1")
    if workers < 1:
        raise ValueError("workers must be >= 1")

    seeds = np.random.SeedSequence(seed).spawn(trials)

    start = time.perf_counter()
    deadline = None if time_budget is None else time.time() + time_budget

    if workers == 1:
        cuts = _run_trials(graph, tqdm(seeds, desc="Karger trials", disable=not progress),
                           deadline, min_trials=1)
    else:
        # a handful of chunks per worker keeps pickling of the graph down
        size = max(1, int(np.ceil(trials / (workers * 4))))
        chunks = _chunk(seeds, size)
        results = {}

        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(_run_trials, graph, chunk, deadline, 1 if idx == 0 else 0): idx
                for idx, chunk in enumerate(chunks)
            }
            with tqdm(total=trials, desc="Karger trials", disable=not progress) as pbar:
                for future in concurrent.futures.as_completed(futures):
                    if future.cancelled():
                        continue
                    chunk_cuts = future.result()
                    results[futures[future]] = chunk_cuts
                    pbar.update(len(chunk_cuts))
                    if deadline is not None and time.time() >= deadline:
                        for f in futures:
                            f.cancel()

        cuts = _join_prefix(chunks, results)

    elapsed = time.perf_counter() - start
    return KargerResult(min_cut=min(cuts), cuts=cuts, elapsed_s=elapsed)


def karger_wrapper(graph_matrix: np.ndarray, repetitions: int = None) -> float:
    """
    Public wrapper. graph_matrix is an (n x n) symmetric adjacency matrix with
    integer edge multiplicities.
    """
    n = graph_matrix.shape[0]
    if n <= 1:
        return 0.0

    graph = Graph.from_adjacency_matrix(graph_matrix)
    if graph.edge_count() == 0:
        return 0.0

    return float(karger_min_cut(graph, trials=repetitions).min_cut)
