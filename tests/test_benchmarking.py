import pandas as pd
import pytest

from algorithms.graph import Graph
from algorithms.karger import karger_min_cut
from benchmarking import BenchmarkRunner, true_min_cut
from graph_generators.barabasi_albert import generate_ba
from graph_generators.erdos_renyi import generate_er


def repeated(graph, rng):
    return karger_min_cut(graph, trials=50, seed=int(rng.integers(2**32))).min_cut


def test_true_min_cut(cycle4, bowtie, pair5, multi_triangle):
    assert true_min_cut(cycle4) == 2
    assert true_min_cut(bowtie) == 2
    assert true_min_cut(pair5) == 5
    assert true_min_cut(multi_triangle) == 2


def test_true_min_cut_disconnected():
    assert true_min_cut(Graph({1: [2], 2: [1], 3: []})) == 0


def test_runner_frame():
    runner = BenchmarkRunner({'karger': repeated},
                             {'ER': generate_er, 'BA': generate_ba},
                             seed=42)
    df = runner.run(models=['ER', 'BA'], n_values=[8], trials=2,
                    model_params={'ER': {'p': 0.5}, 'BA': {'m': 2}})

    assert isinstance(df, pd.DataFrame)
    assert len(df) == 2
    assert list(df['model']) == ['ER', 'BA']
    assert {'mean_time_s', 'min_found_cut', 'success_rate'} <= set(df.columns)
    assert (df['min_found_cut'] >= 0).all()


def test_runner_is_reproducible():
    def run():
        runner = BenchmarkRunner({'karger': repeated}, {'ER': generate_er}, seed=7)
        return runner.run(models=['ER'], n_values=[10], trials=3, model_params={'ER': {'p': 0.4}})

    a, b = run(), run()
    assert a['mean_cut'].tolist() == b['mean_cut'].tolist()


def test_unknown_model_skipped(capsys):
    runner = BenchmarkRunner({'karger': repeated}, {'ER': generate_er}, seed=1)
    df = runner.run(models=['XX'], n_values=[8], trials=1, model_params={})
    assert df.empty
    assert "Generator 'XX' not found" in capsys.readouterr().out


def underestimate(graph, rng):
    return -1


def er_except_nine(n, rng, p):
    if n == 9:
        raise ValueError("cannot build graph of size 9")
    return generate_er(n, p, rng=rng)


def test_cuts_below_true_are_counted():
    runner = BenchmarkRunner({'bad': underestimate, 'karger': repeated},
                             {'ER': generate_er}, seed=3)
    df = runner.run(models=['ER'], n_values=[8], trials=3,
                    model_params={'ER': {'p': 0.5}}).set_index('algorithm')

    assert df.loc['bad', 'below_true'] == 3
    assert df.loc['bad', 'success_rate'] == 0.0
    assert df.loc['karger', 'below_true'] == 0


def test_pool_skips_failing_graphs(capsys):
    runner = BenchmarkRunner({'karger': repeated}, {'ER': er_except_nine},
                             seed=5, workers=2)
    df = runner.run(models=['ER'], n_values=[8, 9], trials=2,
                    model_params={'ER': {'p': 0.5}})

    assert df['n'].tolist() == [8]
    assert df['trials'].tolist() == [2]
    assert capsys.readouterr().out.count("Job generated an exception: cannot build graph of size 9") == 2


def test_pool_matches_sequential():
    def run(workers):
        runner = BenchmarkRunner({'karger': repeated}, {'ER': generate_er},
                                 seed=11, workers=workers)
        return runner.run(models=['ER'], n_values=[10], trials=4,
                          model_params={'ER': {'p': 0.4}})

    sequential, pooled = run(1), run(2)
    assert pooled['min_found_cut'].tolist() == sequential['min_found_cut'].tolist()
    assert pooled['max_found_cut'].tolist() == sequential['max_found_cut'].tolist()
    assert pooled['success_rate'].tolist() == sequential['success_rate'].tolist()


def test_sequential_failure_propagates():
    runner = BenchmarkRunner({'karger': repeated}, {'ER': er_except_nine}, seed=5)
    with pytest.raises(ValueError):
        runner.run(models=['ER'], n_values=[9], trials=1, model_params={'ER': {'p': 0.5}})
