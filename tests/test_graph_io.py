import pytest

from algorithms.graph import EmptyGraph, MalformedInput, UnknownVertex
from algorithms.karger import karger_min_cut
from graph_io.adjacency_list import load_adjacency_list, parse_adjacency_list, write_adjacency_list


CYCLE_TSV = "1\t2\t4\t\r\n2\t1\t3\t\r\n3\t2\t4\t\r\n4\t3\t1\t\r\n"


def test_parse_tab_separated_crlf():
    g = parse_adjacency_list(CYCLE_TSV)
    assert g.adjacency() == {1: [2, 4], 2: [1, 3], 3: [2, 4], 4: [3, 1]}


def test_parse_mixed_separators_and_comments():
    text = "# two vertices, two parallel edges\n\n1, 2, 2,\n2 1 1\n"
    g = parse_adjacency_list(text)
    assert g.adjacency() == {1: [2, 2], 2: [1, 1]}


def test_vertex_without_neighbors():
    g = parse_adjacency_list("1 2\n2 1\n3\n")
    assert g.neighbors(3) == []


def test_non_integer_field():
    with pytest.raises(MalformedInput) as excinfo:
        parse_adjacency_list("1 2\n2 x\n", source="bad.txt")
    assert "bad.txt:2" in str(excinfo.value)


def test_duplicate_record():
    with pytest.raises(MalformedInput):
        parse_adjacency_list("1 2\n2 1\n1 2\n")


@pytest.mark.parametrize("text", ["", "\n\n", "# nothing here\n"])
def test_empty_input(text):
    with pytest.raises(EmptyGraph):
        parse_adjacency_list(text)


def test_dangling_reference_is_rejected_by_estimator():
    g = parse_adjacency_list("1 2 3\n2 1\n")
    with pytest.raises(UnknownVertex):
        karger_min_cut(g, trials=1)


def test_load_and_write(tmp_path, bowtie):
    path = tmp_path / "bowtie.txt"
    write_adjacency_list(bowtie, str(path))
    assert path.read_text().splitlines()[0] == "1\t2\t3"
    assert load_adjacency_list(str(path)) == bowtie


def test_load_tab_separated_file(tmp_path):
    path = tmp_path / "kargerMinCut.txt"
    path.write_bytes(CYCLE_TSV.encode())
    result = karger_min_cut(load_adjacency_list(str(path)), trials=10, seed=0)
    assert result.min_cut == 2
