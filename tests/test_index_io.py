import pytest

pytest.importorskip("pyarrow")
import pyarrow.parquet as pq

from dbpedia_graph.data.components.identity import assign_identities
from dbpedia_graph.data.io.index_io import load_identity_map, write_identity_map


def test_identity_index_round_trip(tmp_path):
    path = tmp_path / "idx" / "page_index.parquet"
    pages = assign_identities(["b", "a", "c"], kind="page")
    write_identity_map(pages, path)

    table = pq.read_table(path)
    assert table.column_names == ["key", "id", "kind"]
    assert table.column("id").to_pylist() == [0, 1, 2]

    loaded = load_identity_map(path, kind="page")
    assert dict(loaded.items()) == dict(pages.items())


def test_kind_mismatch_is_rejected(tmp_path):
    path = tmp_path / "category_index.parquet"
    write_identity_map(assign_identities(["x"], kind="category", base=3), path)
    with pytest.raises(ValueError, match="expected 'page'"):
        load_identity_map(path, kind="page")


def test_missing_index(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_identity_map(tmp_path / "nope.parquet", kind="page")
