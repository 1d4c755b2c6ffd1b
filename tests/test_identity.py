import pytest

from dbpedia_graph.data.components.identity import (
    assert_disjoint,
    assign_identities,
    identity_map_from_mapping,
    next_offset,
)
from dbpedia_graph.data.schema.types import IdentityAssigner


def test_ids_are_dense_and_follow_key_order():
    identity_map = assign_identities(["c", "a", "b", "a"], kind="page")
    assert dict(identity_map.items()) == {"a": 0, "b": 1, "c": 2}
    assert identity_map.min_id == 0
    assert identity_map.max_id == 2


def test_assignment_is_independent_of_input_order():
    first = assign_identities(["x", "y", "z"], kind="page")
    second = assign_identities(["z", "x", "y"], kind="page")
    assert dict(first.items()) == dict(second.items())


def test_base_shifts_every_id():
    identity_map = assign_identities(["a", "b"], kind="category", base=42)
    assert identity_map["a"] == 42
    assert identity_map["b"] == 43


def test_next_offset_uses_largest_assigned_id():
    sparse = identity_map_from_mapping({"a": 0, "b": 7, "c": 41}, kind="page")
    assert next_offset(sparse) == 42


def test_next_offset_of_empty_map_is_base():
    assert next_offset(assign_identities([], kind="page")) == 0
    assert next_offset(assign_identities([], kind="page"), base=5) == 5


def test_unknown_key_lookup():
    identity_map = assign_identities(["a"], kind="page")
    assert identity_map.get("missing") is None
    assert "missing" not in identity_map
    with pytest.raises(KeyError):
        identity_map["missing"]


def test_assigner_rejects_keys_after_freeze():
    assigner = IdentityAssigner(kind="page")
    assigner.add_keys(["a", "b"])
    frozen = assigner.freeze()
    assert assigner.freeze() is frozen
    assert len(assigner) == 2
    with pytest.raises(RuntimeError):
        assigner.add_key("c")


def test_assigner_rejects_empty_key():
    with pytest.raises(ValueError):
        IdentityAssigner(kind="page").add_key("")


def test_identity_map_requires_freeze():
    with pytest.raises(RuntimeError):
        IdentityAssigner(kind="page").identity_map


def test_duplicate_ids_are_rejected():
    with pytest.raises(ValueError, match="duplicate ids"):
        identity_map_from_mapping({"a": 1, "b": 1}, kind="page")


def test_assert_disjoint_detects_collision():
    pages = assign_identities(["a", "b"], kind="page")
    clashing = assign_identities(["Category:x"], kind="category", base=1)
    with pytest.raises(ValueError, match="collide"):
        assert_disjoint(pages, clashing)
    assert_disjoint(pages, assign_identities(["Category:x"], kind="category", base=next_offset(pages)))


def test_identity_map_owns_its_entries():
    source = {"a": 0, "b": 1}
    identity_map = identity_map_from_mapping(source, kind="page")
    source["c"] = 2
    assert "c" not in identity_map
    assert not hasattr(identity_map, "key_to_id")
    with pytest.raises(AttributeError):
        identity_map.extra = 1


def test_identity_map_is_hashable_and_picklable():
    import pickle

    identity_map = assign_identities(["a", "b"], kind="page")
    assert {identity_map: 1}[identity_map] == 1
    restored = pickle.loads(pickle.dumps(identity_map))
    assert restored.kind == "page"
    assert dict(restored.items()) == {"a": 0, "b": 1}
    assert sorted(restored.ids()) == [0, 1]
