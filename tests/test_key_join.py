from dbpedia_graph.data.components.key_join import group_pairs, join_by_key, merge_groups


def test_group_pairs_keeps_duplicates_in_order():
    groups = group_pairs([("a", "1"), ("b", "2"), ("a", "1"), ("a", "3")])
    assert groups == {"a": ["1", "1", "3"], "b": ["2"]}


def test_group_pairs_skips_rejected_lines():
    groups = group_pairs([None, ("", "x"), ("a", "1"), ("b",)])
    assert groups == {"a": ["1"]}


def test_join_unions_keys_from_both_sides():
    links = [("A", "wiki/A"), ("B", "wiki/B")]
    labels = [("A", "Alpha"), ("C", "Gamma")]
    joined = join_by_key(links, labels)
    assert joined == {"A": ["wiki/A", "Alpha"], "B": ["wiki/B"], "C": ["Gamma"]}


def test_self_join_on_identical_inputs_doubles_values():
    pairs = [("A", "x")]
    assert join_by_key(pairs, pairs) == {"A": ["x", "x"]}


def test_join_of_empty_inputs_is_empty():
    assert join_by_key([], []) == {}


def test_merge_groups_does_not_alias_inputs():
    first = {"A": ["1"]}
    merged = merge_groups([first, {"A": ["2"]}])
    assert merged == {"A": ["1", "2"]}
    assert first == {"A": ["1"]}
