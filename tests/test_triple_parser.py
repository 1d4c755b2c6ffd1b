import re

import pytest

from dbpedia_graph.data.components.triple_parser import build_default_profiles, build_profile, parse_line, parse_lines
from dbpedia_graph.data.schema.types import StageCounters
from triples import (
    LABEL,
    RES,
    WIKI,
    label_line,
    page_link_line,
    primary_topic_line,
    subject_line,
)

PROFILES = build_default_profiles("en")


def test_wikipedia_link_is_keyed_by_resource():
    pair = parse_line(primary_topic_line("Berlin"), PROFILES["wikipedia_links"])
    assert pair == (f"{RES}Berlin", f"{WIKI}Berlin")


def test_label_value_is_unquoted_literal():
    pair = parse_line(label_line("Berlin", "Berlin city"), PROFILES["labels"])
    assert pair == (f"{RES}Berlin", "Berlin city")


def test_label_in_other_language_is_rejected():
    assert parse_line(label_line("Berlin", "Berlin", lang="de"), PROFILES["labels"]) is None


def test_label_profile_follows_configured_language():
    profile = build_profile("labels", language="de")
    assert parse_line(label_line("Berlin", "Berlin", lang="de"), profile) == (f"{RES}Berlin", "Berlin")
    assert parse_line(label_line("Berlin", "Berlin", lang="en"), profile) is None


def test_page_link_is_keyed_by_source():
    pair = parse_line(page_link_line("A", "B"), PROFILES["page_links"])
    assert pair == (f"{RES}A", f"{RES}B")


def test_page_link_to_file_or_category_is_excluded():
    profile = PROFILES["page_links"]
    assert parse_line(page_link_line("A", "File:Map.png"), profile) is None
    assert parse_line(page_link_line("A", "Category:Cities"), profile) is None


def test_article_category_is_keyed_by_category():
    pair = parse_line(subject_line("Berlin", "Cities"), PROFILES["article_categories"])
    assert pair == (f"{RES}Category:Cities", f"{RES}Berlin")


def test_file_pages_are_excluded_from_page_sources():
    assert parse_line(primary_topic_line("File:Map.png"), PROFILES["wikipedia_links"]) is None
    assert parse_line(label_line("File:Map.png", "Map"), PROFILES["labels"]) is None


def test_lines_without_predicate_are_rejected():
    line = f"<{RES}A> <http://example.org/other> <{RES}B> ."
    for profile in PROFILES.values():
        assert parse_line(line, profile) is None


@pytest.mark.parametrize(
    "line",
    [
        "",
        "# comment line",
        f"<{RES}A> <{LABEL}>",
        f"<{RES}A> <{LABEL}> unquoted@en .",
    ],
)
def test_malformed_label_lines_are_rejected(line):
    assert parse_line(line, PROFILES["labels"]) is None


def test_literal_object_is_not_a_page_link():
    line = f'<{RES}A> <http://dbpedia.org/ontology/wikiPageWikiLink> "B" .'
    assert parse_line(line, PROFILES["page_links"]) is None


def test_parse_lines_counts_rejections():
    counters = StageCounters()
    lines = [
        label_line("A", "Alpha"),
        label_line("B", "Beta", lang="fr"),
        page_link_line("A", "B"),
        "garbage",
    ]
    pairs = parse_lines(lines, PROFILES["labels"], counters)
    assert pairs == [(f"{RES}A", "Alpha")]
    assert counters.as_dict() == {
        "lines_total": 4,
        "lines_matched": 2,
        "lines_rejected": 1,
        "pairs_kept": 1,
    }


def test_custom_predicate_and_exclude():
    profile = build_profile("page_links", predicate="http://example.org/linksTo", exclude=["Secret"])
    line = f"<{RES}A> <http://example.org/linksTo> <{RES}B> ."
    assert parse_line(line, profile) == (f"{RES}A", f"{RES}B")
    assert parse_line(f"<{RES}A> <http://example.org/linksTo> <{RES}Secret_B> .", profile) is None


def test_unknown_profile_is_rejected():
    with pytest.raises(ValueError, match="Unsupported source profile"):
        build_profile("redirects")


def test_split_pattern_is_compiled_per_language():
    profile = build_profile("labels", language="pt-br")
    assert isinstance(profile.split_pattern, re.Pattern)
    assert "pt\\-br" in profile.split_pattern.pattern


def test_parse_lines_checks_each_line_once(monkeypatch):
    from dbpedia_graph.data.schema.types import TripleProfile

    calls = []
    real_matches = TripleProfile.matches

    def counting_matches(self, line):
        calls.append(line)
        return real_matches(self, line)

    monkeypatch.setattr(TripleProfile, "matches", counting_matches)
    lines = [label_line("A", "Alpha"), label_line("B", "Beta"), "garbage"]
    assert len(parse_lines(lines, PROFILES["labels"])) == 2
    assert calls == lines
