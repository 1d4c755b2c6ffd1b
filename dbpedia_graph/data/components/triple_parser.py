from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from dbpedia_graph.data.schema.constants import (
    _DEFAULT_EXCLUDES,
    _DEFAULT_LANGUAGE,
    _DEFAULT_PREDICATES,
    _SOURCE_ARTICLE_CATEGORIES,
    _SOURCE_LABELS,
    _SOURCE_PAGE_LINKS,
    _SOURCE_WIKIPEDIA_LINKS,
)
from dbpedia_graph.data.schema.types import StageCounters, TripleProfile

# `<s> <p> <o> .` -> ["<s>", "<p>", "<o>"]
URI_OBJECT_SPLIT = r"(?<=>)\s(?=<)|\s\.$"
# `<s> <p> "label"@en .` -> ["<s>", "<p>", "\"label\""]
LABEL_OBJECT_SPLIT = r"(?<=>)\s(?=<)|(?<=>)\s(?=\")|@{lang}\s\.$"
# `<s> <p> <o> .` -> ["", "s", "p", "o", ""]; brackets are consumed by the split itself.
BARE_URI_SPLIT = r"^<|>\s<|>\s\"|>\s\.$"

_URI_OPEN = "<"
_URI_CLOSE = ">"
_LITERAL_QUOTE = '"'
_MIN_FRAGMENTS = 2


@dataclass(frozen=True)
class ProfileShape:
    split_template: str
    key_index: int
    value_index: int
    literal_value: bool = False


DEFAULT_PROFILE_SHAPES: Dict[str, ProfileShape] = {
    # primaryTopic lines are `<wikipedia url> <p> <dbpedia resource>`; keyed by the resource.
    _SOURCE_WIKIPEDIA_LINKS: ProfileShape(URI_OBJECT_SPLIT, key_index=1, value_index=0),
    _SOURCE_LABELS: ProfileShape(LABEL_OBJECT_SPLIT, key_index=0, value_index=1, literal_value=True),
    _SOURCE_PAGE_LINKS: ProfileShape(BARE_URI_SPLIT, key_index=0, value_index=1),
    # dcterms:subject lines are `<page> <p> <category>`; keyed by the category.
    _SOURCE_ARTICLE_CATEGORIES: ProfileShape(URI_OBJECT_SPLIT, key_index=1, value_index=0),
}


def build_profile(
    name: str,
    *,
    predicate: Optional[str] = None,
    exclude: Optional[Sequence[str]] = None,
    language: str = _DEFAULT_LANGUAGE,
) -> TripleProfile:
    shape = DEFAULT_PROFILE_SHAPES.get(name)
    if shape is None:
        raise ValueError(f"Unsupported source profile: {name!r}. Expected one of {sorted(DEFAULT_PROFILE_SHAPES)}.")
    resolved_predicate = str(predicate) if predicate else _DEFAULT_PREDICATES[name]
    resolved_exclude = _DEFAULT_EXCLUDES[name] if exclude is None else tuple(str(item) for item in exclude if item)
    language = str(language).strip()
    if not language:
        raise ValueError("language must be a non-empty language tag.")
    split_pattern = re.compile(shape.split_template.format(lang=re.escape(language)))
    return TripleProfile(
        name=name,
        predicate=resolved_predicate,
        exclude=resolved_exclude,
        split_pattern=split_pattern,
        key_index=shape.key_index,
        value_index=shape.value_index,
        literal_value=shape.literal_value,
    )


def build_default_profiles(language: str = _DEFAULT_LANGUAGE) -> Dict[str, TripleProfile]:
    return {name: build_profile(name, language=language) for name in DEFAULT_PROFILE_SHAPES}


def split_fragments(line: str, profile: TripleProfile) -> List[str]:
    fragments = profile.split_pattern.split(line.strip())
    return [fragment for fragment in fragments if fragment and profile.predicate not in fragment]


def _unwrap_uri(fragment: str) -> Optional[str]:
    fragment = fragment.strip()
    if fragment.startswith(_URI_OPEN) and fragment.endswith(_URI_CLOSE):
        fragment = fragment[1:-1]
    elif any(token in fragment for token in (_LITERAL_QUOTE, _URI_OPEN, _URI_CLOSE)):
        return None
    return fragment or None


def _unwrap_literal(fragment: str) -> Optional[str]:
    fragment = fragment.strip()
    if len(fragment) < 2 or not (fragment.startswith(_LITERAL_QUOTE) and fragment.endswith(_LITERAL_QUOTE)):
        # Literals tagged with another language keep their `@xx .` tail and land here.
        return None
    return fragment[1:-1] or None


def _parse_matched(line: str, profile: TripleProfile) -> Optional[Tuple[str, str]]:
    fragments = split_fragments(line, profile)
    if len(fragments) < _MIN_FRAGMENTS:
        return None
    highest = max(profile.key_index, profile.value_index)
    if highest >= len(fragments):
        return None
    key = _unwrap_uri(fragments[profile.key_index])
    raw_value = fragments[profile.value_index]
    value = _unwrap_literal(raw_value) if profile.literal_value else _unwrap_uri(raw_value)
    if key is None or value is None:
        return None
    return key, value


def parse_line(line: str, profile: TripleProfile) -> Optional[Tuple[str, str]]:
    """Return the profile's (key, value) pair for ``line`` or None if the line is rejected."""

    if not profile.matches(line):
        return None
    return _parse_matched(line, profile)


def parse_lines(
    lines: Iterable[str],
    profile: TripleProfile,
    counters: Optional[StageCounters] = None,
) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    total = matched = 0
    for line in lines:
        total += 1
        if not profile.matches(line):
            continue
        matched += 1
        pair = _parse_matched(line, profile)
        if pair is not None:
            pairs.append(pair)
    if counters is not None:
        counters.add("lines_total", total)
        counters.add("lines_matched", matched)
        counters.add("lines_rejected", matched - len(pairs))
        counters.add("pairs_kept", len(pairs))
    return pairs
