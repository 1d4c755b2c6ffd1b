from __future__ import annotations

_ZERO = 0
_ONE = 1
_MIN_CHUNK_SIZE = 1
_DEFAULT_CHUNK_SIZE = 100_000
_DISABLE_PARALLEL_WORKERS = 0
_PARTITIONS_PER_WORKER = 4
_PAGE_ID_BASE = 0
_DEFAULT_LANGUAGE = "en"
_FIELD_SEPARATOR = "\t"
_LINE_TERMINATOR = "\n"
_SOURCE_ENCODING = "utf-8"
_SOURCE_PART_GLOB = "part-*"

_SOURCE_WIKIPEDIA_LINKS = "wikipedia_links"
_SOURCE_LABELS = "labels"
_SOURCE_PAGE_LINKS = "page_links"
_SOURCE_ARTICLE_CATEGORIES = "article_categories"
_REQUIRED_SOURCES = (
    _SOURCE_WIKIPEDIA_LINKS,
    _SOURCE_LABELS,
    _SOURCE_PAGE_LINKS,
    _SOURCE_ARTICLE_CATEGORIES,
)

_DEFAULT_PREDICATES = {
    _SOURCE_WIKIPEDIA_LINKS: "http://xmlns.com/foaf/0.1/primaryTopic",
    _SOURCE_LABELS: "http://www.w3.org/2000/01/rdf-schema#label",
    _SOURCE_PAGE_LINKS: "http://dbpedia.org/ontology/wikiPageWikiLink",
    _SOURCE_ARTICLE_CATEGORIES: "http://purl.org/dc/terms/subject",
}
_EXCLUDE_FILE_PATTERN = "http://dbpedia.org/resource/File:"
_EXCLUDE_CATEGORY_PATTERN = "http://dbpedia.org/resource/Category:"
_DEFAULT_EXCLUDES = {
    _SOURCE_WIKIPEDIA_LINKS: (_EXCLUDE_FILE_PATTERN,),
    _SOURCE_LABELS: (_EXCLUDE_FILE_PATTERN,),
    _SOURCE_PAGE_LINKS: (_EXCLUDE_FILE_PATTERN, _EXCLUDE_CATEGORY_PATTERN),
    _SOURCE_ARTICLE_CATEGORIES: (),
}

_TABLE_PAGE_NODES = "page_nodes"
_TABLE_PAGE_LINKS = "page_links"
_TABLE_CATEGORY_NODES = "category_nodes"
_TABLE_CATEGORY_LINKS = "category_links"
_TABLES = (_TABLE_PAGE_NODES, _TABLE_PAGE_LINKS, _TABLE_CATEGORY_NODES, _TABLE_CATEGORY_LINKS)
_DEFAULT_TABLE_FILENAMES = {
    _TABLE_PAGE_NODES: "pagenodes.tsv",
    _TABLE_PAGE_LINKS: "pagerels.tsv",
    _TABLE_CATEGORY_NODES: "categorynodes.tsv",
    _TABLE_CATEGORY_LINKS: "categoryrels.tsv",
}
_DEFAULT_TABLE_HEADERS = {
    _TABLE_PAGE_NODES: "id:ID\t:LABEL\twikipedia\ttitle",
    _TABLE_PAGE_LINKS: ":START_ID\t:END_ID\t:TYPE",
    _TABLE_CATEGORY_NODES: "id:ID\t:LABEL\ttitle",
    _TABLE_CATEGORY_LINKS: ":START_ID\t:END_ID\t:TYPE",
}
_DEFAULT_RELATION_TAGS = {
    _TABLE_PAGE_LINKS: "HAS_LINK",
    _TABLE_CATEGORY_LINKS: "HAS_CATEGORY",
}
_PAGE_TYPE_TAG = "Page"
_CATEGORY_TYPE_TAG = "Category"

_PAGE_INDEX_FILENAME = "page_index.parquet"
_CATEGORY_INDEX_FILENAME = "category_index.parquet"
_PAGE_MANIFEST_FILENAME = "page_phase_manifest.json"

_PARSE_STAT_KEYS = ("lines_total", "lines_matched", "lines_rejected", "pairs_kept")
_ENCODE_STAT_KEYS = ("edges_total", "edges_kept", "edges_dropped")


class IdentityFields:
    KEY = "key"
    ID = "id"
    KIND = "kind"


_IDENTITY_PARQUET_FIELDS = (
    IdentityFields.KEY,
    IdentityFields.ID,
    IdentityFields.KIND,
)
