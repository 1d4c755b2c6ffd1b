"""Build Neo4j-ready node and edge tables from DBpedia triple dumps."""

__version__ = "0.1.0"
