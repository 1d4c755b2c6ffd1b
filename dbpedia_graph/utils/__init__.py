from dbpedia_graph.utils.logging_utils import get_logger, init_logging, log_event

__all__ = ["get_logger", "init_logging", "log_event"]
