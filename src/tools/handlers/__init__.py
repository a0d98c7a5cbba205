"""Tool handlers package."""

from tools.handlers.aggregation_handler import AggregationHandler
from tools.handlers.query_handler import QueryHandler
from tools.handlers.write_handler import WriteHandler
from tools.handlers.admin_handler import AdminHandler

__all__ = [
    'AggregationHandler',
    'QueryHandler',
    'WriteHandler',
    'AdminHandler',
]
