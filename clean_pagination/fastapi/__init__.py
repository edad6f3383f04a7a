from .pagination_query import *  # NOQA
