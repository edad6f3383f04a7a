from .asyncpg_sql_database import *  # NOQA
from .config import *  # NOQA
from .count_query import *  # NOQA
from .sql_provider import *  # NOQA
from .sql_runner import *  # NOQA
