# -*- coding: utf-8 -*-
# (c) Nelen & Schuurmans

from .domain.exceptions import *  # NOQA
from .domain.list_option import *  # NOQA
from .domain.pagination import *  # NOQA
from .domain.types import *  # NOQA
from .domain.value_object import ValueObject  # NOQA
from .sql.count_query import count_query  # NOQA
from .sql.sql_provider import *  # NOQA
from .sql.sql_runner import SQLRunner  # NOQA

# fmt: off
__version__ = '0.0.1.dev0'
# fmt: on
