# (c) Nelen & Schuurmans

from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy import Select

__all__ = ["count_query"]


def count_query(query: Select) -> Select:
    """Rewrite a SELECT so that it returns the number of rows it would produce.

    The projected columns are replaced by ``count(*) AS count``; the FROM, JOIN,
    WHERE and GROUP BY clauses (and their bound parameters) are kept as they are.
    ORDER BY is dropped because it does not influence the count. LIMIT and
    OFFSET are dropped as well: the paging option replaces them on the data
    query, so the total counts every matching row.

    A query with GROUP BY or DISTINCT yields one row per group, so it is wrapped
    in a subquery to count its result rows instead.
    """
    query = query.order_by(None).limit(None).offset(None)
    # Select has no public accessor for these; both are read-only here
    if query._group_by_clauses or query._distinct:
        return select(func.count().label("count")).select_from(query.subquery())
    return query.with_only_columns(
        func.count().label("count"), maintain_column_froms=True
    )
