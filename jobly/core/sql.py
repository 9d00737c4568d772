"""
SQL helpers shared by the repositories.
"""

from typing import Any, Dict, List, Mapping, NamedTuple

from jobly.core.exceptions import BadRequestError


class PartialUpdate(NamedTuple):
    """SET clause body and the bind values for its placeholders, in order."""
    set_cols: str
    values: List[Any]


def sql_for_partial_update(data_to_update: Mapping[str, Any], js_to_sql: Dict[str, str]) -> PartialUpdate:
    """
    Build the column assignments for an UPDATE from a sparse set of fields.

    {"firstName": "Aliya", "age": 32} with {"firstName": "first_name"} gives
    set_cols '"first_name"=$1, "age"=$2' and values ["Aliya", 32].

    Fields missing from ``js_to_sql`` are used as the column name as-is.

    Raises:
        BadRequestError: if there is nothing to update
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [f'"{js_to_sql.get(key, key)}"=${idx}' for idx, key in enumerate(keys, start=1)]

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )
