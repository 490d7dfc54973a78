"""
SQL fragment builders shared by the data-access layer.

Both builders are pure functions: they take plain mappings and return a SQL
fragment using positional placeholders ($1, $2, ...) together with the list
of values bound to those placeholders, in placeholder order. Callers splice
the fragment into their own base query and hand both to
app.core.database.execute_positional.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.core.errors import (
    EmptyUpdateError,
    InvalidFilterValueError,
    InvertedRangeError,
    UnrecognizedFilterKeyError,
)


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    field_map: Mapping[str, str],
) -> Tuple[str, List[Any]]:
    """
    Build the SET part of a partial UPDATE.

    Args:
        data_to_update: Field name -> new value, in the order to emit
        field_map: Field name -> SQL column name; unmapped fields are used as-is

    Returns:
        (set_cols, values), e.g. for
        ({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}):
        ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        EmptyUpdateError: If data_to_update has no keys
    """
    if not data_to_update:
        raise EmptyUpdateError()

    cols = []
    values = []
    for idx, (name, value) in enumerate(data_to_update.items(), start=1):
        cols.append(f'"{field_map.get(name) or name}"=${idx}')
        values.append(value)

    return ", ".join(cols), values


class FilterKind(str, enum.Enum):
    """
    How a list filter turns into a predicate.

    - MIN: column >= value
    - MAX: column <= value
    - CONTAINS: case-insensitive substring match
    - FLAG: one of two fixed predicates, no parameter
    """
    MIN = "min"
    MAX = "max"
    CONTAINS = "contains"
    FLAG = "flag"


@dataclass(frozen=True)
class FilterField:
    column: str
    kind: FilterKind
    when_true: Optional[str] = None
    when_false: Optional[str] = None


COMPANY_FILTERS: Dict[str, FilterField] = {
    "minEmployees": FilterField("num_employees", FilterKind.MIN),
    "maxEmployees": FilterField("num_employees", FilterKind.MAX),
    "name": FilterField("name", FilterKind.CONTAINS),
}

JOB_FILTERS: Dict[str, FilterField] = {
    "title": FilterField("title", FilterKind.CONTAINS),
    "minSalary": FilterField("salary", FilterKind.MIN),
    "hasEquity": FilterField(
        "equity", FilterKind.FLAG, when_true="equity > 0", when_false="equity = 0"
    ),
}


def _to_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidFilterValueError(key, f"Filter {key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidFilterValueError(key, f"Filter {key} must be an integer")


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise InvalidFilterValueError(key, f"Filter {key} must be true or false")


def _check_recognized(
    filters: Mapping[str, Any],
    recognized: Mapping[str, FilterField],
) -> None:
    unknown = [key for key in filters if key not in recognized]
    if unknown:
        raise UnrecognizedFilterKeyError(unknown[0])


def sql_for_filters(
    filters: Mapping[str, Any],
    recognized: Mapping[str, FilterField],
) -> Tuple[str, List[Any]]:
    """
    Build a WHERE fragment (without the WHERE keyword) from list filters.

    Predicates are joined with AND in the order the keys were supplied.
    Placeholder numbers start at 1 and only advance for predicates that
    take a parameter.

    Args:
        filters: Filter key -> raw value (e.g. straight from a query string)
        recognized: The entity's accepted filter keys

    Returns:
        (where, values); ("", []) when filters is empty

    Raises:
        UnrecognizedFilterKeyError: Key outside `recognized`
        InvalidFilterValueError: Value cannot be read as the key's type
    """
    _check_recognized(filters, recognized)

    predicates = []
    values = []
    for key, raw in filters.items():
        field = recognized[key]

        if field.kind == FilterKind.FLAG:
            predicates.append(field.when_true if _to_bool(key, raw) else field.when_false)
            continue

        if field.kind == FilterKind.MIN:
            values.append(_to_int(key, raw))
            predicates.append(f"{field.column} >= ${len(values)}")
        elif field.kind == FilterKind.MAX:
            values.append(_to_int(key, raw))
            predicates.append(f"{field.column} <= ${len(values)}")
        elif field.kind == FilterKind.CONTAINS:
            values.append(f"%{raw}%")
            predicates.append(f"{field.column} ILIKE ${len(values)}")
        else:
            raise ValueError(f"Unhandled filter kind: {field.kind}")

    return " AND ".join(predicates), values


def sql_for_company_filters(filters: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """Company list filters; also rejects minEmployees > maxEmployees."""
    _check_recognized(filters, COMPANY_FILTERS)

    if "minEmployees" in filters and "maxEmployees" in filters:
        low = _to_int("minEmployees", filters["minEmployees"])
        high = _to_int("maxEmployees", filters["maxEmployees"])
        if low > high:
            raise InvertedRangeError(
                "minEmployees",
                "Min employees cannot be greater than max employees",
            )

    return sql_for_filters(filters, COMPANY_FILTERS)


def sql_for_job_filters(filters: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """Job list filters: title, minSalary, hasEquity."""
    return sql_for_filters(filters, JOB_FILTERS)
