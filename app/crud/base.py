"""
Checks shared by the partial-update functions.
"""

from typing import Any, Iterable, Mapping

from app.core.errors import BadRequestError


def check_update_data(
    entity: str,
    data: Mapping[str, Any],
    updatable: Iterable[str],
    required: Iterable[str] = (),
) -> None:
    """
    Validate an update mapping before it reaches the SQL builder.

    Field names become column identifiers in the UPDATE, so only the
    entity's updatable fields are let through.

    Args:
        entity: Name used in error messages ("company", "job", "user")
        data: Field name -> new value
        updatable: Fields that may be changed
        required: Fields backed by NOT NULL columns

    Raises:
        BadRequestError: Unknown field, or null for a required field
    """
    updatable = set(updatable)
    invalid = [key for key in data if key not in updatable]
    if invalid:
        raise BadRequestError(f"Cannot update {entity} field(s): {', '.join(invalid)}")

    nulled = [key for key in required if key in data and data[key] is None]
    if nulled:
        raise BadRequestError(f"{entity.capitalize()} field(s) cannot be null: {', '.join(nulled)}")
