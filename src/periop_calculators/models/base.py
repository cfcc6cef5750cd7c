"""Shared pydantic configuration for calculator records.

Python code uses snake_case attribute names; the external contract uses
camelCase.  Every record generates camelCase aliases so that
``model_dump(by_alias=True)`` yields the contract field names, and
``populate_by_name`` lets callers build records with either spelling.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Contract names that plain camelCase conversion gets wrong.
ALIAS_OVERRIDES: dict[str, str] = {
    "history_of_ponv": "historyOfPONV",
}


def alias_for(name: str) -> str:
    """camelCase wire name for a snake_case field."""
    if name.isupper():
        # STOP-BANG component letters are already contract names
        return name
    return ALIAS_OVERRIDES.get(name) or to_camel(name)


class RecordModel(BaseModel):
    """Immutable value record with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=alias_for,
        populate_by_name=True,
    )


class InputModel(RecordModel):
    """Calculator input: strict, so "yes" is never coerced to ``True``."""

    model_config = ConfigDict(strict=True)
