"""Shared schema pieces."""

from pydantic import BaseModel, ConfigDict


def capitalize(value: str) -> str:
    """Upper-case the first character, leave the rest alone."""
    if value:
        return value[0].upper() + value[1:]
    return value


class UserSummary(BaseModel):
    """Minimal user reference embedded in other resources."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
