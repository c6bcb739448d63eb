from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def as_utc(value: Optional[datetime]) -> Optional[str]:
    # SQLite hands back naive datetimes; every stored timestamp is UTC
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class CamelModel(BaseModel):
    """Base for API shapes: snake_case attributes, camelCase JSON keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageMeta(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class Envelope(BaseModel):
    data: list
    meta: PageMeta
    links: Dict[str, str]

    def to_response(self) -> dict:
        return {
            "data": self.data,
            "meta": self.meta.model_dump(),
            "_links": self.links,
        }
