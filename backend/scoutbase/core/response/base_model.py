from datetime import date, datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CustomBaseModel(BaseModel):
    """Base for every portal entity.

    The portal API speaks camelCase (snake_case for announcements), so
    fields validate from either spelling and dump by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("*", mode="after")
    @classmethod
    def ensure_utc_timezone(cls, value: Any) -> Any:
        """
        Naive datetimes coming from the portal are UTC; make them aware so
        that ordering never mixes naive and aware values.
        """
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def _coerce_portal_date(value: Any) -> Any:
    # DATE columns arrive either as "2025-06-14" or as a midnight timestamp
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        return date.fromisoformat(value.split("T", 1)[0])
    return value


PortalDate = Annotated[date, BeforeValidator(_coerce_portal_date)]
OptionalPortalDate = Annotated[date | None, BeforeValidator(_coerce_portal_date)]
