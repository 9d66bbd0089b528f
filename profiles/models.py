"""Wire models for profile records and mutation requests."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserProfile(_CamelModel):
    """A server-owned profile record. Timestamps are kept as opaque strings."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    full_name: str
    email: str
    phone_number: str | None = None
    country: str | None = None
    avatar_url: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


class CreateProfileRequest(_CamelModel):
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone_number: str | None = None
    country: str | None = None
    avatar_url: str | None = None
    is_active: bool = True

    def to_payload(self) -> dict[str, Any]:
        """JSON body with unset optional fields left out entirely."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UpdateProfileRequest(_CamelModel):
    """Partial update: only fields that were set are sent."""

    full_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    country: str | None = None
    avatar_url: str | None = None
    is_active: bool | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
