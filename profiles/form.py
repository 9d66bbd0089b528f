"""Add/edit form state: create mode vs. editing an existing profile."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any

import structlog
from api.upload import UploadAdapter, UploadFile
from profiles.models import CreateProfileRequest, UpdateProfileRequest, UserProfile
from profiles.store import ProfileStore

log = structlog.get_logger(__name__)


class FormMode(str, Enum):
    CREATE = "create"
    EDITING = "editing"


@dataclass
class ProfileFields:
    """Current form values. Optional fields use "" for unset."""
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    country: str = ""
    avatar_url: str = ""
    is_active: bool = True


_FIELD_NAMES = {f.name for f in fields(ProfileFields)}
_OPTIONAL_FIELDS = ("phone_number", "country", "avatar_url")


class ProfileForm:
    """State machine behind the add/edit form.

    Starts in CREATE mode. ``begin_edit`` switches to EDITING for one profile id,
    ``reset`` (or a successful submit) returns to CREATE with cleared fields.
    """

    def __init__(self) -> None:
        self.fields = ProfileFields()
        self.editing_id: str | None = None
        # Optional fields that held a value when editing began
        self._loaded: set[str] = set()

    @property
    def mode(self) -> FormMode:
        return FormMode.CREATE if self.editing_id is None else FormMode.EDITING

    def begin_edit(self, profile: UserProfile) -> None:
        self.editing_id = profile.id
        self.fields = ProfileFields(
            full_name=profile.full_name,
            email=profile.email,
            phone_number=profile.phone_number or "",
            country=profile.country or "",
            avatar_url=profile.avatar_url or "",
            is_active=profile.is_active,
        )
        self._loaded = {name for name in _OPTIONAL_FIELDS if getattr(self.fields, name)}

    def reset(self) -> None:
        self.fields = ProfileFields()
        self.editing_id = None
        self._loaded = set()

    def update(self, **values: Any) -> None:
        """Set field values from user input. Unknown names raise KeyError."""
        unknown = set(values) - _FIELD_NAMES
        if unknown:
            raise KeyError(f"Unknown form field(s): {', '.join(sorted(unknown))}")
        for name, value in values.items():
            if name == "is_active":
                value = bool(value)
            elif value is None:
                value = ""
            setattr(self.fields, name, value)

    def is_complete(self) -> bool:
        return bool(self.fields.full_name.strip() and self.fields.email.strip())

    def build_request(self) -> CreateProfileRequest | UpdateProfileRequest | None:
        """Build the request for the current mode, or None if required fields are empty."""
        if not self.is_complete():
            return None
        values = asdict(self.fields)
        if self.mode is FormMode.CREATE:
            # Empty optional fields are left out of the payload
            return CreateProfileRequest(**{k: v for k, v in values.items() if v != ""})
        # A field emptied during the edit is sent as "" so the server clears it
        return UpdateProfileRequest(**{
            k: v for k, v in values.items() if v != "" or k in self._loaded
        })

    async def submit(self, store: ProfileStore) -> bool:
        """Dispatch the form to the store. Resets the form when the dispatch succeeds."""
        request = self.build_request()
        if request is None:
            log.debug("submit_dropped", reason="missing_required_fields")
            return False

        editing_id = self.editing_id
        if editing_id is None:
            ok = await store.create(request)  # type: ignore[arg-type]
        else:
            ok = await store.update(editing_id, request)  # type: ignore[arg-type]

        if ok:
            self.reset()
        return ok

    async def attach_avatar(self, adapter: UploadAdapter, files: Sequence[UploadFile]) -> str | None:
        """Upload a dropped image and keep its URL for the next submit."""
        url = await adapter.drop(files)
        if url:
            self.fields.avatar_url = url
        return url

    def remove_avatar(self) -> None:
        self.fields.avatar_url = ""
