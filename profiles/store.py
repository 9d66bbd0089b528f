"""Profile store: holds the last fetched list and re-fetches after every mutation."""

from urllib.parse import quote

import structlog
from api.client import ApiClient
from config.constants import PROFILES_PATH, ErrorMessage
from profiles.models import CreateProfileRequest, UpdateProfileRequest, UserProfile

log = structlog.get_logger(__name__)


def profile_path(profile_id: str) -> str:
    return f"{PROFILES_PATH}/{quote(profile_id, safe='')}"


class ProfileStore:
    """In-memory snapshot of the profile list plus loading/error state.

    ``profiles`` is only ever replaced wholesale by a successful ``refresh()``.
    Mutations never edit it in place; they go through ``after_mutation()``,
    which re-fetches the full list.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.profiles: list[UserProfile] = []
        self.loading = True
        self.error: str | None = None
        # Monotonic refresh tags; responses older than the last applied one are dropped
        self._issued_seq = 0
        self._applied_seq = 0

    @property
    def total(self) -> int:
        return len(self.profiles)

    def get(self, profile_id: str) -> UserProfile | None:
        """Find a profile in the current snapshot."""
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None

    async def refresh(self) -> bool:
        """Fetch the full list. Returns True if the result was applied."""
        self._issued_seq += 1
        seq = self._issued_seq
        self.loading = True
        try:
            data = await self.client.get(PROFILES_PATH)
            profiles = [UserProfile.model_validate(item) for item in data]
        except Exception as e:
            log.error("profiles_fetch_failed", seq=seq, error=str(e))
            if seq > self._applied_seq:
                self.error = ErrorMessage.FETCH.value
            return False
        finally:
            self.loading = False

        if seq < self._applied_seq:
            log.info("stale_refresh_discarded", seq=seq, applied=self._applied_seq)
            return False

        self._applied_seq = seq
        self.profiles = profiles
        self.error = None
        log.debug("profiles_refreshed", count=len(profiles), seq=seq)
        return True

    async def after_mutation(self) -> None:
        """Re-fetch after a successful create/update/remove."""
        await self.refresh()

    async def create(self, request: CreateProfileRequest) -> bool:
        try:
            await self.client.post(PROFILES_PATH, request.to_payload())
        except Exception as e:
            return self._mutation_failed("create", ErrorMessage.CREATE, e)
        log.info("profile_created", email=request.email)
        await self.after_mutation()
        return True

    async def update(self, profile_id: str, request: UpdateProfileRequest) -> bool:
        try:
            await self.client.patch(profile_path(profile_id), request.to_payload())
        except Exception as e:
            return self._mutation_failed("update", ErrorMessage.UPDATE, e, profile_id=profile_id)
        log.info("profile_updated", profile_id=profile_id)
        await self.after_mutation()
        return True

    async def remove(self, profile_id: str) -> bool:
        try:
            await self.client.delete(profile_path(profile_id))
        except Exception as e:
            return self._mutation_failed("delete", ErrorMessage.DELETE, e, profile_id=profile_id)
        log.info("profile_deleted", profile_id=profile_id)
        await self.after_mutation()
        return True

    def _mutation_failed(
        self,
        action: str,
        message: ErrorMessage,
        error: Exception,
        profile_id: str | None = None,
    ) -> bool:
        log.error("profile_mutation_failed", action=action, profile_id=profile_id, error=str(error))
        self.error = message.value
        return False
