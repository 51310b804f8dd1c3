"""Persisted client session: the signed-in user and their bearer token."""

from pathlib import Path

from orjson import OPT_INDENT_2
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads
from pydantic import BaseModel, ConfigDict, Field

from app.configs import settings
from app.monitoring import get_logger
from app.schemas.user import UserResponse

logger = get_logger(__name__)


class StoredSession(BaseModel):
    """The ``{currentUser, token}`` document kept on disk."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    current_user: UserResponse = Field(..., alias="currentUser")
    token: str = Field(..., min_length=1)


class SessionStore:
    """
    JSON file holding the signed-in user between runs.

    Corrupt or incomplete files are removed on load, so a broken session
    behaves like being signed out.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or settings.SESSION_FILE)

    def load(self) -> StoredSession | None:
        """
        Read the stored session.

        Returns:
            StoredSession | None: The session, or None when signed out or the file is unusable
        """
        if not self.path.exists():
            return None
        try:
            return StoredSession.model_validate(orjson_loads(self.path.read_bytes()))
        except (OSError, ValueError):
            # orjson and pydantic errors are both ValueErrors
            logger.warning(f"Discarding unreadable session file {self.path}")
            self.clear()
            return None

    def save(self, user: UserResponse, token: str) -> StoredSession:
        """Persist the user and token, replacing any previous session."""
        session = StoredSession(current_user=user, token=token)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(
            orjson_dumps(session.model_dump(mode="json", by_alias=True), option=OPT_INDENT_2),
        )
        return session

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    @property
    def token(self) -> str | None:
        session = self.load()
        return session.token if session else None
