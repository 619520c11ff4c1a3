from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from artprints.models.artworks import Artwork

ACCOUNT_TYPES = ("artist", "printshop")


class FirebaseAuthResult(BaseModel):
    """Subset of the Firebase Auth REST response for sign in / sign up."""

    id_token: str = Field(alias="idToken")
    refresh_token: str = Field(alias="refreshToken")
    local_id: str = Field(alias="localId")
    email: EmailStr
    expires_in: int = Field(default=3600, alias="expiresIn")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("expires_in", mode="before")
    @classmethod
    def parse_expires_in(cls, v: Any) -> int:
        # Firebase sends the lifetime as a string of seconds
        return int(v)

    @property
    def expire_datetime(self) -> datetime:
        return datetime.now(timezone.utc) + timedelta(seconds=self.expires_in)


class UserSession(BaseModel):
    """Signed-in state kept in the browser ``local-store``."""

    logged_in: bool = False
    email: str | None = None
    user_id: str | None = None
    id_token: str | None = None
    refresh_token: str | None = None
    expire_datetime: datetime | None = None
    session_cookie: str | None = None

    @classmethod
    def from_store(cls, data: dict[str, Any] | None) -> "UserSession":
        """Parse ``local-store`` data; anything unreadable is a signed-out session."""
        if not data:
            return cls()
        try:
            return cls.model_validate(data)
        except ValueError:
            return cls()

    @classmethod
    def from_auth_result(cls, result: FirebaseAuthResult, session_cookie: str | None) -> "UserSession":
        return cls(
            logged_in=True,
            email=result.email,
            user_id=result.local_id,
            id_token=result.id_token,
            refresh_token=result.refresh_token,
            expire_datetime=result.expire_datetime,
            session_cookie=session_cookie,
        )

    @property
    def is_authenticated(self) -> bool:
        return self.logged_in and bool(self.session_cookie)

    def token_expired(self, margin_seconds: int = 60) -> bool:
        if not self.id_token or not self.expire_datetime:
            return True
        expire = self.expire_datetime
        if expire.tzinfo is None:
            expire = expire.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) >= expire - timedelta(seconds=margin_seconds)

    def to_store(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class UserProfile(BaseModel):
    name: str = ""
    email: str | None = None
    description: str | None = None
    date_of_birth: str | None = Field(default=None, alias="dateOfBirth")
    avatar_url: str | None = Field(default=None, alias="avatarUrl")
    background_url: str | None = Field(default=None, alias="backgroundUrl")
    roles: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("roles", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return v or []


class ProfileResponse(BaseModel):
    """Response of ``GET /getprofile``."""

    user: UserProfile
    artworks: list[Artwork] = Field(default_factory=list)

    @field_validator("artworks", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return v or []
