"""Repository record models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HostConfig(BaseModel):
    """Per-host overrides for authentication and Git identity."""

    token: str | None = None
    username: str | None = None
    email: str | None = None


class RepositoryURL(BaseModel):
    """A repository URL split into its host, owner and name."""

    model_config = ConfigDict(frozen=True)

    host: str
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.host}/{self.owner}/{self.name}"

    @property
    def clone_url(self) -> str:
        """HTTPS clone URL for input given without a scheme."""
        return f"https://{self.slug}.git"


class Repository(BaseModel):
    """A repository tracked in the manifest.

    Records are created by ``add`` and deleted by ``remove``; nothing
    else mutates them. ``url`` is unique within a manifest.
    """

    name: str
    owner: str
    url: str
    path: str
    host: str
    created_at: datetime = Field(default_factory=_utcnow)

    def matches(self, keyword: str) -> bool:
        """Case-insensitive substring match over the identifying fields."""
        needle = keyword.lower()
        return any(
            needle in value.lower()
            for value in (self.name, self.owner, self.host, self.url)
        )
