"""Advisory collaborator configuration via environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AdvisorySettings(BaseSettings):
    model_config = {"env_prefix": "ADVISORY_"}

    # unset disables the collaborator entirely; engines then decide locally
    base_url: str | None = None
    timeout_seconds: float = Field(default=5.0, gt=0)
    difficulty: str = Field(default="hard", min_length=1)

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    @property
    def enabled(self) -> bool:
        return self.base_url is not None
