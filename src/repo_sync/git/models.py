"""Result models for repository operations."""
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# SHA-1 and SHA-256 object names
REVISION_LENGTHS = (40, 64)


def validate_revision(v: str) -> str:
    """Ensure a revision is a full hexadecimal object name."""
    if len(v) not in REVISION_LENGTHS:
        raise ValueError(
            f"revision must be 40 or 64 hex characters; got '{v}' (len={len(v)})"
        )
    if not all(c in "0123456789abcdef" for c in v.lower()):
        raise ValueError(f"revision must be hexadecimal; got '{v}'")
    return v


class UpdateResult(BaseModel):
    """Outcome of a repository update.

    ``ref`` names what the clone now follows: the full local branch path
    (e.g. refs/heads/master) when the remote's default branch was used,
    or the ref exactly as requested otherwise.
    """

    ref: str = Field(..., description="Branch path or requested ref the update resolved")
    previous: str = Field(..., description="HEAD commit before the update")
    current: str = Field(..., description="HEAD commit after the update")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "ref": "refs/heads/master",
                "previous": "abc123def456abc123def456abc123def456abc1",
                "current": "def456abc123def456abc123def456abc123def4",
            }
        },
    )

    @field_validator("previous", "current")
    @classmethod
    def validate_commit_sha(cls, v: str) -> str:
        return validate_revision(v)

    @property
    def changed(self) -> bool:
        """True unless the clone was already up to date."""
        return self.previous != self.current

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.ref, self.previous, self.current)


class CommitSummary(BaseModel):
    """One commit in a changelog."""

    revision: str
    summary: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("revision")
    @classmethod
    def validate_commit_sha(cls, v: str) -> str:
        return validate_revision(v)

    @property
    def short(self) -> str:
        return self.revision[:12]
