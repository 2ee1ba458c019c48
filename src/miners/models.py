"""
Repository Mining Data Models.

Defines the common data models returned by repository miners.
Uses Pydantic for validation and serialization.
"""

from typing import List

from pydantic import BaseModel, ConfigDict


class RepositoryIdentity(BaseModel):
    """Organization and repository name pair."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class CommitDetail(BaseModel):
    """Raw commit data needed to package a sample."""

    model_config = ConfigDict(frozen=True)

    sha: str
    message: str = ""
    patches: List[str] = []
