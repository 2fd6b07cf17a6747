from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserProfile(BaseModel):
    login: str
    name: Optional[str] = None
    avatar_url: str
    bio: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime
    public_repos: int
    followers: int
    following: int
    html_url: str


class Repository(BaseModel):
    name: str
    description: Optional[str] = None
    language: Optional[str] = None
    html_url: str
    stargazers_count: int
    forks_count: int
    updated_at: datetime
