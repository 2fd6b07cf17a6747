"""Projection of provider records onto page regions, and HTML rendering of the page."""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from portfolio.regions import ViewState
from portfolio.types import Repository, UserProfile

LANGUAGE_COLORS: Dict[str, str] = {
    "JavaScript": "#f1e05a",
    "Python": "#3572A5",
    "Java": "#b07219",
    "TypeScript": "#2b7489",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "C++": "#f34b7d",
    "C": "#555555",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "PHP": "#4F5D95",
    "Ruby": "#701516",
    "Swift": "#ffac45",
    "Kotlin": "#F18E33",
    "C#": "#239120",
    "Shell": "#89e051",
}
FALLBACK_LANGUAGE_COLOR = "#8b949e"

NO_BIO_MESSAGE = "No bio available"
NO_DESCRIPTION_MESSAGE = "No description available"
JOINED_TEMPLATE = "Joined {date}"
UPDATED_TEMPLATE = "Updated {date}"

# Fixed English names; strftime would follow the process locale.
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
PAGE_TEMPLATE = "page.html"

_environment = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


@dataclass
class ProfileView:
    avatar_url: str
    avatar_alt: str
    display_name: str
    handle: str
    bio: str
    location: Optional[str]
    joined: str
    public_repos: int
    followers: int
    following: int
    profile_url: str


@dataclass
class LanguageBadge:
    name: str
    color: str


@dataclass
class RepoCard:
    name: str
    url: str
    description: str
    language: Optional[LanguageBadge]
    stars: int
    forks: int
    updated: str


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_join_date(created_at: datetime) -> str:
    """Month name and year, e.g. "Joined January 2008"."""
    value = _as_utc(created_at)
    return JOINED_TEMPLATE.format(date=f"{MONTH_NAMES[value.month - 1]} {value.year}")


def format_updated_date(updated_at: datetime) -> str:
    """Abbreviated month, day and year, e.g. "Updated Mar 5, 2023"."""
    value = _as_utc(updated_at)
    return UPDATED_TEMPLATE.format(date=f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year}")


def language_color(language: Optional[str], colors: Optional[Dict[str, str]] = None) -> str:
    table = LANGUAGE_COLORS if colors is None else colors
    if not language:
        return FALLBACK_LANGUAGE_COLOR
    return table.get(language, FALLBACK_LANGUAGE_COLOR)


def project_profile(user: UserProfile) -> ProfileView:
    return ProfileView(
        avatar_url=user.avatar_url,
        avatar_alt=f"{user.login}'s avatar",
        display_name=user.name or user.login,
        handle=f"@{user.login}",
        bio=user.bio or NO_BIO_MESSAGE,
        # Empty strings count as absent so the location element is dropped, not left blank.
        location=user.location or None,
        joined=format_join_date(user.created_at),
        public_repos=user.public_repos,
        followers=user.followers,
        following=user.following,
        profile_url=user.html_url,
    )


def build_repository_card(repo: Repository, colors: Optional[Dict[str, str]] = None) -> RepoCard:
    badge = None
    if repo.language:
        badge = LanguageBadge(name=repo.language, color=language_color(repo.language, colors))
    return RepoCard(
        name=repo.name,
        url=repo.html_url,
        description=repo.description or NO_DESCRIPTION_MESSAGE,
        language=badge,
        stars=repo.stargazers_count,
        forks=repo.forks_count,
        updated=format_updated_date(repo.updated_at),
    )


def build_repository_cards(
    repos: Iterable[Repository], colors: Optional[Dict[str, str]] = None
) -> List[RepoCard]:
    return [build_repository_card(repo, colors) for repo in repos]


def render_page(state: ViewState, prompt: Optional[str] = None, username: str = "") -> str:
    """Render the whole page for the current regions.

    Hidden regions are still emitted, carrying the ``hidden`` class, so the page
    layout matches the region state one to one.
    """
    template = _environment.get_template(PAGE_TEMPLATE)
    return template.render(
        state=state,
        profile=state.profile.content,
        cards=state.repositories.content or [],
        prompt=prompt,
        username=username,
    )
