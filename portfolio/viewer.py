import asyncio
from enum import Enum
from typing import Dict, List, Optional, Tuple

import httpx
from application_sdk.observability.logger_adaptor import get_logger

from portfolio.clients import GitHubClient
from portfolio.regions import ViewState
from portfolio.render import LANGUAGE_COLORS, build_repository_cards, project_profile
from portfolio.types import Repository, UserProfile

logger = get_logger(__name__)

EMPTY_USERNAME_PROMPT = "Please enter a GitHub username"


class EmptyUsernameError(ValueError):
    """Raised before any request is made when the username is blank."""


class FetchError(Exception):
    """Either provider request failed; the cause is chained, never shown to the user."""


class SearchStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    STALE = "stale"


class PortfolioViewer:
    """Owns the page regions and drives one search at a time through them.

    Every search is numbered. Only the most recently started search may touch
    the regions once its requests settle; results of older searches are dropped.
    """

    def __init__(self, client: GitHubClient, language_colors: Optional[Dict[str, str]] = None):
        self.client = client
        self.language_colors = dict(LANGUAGE_COLORS if language_colors is None else language_colors)
        self.state = ViewState()
        self.username = ""
        self._sequence = 0

    @property
    def sequence(self) -> int:
        return self._sequence

    async def fetch_portfolio(self, username: str) -> Tuple[UserProfile, List[Repository]]:
        """Fetch the profile and repositories concurrently; fail if either fails."""
        try:
            user, repos = await asyncio.gather(
                self.client.fetch_user_profile_data(username),
                self.client.fetch_repository_data(username),
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise FetchError(f"Could not fetch GitHub data for '{username}'") from e
        return user, repos

    async def handle_search(self, username: str) -> SearchStatus:
        username = (username or "").strip()
        if not username:
            raise EmptyUsernameError(EMPTY_USERNAME_PROMPT)

        self._sequence += 1
        sequence = self._sequence
        self.username = username

        self.state.reset_display()
        self.state.loading.show()
        logger.info("Search #%d started for '%s'", sequence, username)

        try:
            user, repos = await self.fetch_portfolio(username)
        except FetchError as e:
            if self._is_stale(sequence, username):
                return SearchStatus.STALE
            self.state.loading.hide()
            self.state.error.show()
            logger.error("Error fetching GitHub data for '%s': %s", username, e.__cause__ or e)
            return SearchStatus.ERROR

        if self._is_stale(sequence, username):
            return SearchStatus.STALE

        self.state.loading.hide()
        self.state.ensure_error_hidden()
        self.display_profile(user)
        self.display_repositories(repos)
        logger.info("Search #%d rendered %d repositories for '%s'", sequence, len(repos), username)
        return SearchStatus.SUCCESS

    async def load_default_user(self, username: str) -> SearchStatus:
        logger.info("Loading default user '%s'", username)
        return await self.handle_search(username)

    def _is_stale(self, sequence: int, username: str) -> bool:
        if sequence == self._sequence:
            return False
        logger.warning(
            "Discarding result of search #%d for '%s'; search #%d is newer",
            sequence,
            username,
            self._sequence,
        )
        return True

    def display_profile(self, user: UserProfile) -> None:
        self.state.profile.content = project_profile(user)
        self.state.profile.show()

    def display_repositories(self, repos: List[Repository]) -> None:
        # Full replace: the previous batch of cards never survives a new search.
        self.state.repositories.content = build_repository_cards(repos, self.language_colors)
        self.state.repositories.show()
