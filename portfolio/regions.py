from dataclasses import dataclass, field
from typing import Any, Dict, List

LOADING = "loading"
PROFILE = "profile"
REPOSITORIES = "repositories"
ERROR = "error"

REGION_NAMES = (LOADING, PROFILE, REPOSITORIES, ERROR)


@dataclass
class Region:
    """One toggleable area of the page. Showing or hiding twice is a no-op."""

    name: str
    visible: bool = False
    content: Any = None

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False


@dataclass
class ViewState:
    """Visibility of the four page regions plus what each one currently displays."""

    loading: Region = field(default_factory=lambda: Region(LOADING))
    profile: Region = field(default_factory=lambda: Region(PROFILE))
    repositories: Region = field(default_factory=lambda: Region(REPOSITORIES, content=[]))
    error: Region = field(default_factory=lambda: Region(ERROR))

    def regions(self) -> List[Region]:
        return [self.loading, self.profile, self.repositories, self.error]

    def reset_display(self) -> None:
        # Loading is left alone; the caller shows it right after a reset.
        self.profile.hide()
        self.repositories.hide()
        self.error.hide()

    def ensure_error_hidden(self) -> None:
        if self.error.visible:
            self.error.hide()

    def snapshot(self) -> Dict[str, bool]:
        return {region.name: region.visible for region in self.regions()}
