from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, AsyncIterator, Dict, Optional

from application_sdk.observability.logger_adaptor import get_logger
from fastapi import FastAPI, Query
from fastapi.responses import HTMLResponse

from portfolio.render import render_page
from portfolio.viewer import EmptyUsernameError, PortfolioViewer

logger = get_logger(__name__)


def create_app(viewer: PortfolioViewer, default_username: Optional[str] = None) -> FastAPI:
    """Build the web application around an already constructed viewer.

    Args:
        viewer: The viewer whose regions the page displays.
        default_username: Searched once at startup when given.
    """

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if default_username:
            await viewer.load_default_user(default_username)
        try:
            yield
        finally:
            await viewer.client.close()
            logger.info("GitHub client closed.")

    app = FastAPI(title="GitHub Portfolio Viewer", lifespan=lifespan)
    app.state.viewer = viewer

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return render_page(viewer.state, username=viewer.username)

    @app.get("/search", response_class=HTMLResponse)
    async def search(username: str = Query("")) -> str:
        try:
            await viewer.handle_search(username)
        except EmptyUsernameError as e:
            logger.info("Rejected empty username.")
            return render_page(viewer.state, prompt=str(e), username=username)
        return render_page(viewer.state, username=viewer.username)

    @app.get("/api/state")
    async def state() -> Dict[str, Any]:
        profile = viewer.state.profile.content
        return {
            "username": viewer.username,
            "sequence": viewer.sequence,
            "regions": viewer.state.snapshot(),
            "profile": asdict(profile) if profile else None,
            "repositories": [asdict(card) for card in viewer.state.repositories.content or []],
        }

    return app
