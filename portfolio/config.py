import os
from dataclasses import dataclass
from typing import Mapping, Optional

from portfolio.clients import DEFAULT_API_BASE

ENV_API_BASE = "PORTFOLIO_API_BASE"
ENV_DEFAULT_USERNAME = "PORTFOLIO_DEFAULT_USERNAME"
ENV_REQUEST_TIMEOUT = "PORTFOLIO_REQUEST_TIMEOUT"
ENV_HOST = "PORTFOLIO_HOST"
ENV_PORT = "PORTFOLIO_PORT"

DEFAULT_USERNAME = "octocat"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@dataclass(frozen=True)
class ViewerSettings:
    api_base: str = DEFAULT_API_BASE
    default_username: str = DEFAULT_USERNAME
    request_timeout: Optional[float] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def _parse_timeout(raw: str) -> Optional[float]:
    if not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"{ENV_REQUEST_TIMEOUT} must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"{ENV_REQUEST_TIMEOUT} must be positive, got {raw!r}")
    return timeout


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PORT} must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"{ENV_PORT} out of range: {port}")
    return port


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ViewerSettings:
    """Build settings from the environment, raising ValueError on malformed values.

    An empty PORTFOLIO_DEFAULT_USERNAME turns off the search made at startup.
    """
    env = os.environ if environ is None else environ
    return ViewerSettings(
        api_base=env.get(ENV_API_BASE, "").strip() or DEFAULT_API_BASE,
        default_username=env.get(ENV_DEFAULT_USERNAME, DEFAULT_USERNAME).strip(),
        request_timeout=_parse_timeout(env.get(ENV_REQUEST_TIMEOUT, "")),
        host=env.get(ENV_HOST, "").strip() or DEFAULT_HOST,
        port=_parse_port(env.get(ENV_PORT, "").strip() or str(DEFAULT_PORT)),
    )
