"""URL construction for GitHub REST endpoints."""

from collections.abc import Mapping
from urllib.parse import quote, urlencode

from .models import API_BASE

ParamValue = str | int | float | bool | None


def _param_to_str(value: ParamValue) -> str:
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Mapping[str, ParamValue] | None) -> str:
    """Form-encode present parameters in mapping order, dropping None values."""
    if not params:
        return ""
    pairs = [(key, _param_to_str(value)) for key, value in params.items() if value is not None]
    return urlencode(pairs)


def build_url(
    path: str,
    params: Mapping[str, ParamValue] | None = None,
    base_url: str = API_BASE,
) -> str:
    """Resolve `path` against `base_url` and append the query string.

    >>> build_url("/notifications", {"all": True, "since": None, "per_page": 50})
    'https://api.github.com/notifications?all=true&per_page=50'
    """
    ep = path if path.startswith("/") else f"/{path}"
    url = f"{base_url.rstrip('/')}{ep}"
    query = build_query(params)
    return f"{url}?{query}" if query else url


def repo_path(owner: str, repo: str, *segments: str) -> str:
    """Path under /repos/{owner}/{repo}; callers pass validated identifiers."""
    parts = ["repos", quote(owner, safe=""), quote(repo, safe=""), *segments]
    return "/" + "/".join(parts)


def thread_path(thread_id: str, *segments: str) -> str:
    return "/" + "/".join(["notifications", "threads", quote(thread_id, safe=""), *segments])
