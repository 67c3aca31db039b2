"""Repository location parsing for publish and fetch actions.

Template authors describe where a repository lives with a pseudo-URL made of a
host name followed by query parameters, for example
``github.com?repo=service&owner=acme``. This module validates such a location
and decomposes it into a RepoSpec.

Which parameters are mandatory depends on the kind of hosting provider the host
is registered as:

    bitbucket:  project and repo; workspace too when the host is www.bitbucket.org
    gitlab:     owner and repo, unless a project id is given
    gerrit:     repo
    others:     repo and owner

Example:
    ```python
    from scaffolder_actions.core.integrations import ScmIntegrationRegistry
    from scaffolder_actions.core.repo_url import parse_repo_url

    integrations = ScmIntegrationRegistry.from_config(None)
    spec = parse_repo_url("github.com?repo=service&owner=acme", integrations.provider_type)
    # RepoSpec(host='github.com', repo='service', owner='acme', ...)
    ```

Raises:
    InputError: When the location cannot be parsed, the host has no integration,
        or a mandatory parameter is missing
"""

import logging
from collections.abc import Callable
from urllib.parse import parse_qs, urlsplit

from .exceptions import InputError
from .models import ProviderType, RepoSpec

ProviderTypeLookup = Callable[[str], ProviderType | str | None]

BITBUCKET_PUBLIC_HOST = "www.bitbucket.org"
DEFAULT_HTTPS_PORT = 443
FORBIDDEN_HOST_CHARACTERS = frozenset(" <>^|\\%\"`{}")
QUERY_PARAMETERS = ("owner", "organization", "workspace", "project", "repo")


def _split_repo_url(repo_url: str) -> tuple[str, str, dict[str, list[str]]]:
    """Parse ``https://{repo_url}`` and return the normalized URL, host and query parameters."""
    url = f"https://{repo_url}"
    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname
        port = parsed.port
    except ValueError as e:
        msg = f"Invalid repo URL passed to publisher, got {repo_url}, {e}"
        raise InputError(msg) from e

    if not hostname or any(ch.isspace() or ch in FORBIDDEN_HOST_CHARACTERS for ch in hostname):
        msg = f"Invalid repo URL passed to publisher, got {repo_url}, invalid host"
        raise InputError(msg)

    host = f"[{hostname}]" if ":" in hostname else hostname
    if port is not None and port != DEFAULT_HTTPS_PORT:
        host = f"{host}:{port}"

    return url, host, parse_qs(parsed.query, keep_blank_values=True)


def _check_required_params(url: str, params: dict[str, list[str]], *names: str) -> None:
    """Raise InputError for the first parameter that is absent or empty."""
    for name in names:
        if not params.get(name, [""])[0]:
            msg = f"Invalid repo URL passed to publisher: {url}, missing {name}"
            raise InputError(msg)


def parse_repo_url(repo_url: str, provider_type_for: ProviderTypeLookup) -> RepoSpec:
    """
    Parse a repository location into a RepoSpec.

    Args:
        repo_url: Location in the form ``host?param=value&...`` (no scheme)
        provider_type_for: Lookup returning the provider type registered for a host,
            or None when the host is unknown (e.g. ``ScmIntegrationRegistry.provider_type``)

    Returns:
        RepoSpec with the host and every query parameter that was present

    Raises:
        InputError: When the location is malformed, the host is unknown, or a
            parameter required by the provider type is missing
    """
    url, host, params = _split_repo_url(repo_url)
    values = {name: params[name][0] if name in params else None for name in QUERY_PARAMETERS}

    provider_type = provider_type_for(host)
    if not provider_type:
        msg = f"No matching integration configuration for host {host}, please check your integrations config"
        raise InputError(msg)

    kind = provider_type.value if isinstance(provider_type, ProviderType) else str(provider_type)
    if kind == ProviderType.BITBUCKET.value:
        if host == BITBUCKET_PUBLIC_HOST:
            _check_required_params(url, params, "workspace")
        _check_required_params(url, params, "project", "repo")
    elif kind == ProviderType.GITLAB.value:
        # project is the project id; when given, owner and repo are not needed
        if not values["project"]:
            _check_required_params(url, params, "owner", "repo")
    elif kind == ProviderType.GERRIT.value:
        _check_required_params(url, params, "repo")
    else:
        _check_required_params(url, params, "repo", "owner")

    logging.debug("repo_url: parsed '%s' as %s location", repo_url, kind)
    return RepoSpec(host=host, **values)
