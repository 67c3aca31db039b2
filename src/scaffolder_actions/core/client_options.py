"""HTTP client options for GitHub publish actions.

Resolves the token, API base URL and request settings an HTTP client needs to
act on the repository a template is publishing to. A token supplied by the
caller short-circuits the credentials provider; otherwise the provider is
asked for a token for the repository URL.

Example:
    ```python
    from scaffolder_actions.core.client_options import get_client_options

    options = await get_client_options(
        "github.com?repo=service&owner=acme",
        integrations,
    )
    headers = options.headers()
    ```

Raises:
    InputError: When the repo URL lacks an owner, the host has no GitHub
        integration, or no token can be obtained
"""

import logging
from urllib.parse import quote

from .credentials import CredentialsProvider, DefaultCredentialsProvider
from .exceptions import InputError
from .integrations import ScmIntegrationRegistry
from .models import ClientOptions
from .repo_url import parse_repo_url

DEFAULT_TIMEOUT = ClientOptions.DEFAULT_TIMEOUT
PREVIEWS = ("nebula-preview",)

# encodeURIComponent leaves these unreserved marks untouched
_URI_COMPONENT_SAFE = "!'()*"


def repository_url(host: str, owner: str, repo: str) -> str:
    """Build the HTTPS URL of a repository with each path segment percent-encoded."""
    return f"https://{host}/{quote(owner, safe=_URI_COMPONENT_SAFE)}/{quote(repo, safe=_URI_COMPONENT_SAFE)}"


async def get_client_options(
    repo_url: str,
    integrations: ScmIntegrationRegistry,
    *,
    token: str | None = None,
    credentials_provider: CredentialsProvider | None = None,
) -> ClientOptions:
    """
    Resolve client options for the repository described by ``repo_url``.

    Args:
        repo_url: Repository location, e.g. ``github.com?repo=service&owner=acme``
        integrations: Registry used to resolve the host
        token: Token supplied by the caller; skips the credentials provider
        credentials_provider: Provider asked for a token when none is supplied,
            defaults to DefaultCredentialsProvider over ``integrations``

    Returns:
        ClientOptions carrying the token, the API base URL and a 60 second timeout
    """
    spec = parse_repo_url(repo_url, integrations.provider_type)

    if not spec.owner:
        msg = f"No owner provided for repo {repo_url}"
        raise InputError(msg)

    integration = integrations.github_by_host(spec.host)
    if integration is None:
        msg = f"No integration for host {spec.host}"
        raise InputError(msg)

    # a token provided by the caller short circuits the credentials provider
    if token:
        return ClientOptions(auth=token, base_url=integration.api_base_url, previews=PREVIEWS, timeout=DEFAULT_TIMEOUT)

    provider = credentials_provider or DefaultCredentialsProvider.from_integrations(integrations)
    credentials = await provider.get_credentials(repository_url(spec.host, spec.owner, spec.repo or ""))

    if not credentials.token:
        msg = f"No token available for host: {spec.host}, with owner {spec.owner}, and repo {spec.repo}"
        raise InputError(msg)

    logging.debug("client_options: resolved %s token for %s/%s", credentials.type, spec.owner, spec.repo)
    return ClientOptions(
        auth=credentials.token,
        base_url=integration.api_base_url,
        previews=PREVIEWS,
        timeout=DEFAULT_TIMEOUT,
    )
