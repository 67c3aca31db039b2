"""Credentials providers for hosting provider APIs.

A credentials provider hands out a token for a repository URL such as
``https://github.com/acme/service``. The default provider answers from the
integrations registry: a token configured on the integration wins, and Azure
DevOps hosts fall back to DefaultAzureCredential (managed identity,
environment variables, Azure CLI login, ...).

Example:
    ```python
    from scaffolder_actions.core.credentials import DefaultCredentialsProvider

    provider = DefaultCredentialsProvider.from_integrations(integrations)
    credentials = await provider.get_credentials("https://github.com/acme/service")
    if credentials.token:
        ...
    ```
"""

import asyncio
import logging
from typing import Protocol
from urllib.parse import urlsplit

import requests
from azure.identity import DefaultAzureCredential

from .integrations import ScmIntegrationRegistry
from .models import Credentials, ProviderType


class CredentialsProvider(Protocol):
    """Anything able to produce credentials for a repository URL."""

    async def get_credentials(self, url: str) -> Credentials:
        """Return credentials for the repository at ``url``."""
        ...


class DefaultCredentialsProvider:
    """Resolves credentials from the integrations registry and Azure identity."""

    AZURE_DEVOPS_RESOURCE_ID = "499b84ac-1321-427f-aa17-267ca6975798"  # Azure DevOps resource ID
    AZURE_DEVOPS_SCOPE = f"{AZURE_DEVOPS_RESOURCE_ID}/.default"

    def __init__(self, integrations: ScmIntegrationRegistry) -> None:
        self.integrations = integrations

    @classmethod
    def from_integrations(cls, integrations: ScmIntegrationRegistry) -> "DefaultCredentialsProvider":
        """Create a provider backed by the given registry."""
        return cls(integrations)

    async def get_credentials(self, url: str) -> Credentials:
        """
        Return credentials for the repository at ``url``.

        Returns:
            Credentials whose token is None when nothing is configured for the host
        """
        host = urlsplit(url).netloc.lower()
        integration = self.integrations.by_host(host)
        if integration is None:
            logging.warning("credentials: no integration configured for host %s", host)
            return Credentials(token=None)

        if integration.token:
            logging.debug("credentials: using configured token for host %s", host)
            return Credentials(token=integration.token)

        if integration.type == ProviderType.AZURE:
            token = await asyncio.to_thread(self.get_azure_access_token)
            return Credentials(token=token, type="bearer")

        logging.info("credentials: no token available for host %s", host)
        return Credentials(token=None)

    def get_azure_access_token(self) -> str | None:
        """
        Retrieves an access token for Azure DevOps using the DefaultAzureCredential.

        Returns:
            The access token if successfully retrieved, otherwise None.
        """
        try:
            credential = DefaultAzureCredential()
            return credential.get_token(self.AZURE_DEVOPS_SCOPE).token
        except requests.exceptions.RequestException:
            logging.exception("credentials: HTTP error occurred while retrieving token")
        except Exception:
            logging.exception("credentials: unexpected error retrieving access token")
        return None
