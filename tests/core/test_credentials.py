# ruff: noqa: S105
from unittest.mock import patch

import pytest
import requests

from scaffolder_actions.core.credentials import DefaultCredentialsProvider
from scaffolder_actions.core.integrations import ScmIntegrationRegistry


@pytest.fixture
def provider() -> DefaultCredentialsProvider:
    """Create a provider over a registry with a configured GitHub token."""
    integrations = ScmIntegrationRegistry.from_config(
        {"integrations": {"github": [{"host": "github.com", "token": "configured-token"}]}},
    )
    return DefaultCredentialsProvider.from_integrations(integrations)


@pytest.mark.asyncio
async def test_configured_token(provider: DefaultCredentialsProvider) -> None:
    """Test that a token configured on the integration is returned."""
    credentials = await provider.get_credentials("https://github.com/acme/service")
    if credentials.token != "configured-token":
        pytest.fail(f"Expected configured token, got {credentials.token}")


@pytest.mark.asyncio
async def test_unknown_host(provider: DefaultCredentialsProvider) -> None:
    """Test that hosts without an integration get no token."""
    credentials = await provider.get_credentials("https://unknown.example.com/acme/service")
    if credentials.token is not None:
        pytest.fail(f"Expected no token, got {credentials.token}")


@pytest.mark.asyncio
async def test_integration_without_token(provider: DefaultCredentialsProvider) -> None:
    """Test that integrations without a token and without a fallback get no token."""
    credentials = await provider.get_credentials("https://gitlab.com/acme/service")
    if credentials.token is not None:
        pytest.fail(f"Expected no token, got {credentials.token}")


@pytest.mark.asyncio
async def test_azure_token_from_default_credential(provider: DefaultCredentialsProvider) -> None:
    """Test that Azure DevOps hosts fall back to DefaultAzureCredential."""
    with patch("scaffolder_actions.core.credentials.DefaultAzureCredential") as mock_credential:
        mock_credential.return_value.get_token.return_value.token = "azure-token"
        credentials = await provider.get_credentials("https://dev.azure.com/org/service")

    mock_credential.return_value.get_token.assert_called_once_with(DefaultCredentialsProvider.AZURE_DEVOPS_SCOPE)
    if credentials.token != "azure-token" or credentials.type != "bearer":
        pytest.fail(f"Unexpected credentials: {credentials}")


def test_azure_token_request_exception(provider: DefaultCredentialsProvider) -> None:
    """Test token retrieval failure due to request exception."""
    with patch("scaffolder_actions.core.credentials.DefaultAzureCredential") as mock_credential:
        mock_credential.return_value.get_token.side_effect = requests.exceptions.RequestException("Network error")
        token = provider.get_azure_access_token()

    if token is not None:
        pytest.fail(f"Expected None on exception, got '{token}'")


def test_azure_token_general_exception(provider: DefaultCredentialsProvider) -> None:
    """Test token retrieval failure due to general exception."""
    with patch("scaffolder_actions.core.credentials.DefaultAzureCredential") as mock_credential:
        mock_credential.return_value.get_token.side_effect = Exception("Unknown error")
        token = provider.get_azure_access_token()

    if token is not None:
        pytest.fail(f"Expected None on exception, got '{token}'")
