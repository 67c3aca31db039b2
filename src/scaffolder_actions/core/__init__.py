"""Core subpackage for scaffolder actions.

This subpackage resolves where a template publishes to and how to talk to the
hosting provider there.

Modules:
    repo_url: Repository location parsing
    client_options: HTTP client options for GitHub repositories
    integrations: Host to integration registry
    credentials: Credentials providers
    models: Data models
    exceptions: Error types

Example:
    >>> from scaffolder_actions.core import ScmIntegrationRegistry, parse_repo_url
    >>>
    >>> integrations = ScmIntegrationRegistry.from_config(None)
    >>> parse_repo_url("github.com?repo=service&owner=acme", integrations.provider_type).owner
    'acme'
"""

from scaffolder_actions.core.client_options import get_client_options
from scaffolder_actions.core.credentials import CredentialsProvider, DefaultCredentialsProvider
from scaffolder_actions.core.exceptions import (
    ConfigurationError,
    InputError,
    PathSafetyError,
    ScaffolderActionsError,
)
from scaffolder_actions.core.integrations import IntegrationConfig, ScmIntegrationRegistry
from scaffolder_actions.core.models import (
    ClientOptions,
    Credentials,
    ProviderType,
    RepoSpec,
    SerializedFile,
)
from scaffolder_actions.core.repo_url import parse_repo_url

__all__ = [  # noqa: RUF022
    # Operations
    "get_client_options",
    "parse_repo_url",
    # Integrations and credentials
    "CredentialsProvider",
    "DefaultCredentialsProvider",
    "IntegrationConfig",
    "ScmIntegrationRegistry",
    # Models
    "ClientOptions",
    "Credentials",
    "ProviderType",
    "RepoSpec",
    "SerializedFile",
    # Exceptions
    "ConfigurationError",
    "InputError",
    "PathSafetyError",
    "ScaffolderActionsError",
]
