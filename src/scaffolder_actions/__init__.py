"""Scaffolder action helpers.

Helpers for scaffolder template actions: parsing repository locations,
resolving HTTP client options for hosting providers, serializing workspace
directories, and writing a fixed deployment workflow into a workspace.

Package Structure:
    core: Repository locations, integrations and credentials
        - repo_url: Repository location parsing
        - client_options: HTTP client options for GitHub repositories
        - integrations: Host to integration registry
        - credentials: Credentials providers
        - models: Data models
        - exceptions: Error types

    utils: Filesystem helpers
        - paths: Safe path resolution inside a root directory
        - serializer: Directory content serialization

    actions: Template actions
        - base: Action definition and context
        - workflow: The workflow:write action

    cli: Command-line interface components
        - commands: CLI argument parsing and execution
        - printer: Output formatting (plain, rich, JSON)

Examples:
    CLI Usage:
        ```bash
        $ scaffolder-actions parse-url "github.com?repo=service&owner=acme"
        $ scaffolder-actions --output-format json serialize ./workspace
        ```

    Programmatic Usage:
        ```python
        from scaffolder_actions import (
            ScmIntegrationRegistry,
            get_client_options,
            parse_repo_url,
            serialize_directory_contents,
        )

        integrations = ScmIntegrationRegistry.from_env()
        spec = parse_repo_url("github.com?repo=service&owner=acme", integrations.provider_type)

        async def publish(workspace: str) -> None:
            options = await get_client_options("github.com?repo=service&owner=acme", integrations)
            files = await serialize_directory_contents(workspace, gitignore=True)
        ```
"""

__version__ = "0.1.0"

from scaffolder_actions.actions import ActionContext, TemplateAction, create_workflow_action
from scaffolder_actions.core import (
    ClientOptions,
    ConfigurationError,
    Credentials,
    DefaultCredentialsProvider,
    InputError,
    PathSafetyError,
    ProviderType,
    RepoSpec,
    ScaffolderActionsError,
    ScmIntegrationRegistry,
    SerializedFile,
    get_client_options,
    parse_repo_url,
)
from scaffolder_actions.utils import DirectorySerializer, is_executable, resolve_safe_child_path, serialize_directory_contents

__all__ = [
    "ActionContext",
    "ClientOptions",
    "ConfigurationError",
    "Credentials",
    "DefaultCredentialsProvider",
    "DirectorySerializer",
    "InputError",
    "PathSafetyError",
    "ProviderType",
    "RepoSpec",
    "ScaffolderActionsError",
    "ScmIntegrationRegistry",
    "SerializedFile",
    "TemplateAction",
    "__version__",
    "create_workflow_action",
    "get_client_options",
    "is_executable",
    "parse_repo_url",
    "resolve_safe_child_path",
    "serialize_directory_contents",
]
