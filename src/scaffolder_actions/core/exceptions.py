"""Custom exceptions for scaffolder actions.

This module defines the exception hierarchy used by the scaffolder action helpers.
It separates caller mistakes (malformed or underspecified repository locations,
missing credentials) from filesystem safety violations and invalid configuration.

Exception Categories:
    Input: Errors caused by values passed in by the template author or caller
    Path safety: Errors raised when a resolved path would leave its root directory
    Configuration: Errors related to the integrations configuration

Exception Hierarchy:
    ScaffolderActionsError
    ├── InputError
    ├── PathSafetyError
    └── ConfigurationError

Filesystem read and stat failures are not wrapped: they surface as the
standard ``OSError`` family.

Usage:
    ```python
    from scaffolder_actions.core.exceptions import InputError, ScaffolderActionsError

    try:
        spec = parse_repo_url("github.com?repo=app", integrations.provider_type)
    except InputError as e:
        print(f"Bad repository location: {e}")
    except ScaffolderActionsError as e:
        print(f"Error occurred: {e}")
    ```

Note:
    All exceptions inherit from ScaffolderActionsError to allow catching
    all package-specific exceptions with a single except clause.
"""


class ScaffolderActionsError(Exception):
    """Base exception for scaffolder actions."""


class InputError(ScaffolderActionsError):
    """Raised when an action input or repository location is invalid."""

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message)


class PathSafetyError(ScaffolderActionsError):
    """Raised when a path would resolve outside of its root directory."""

    def __init__(self, base: str, path: str) -> None:
        self.base = base
        self.path = path
        super().__init__(f"Relative path is not allowed to refer to a directory outside its parent: {path} (root: {base})")


class ConfigurationError(ScaffolderActionsError):
    """Raised when the integrations configuration is invalid."""

    def __init__(self, message: str = "Invalid integrations configuration") -> None:
        super().__init__(message)
