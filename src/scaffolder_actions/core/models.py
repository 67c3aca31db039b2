"""Core data models for scaffolder actions.

This module defines the value types passed between the scaffolder helpers:
the decomposed repository location, the serialized directory entries and the
options handed to HTTP clients talking to a hosting provider.

Classes:
    Hosting:
        ProviderType: Enum of source-control hosting platform kinds
        RepoSpec: Repository location decomposed from a repo URL
        Credentials: Token returned by a credentials provider

    HTTP:
        ClientOptions: Authentication, base URL and timeout for API clients

    Filesystem:
        SerializedFile: One serialized entry of a directory tree

Example:
    ```python
    from scaffolder_actions.core.models import ClientOptions, RepoSpec

    spec = RepoSpec(host="github.com", repo="service", owner="acme")

    options = ClientOptions(auth="token", base_url="https://api.github.com")
    headers = options.headers()
    ```
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .exceptions import ConfigurationError


class ProviderType(Enum):
    """Kind of source-control hosting platform a host name maps to."""

    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    BITBUCKET_CLOUD = "bitbucketCloud"
    BITBUCKET_SERVER = "bitbucketServer"
    GERRIT = "gerrit"
    AZURE = "azure"
    GITEA = "gitea"

    @classmethod
    def from_string(cls, value: str) -> "ProviderType":
        """Convert a string to a ProviderType enum."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        valid = ", ".join(m.value for m in cls)
        msg = f"Invalid provider type: {value}. Must be one of: {valid}"
        raise ConfigurationError(msg)

    def __str__(self) -> str:
        """Return the string representation of the enum."""
        return self.value


@dataclass(frozen=True)
class RepoSpec:
    """
    Repository location decomposed from a repo URL such as ``github.com?repo=app&owner=acme``.

    Attributes:
        host: Host name of the hosting provider, including the port when present
        repo: Repository name; None only when a GitLab project id replaces it
        owner: Organization or user owning the repository
        organization: Azure DevOps organization
        workspace: Bitbucket Cloud workspace
        project: Bitbucket project key or GitLab project id
    """

    host: str
    repo: str | None = None
    owner: str | None = None
    organization: str | None = None
    workspace: str | None = None
    project: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return the populated fields as a dictionary."""
        return {key: value for key, value in vars(self).items() if value is not None}


@dataclass(frozen=True)
class SerializedFile:
    """
    A single entry captured from a directory tree.

    Attributes:
        path: POSIX path relative to the serialized root
        content: File bytes, or the raw link target for symlinks
        executable: True if any execute bit is set on the entry
        symlink: True if the entry is a (dangling) symbolic link
    """

    path: str
    content: bytes
    executable: bool = False
    symlink: bool = False


@dataclass(frozen=True)
class Credentials:
    """Credentials handed out by a credentials provider."""

    token: str | None
    type: str = "token"


@dataclass(frozen=True)
class ClientOptions:
    """
    Options for an HTTP client talking to a hosting provider API.

    Attributes:
        auth: Token sent with every request
        base_url: Base URL of the provider API
        previews: API preview features to request
        timeout: Request timeout in seconds
    """

    DEFAULT_TIMEOUT: ClassVar[float] = 60.0  # 60 seconds

    auth: str
    base_url: str | None = None
    previews: tuple[str, ...] = ("nebula-preview",)
    timeout: float = DEFAULT_TIMEOUT

    def headers(self) -> dict[str, str]:
        """Build the request headers carrying the token and preview media types."""
        accept = ", ".join(f"application/vnd.github.{preview}+json" for preview in self.previews)
        return {
            "Authorization": f"token {self.auth}",
            "Accept": accept or "application/vnd.github+json",
        }

    def redacted(self) -> dict:
        """Return the options as a dictionary with the token masked."""
        return {
            "auth": "***" if self.auth else "",
            "base_url": self.base_url,
            "previews": list(self.previews),
            "timeout": self.timeout,
        }
