"""Source-control integrations registry.

This module maps host names to the integration configured for them. The
registry answers two questions for the scaffolder helpers: which kind of
hosting provider a host is (to decide which repo URL parameters are
mandatory) and which API base URL and token belong to it.

Key Components:
    IntegrationConfig: Validated configuration of a single integration
    ScmIntegrationRegistry: Host lookup over all configured integrations

Configuration:
    Integrations are read from a YAML document grouped by provider type.
    ``${VAR}`` references are expanded from the environment before parsing.

    ```yaml
    integrations:
      github:
        - host: github.com
          token: ${GITHUB_TOKEN}
        - host: ghe.example.com
          apiBaseUrl: https://ghe.example.com/api/v3
      gitlab:
        - host: gitlab.example.com
    ```

    The public hosts github.com, gitlab.com, bitbucket.org and dev.azure.com
    are always registered with default settings unless configured explicitly.

Example:
    ```python
    from scaffolder_actions.core.integrations import ScmIntegrationRegistry

    integrations = ScmIntegrationRegistry.from_file("integrations.yaml")
    integrations.provider_type("github.com")  # ProviderType.GITHUB
    integrations.by_host("github.com").api_base_url  # "https://api.github.com"
    ```

Raises:
    ConfigurationError: When the configuration document is invalid
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, ClassVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigurationError
from .models import ProviderType

INTEGRATIONS_CONFIG_ENV = "SCAFFOLDER_ACTIONS_INTEGRATIONS"
ENV_REFERENCE = re.compile(r"\$\{(\w+)\}")


def expand_env(text: str) -> str:
    """Replace ``${VAR}`` references with environment values; unset variables become empty."""
    return ENV_REFERENCE.sub(lambda match: os.environ.get(match.group(1), ""), text)


def default_api_base_url(provider_type: ProviderType, host: str) -> str | None:
    """Return the API base URL a provider exposes on the given host by default."""
    if provider_type == ProviderType.GITHUB:
        return "https://api.github.com" if host == "github.com" else f"https://{host}/api/v3"
    if provider_type == ProviderType.GITLAB:
        return f"https://{host}/api/v4"
    if provider_type in {ProviderType.BITBUCKET, ProviderType.BITBUCKET_CLOUD} and host == "bitbucket.org":
        return "https://api.bitbucket.org/2.0"
    if provider_type == ProviderType.AZURE:
        return f"https://{host}"
    return None


class IntegrationConfig(BaseModel):
    """
    Configuration of a single source-control integration.

    Attributes:
        host: Host name the integration serves, lower-cased
        type: Kind of hosting provider
        api_base_url: Base URL of the provider API
        token: Static token used for API calls, if any
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    host: str
    type: ProviderType
    api_base_url: str | None = Field(default=None, alias="apiBaseUrl")
    token: str | None = None

    @field_validator("host")
    @classmethod
    def _normalize_host(cls, value: str) -> str:
        host = value.strip().lower()
        if not host or "/" in host:
            msg = f"Invalid integration host: {value!r}"
            raise ValueError(msg)
        return host

    @field_validator("token")
    @classmethod
    def _blank_token_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @model_validator(mode="after")
    def _apply_default_api_base_url(self) -> "IntegrationConfig":
        if self.api_base_url is None:
            self.api_base_url = default_api_base_url(self.type, self.host)
        return self


class ScmIntegrationRegistry:
    """Looks up source-control integrations by host name."""

    DEFAULT_INTEGRATIONS: ClassVar[list[tuple[ProviderType, str]]] = [
        (ProviderType.GITHUB, "github.com"),
        (ProviderType.GITLAB, "gitlab.com"),
        (ProviderType.BITBUCKET, "bitbucket.org"),
        (ProviderType.AZURE, "dev.azure.com"),
    ]

    def __init__(self, integrations: list[IntegrationConfig]) -> None:
        self._by_host: dict[str, IntegrationConfig] = {}
        for integration in integrations:
            if integration.host in self._by_host:
                msg = f"Duplicate integration configured for host {integration.host}"
                raise ConfigurationError(msg)
            self._by_host[integration.host] = integration

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> "ScmIntegrationRegistry":
        """Build a registry from a parsed configuration document."""
        section = (config or {}).get("integrations") or {}
        if not isinstance(section, dict):
            msg = "'integrations' must be a mapping of provider type to a list of integrations"
            raise ConfigurationError(msg)

        integrations = []
        for type_name, entries in section.items():
            provider_type = ProviderType.from_string(str(type_name))
            if not isinstance(entries, list):
                msg = f"'integrations.{type_name}' must be a list"
                raise ConfigurationError(msg)
            for entry in entries:
                if not isinstance(entry, dict):
                    msg = f"Each entry of 'integrations.{type_name}' must be a mapping"
                    raise ConfigurationError(msg)
                try:
                    integrations.append(IntegrationConfig.model_validate({**entry, "type": provider_type}))
                except ValidationError as e:
                    msg = f"Invalid {type_name} integration: {e}"
                    raise ConfigurationError(msg) from e

        configured = {integration.host for integration in integrations}
        for provider_type, host in cls.DEFAULT_INTEGRATIONS:
            if host not in configured:
                integrations.append(IntegrationConfig(host=host, type=provider_type))

        logging.debug("integrations: registered %d integrations", len(integrations))
        return cls(integrations)

    @classmethod
    def from_file(cls, path: str | Path) -> "ScmIntegrationRegistry":
        """Build a registry from a YAML configuration file, expanding environment variables."""
        text = Path(path).read_text(encoding="utf-8")
        try:
            config = yaml.safe_load(expand_env(text))
        except yaml.YAMLError as e:
            msg = f"Error parsing YAML in {path}"
            raise ConfigurationError(msg) from e
        if config is not None and not isinstance(config, dict):
            msg = f"Expected a mapping at the top level of {path}"
            raise ConfigurationError(msg)
        logging.info("integrations: loaded configuration from %s", path)
        return cls.from_config(config)

    @classmethod
    def from_env(cls) -> "ScmIntegrationRegistry":
        """Build a registry from the file named by SCAFFOLDER_ACTIONS_INTEGRATIONS, or the defaults."""
        path = os.environ.get(INTEGRATIONS_CONFIG_ENV, "").strip()
        if path:
            return cls.from_file(path)
        return cls.from_config(None)

    def list_integrations(self) -> list[IntegrationConfig]:
        """Return all registered integrations."""
        return list(self._by_host.values())

    def by_host(self, host: str) -> IntegrationConfig | None:
        """Return the integration registered for a host, if any."""
        return self._by_host.get(host.lower())

    def provider_type(self, host: str) -> ProviderType | None:
        """Return the provider type registered for a host, if any."""
        integration = self.by_host(host)
        return integration.type if integration else None

    def github_by_host(self, host: str) -> IntegrationConfig | None:
        """Return the GitHub integration registered for a host, if any."""
        integration = self.by_host(host)
        if integration and integration.type == ProviderType.GITHUB:
            return integration
        return None
