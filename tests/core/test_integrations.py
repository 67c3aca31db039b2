# ruff: noqa: PLR2004,S105
from pathlib import Path

import pytest

from scaffolder_actions.core.exceptions import ConfigurationError
from scaffolder_actions.core.integrations import (
    INTEGRATIONS_CONFIG_ENV,
    IntegrationConfig,
    ScmIntegrationRegistry,
    default_api_base_url,
)
from scaffolder_actions.core.models import ProviderType


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create an integrations configuration file."""
    path = tmp_path / "integrations.yaml"
    path.write_text(
        """
integrations:
  github:
    - host: github.com
      token: ${TEST_GITHUB_TOKEN}
    - host: GHE.example.com
  gitlab:
    - host: gitlab.example.com
      apiBaseUrl: https://gitlab.example.com/custom/api
  gerrit:
    - host: gerrit.example.com
""",
        encoding="utf-8",
    )
    return path


def test_default_registry_contains_public_hosts() -> None:
    """Test that the public hosts are registered without configuration."""
    integrations = ScmIntegrationRegistry.from_config(None)
    expected = {
        "github.com": ProviderType.GITHUB,
        "gitlab.com": ProviderType.GITLAB,
        "bitbucket.org": ProviderType.BITBUCKET,
        "dev.azure.com": ProviderType.AZURE,
    }
    for host, provider_type in expected.items():
        if integrations.provider_type(host) != provider_type:
            pytest.fail(f"Expected {host} to be {provider_type}, got {integrations.provider_type(host)}")
    if len(integrations.list_integrations()) != 4:
        pytest.fail(f"Expected 4 default integrations, got {len(integrations.list_integrations())}")


def test_unknown_host_returns_none() -> None:
    """Test lookups for hosts without an integration."""
    integrations = ScmIntegrationRegistry.from_config(None)
    if integrations.by_host("unknown.com") is not None:
        pytest.fail("Expected no integration for unknown.com")
    if integrations.provider_type("unknown.com") is not None:
        pytest.fail("Expected no provider type for unknown.com")


def test_from_file(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test loading integrations from YAML with environment expansion."""
    monkeypatch.setenv("TEST_GITHUB_TOKEN", "secret-token")
    integrations = ScmIntegrationRegistry.from_file(config_file)

    github = integrations.by_host("github.com")
    if github is None or github.token != "secret-token":
        pytest.fail(f"Expected expanded token on github.com, got {github}")

    ghe = integrations.by_host("ghe.example.com")
    if ghe is None or ghe.api_base_url != "https://ghe.example.com/api/v3":
        pytest.fail(f"Expected default GHE API URL, got {ghe}")

    gitlab = integrations.by_host("gitlab.example.com")
    if gitlab is None or gitlab.api_base_url != "https://gitlab.example.com/custom/api":
        pytest.fail(f"Expected configured GitLab API URL, got {gitlab}")

    if integrations.provider_type("gerrit.example.com") != ProviderType.GERRIT:
        pytest.fail("Expected gerrit.example.com to be a gerrit host")

    # github.com was configured explicitly, the other defaults are still added
    if len(integrations.list_integrations()) != 7:
        pytest.fail(f"Expected 7 integrations, got {len(integrations.list_integrations())}")


def test_from_env(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test loading the file named by the environment variable."""
    monkeypatch.setenv(INTEGRATIONS_CONFIG_ENV, str(config_file))
    integrations = ScmIntegrationRegistry.from_env()
    if integrations.by_host("gerrit.example.com") is None:
        pytest.fail("Expected gerrit.example.com from the configured file")


def test_from_env_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the defaults are used when no file is configured."""
    monkeypatch.delenv(INTEGRATIONS_CONFIG_ENV, raising=False)
    integrations = ScmIntegrationRegistry.from_env()
    if integrations.by_host("github.com") is None:
        pytest.fail("Expected default github.com integration")


def test_missing_token_variable_is_no_token(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an unset token variable does not produce a token."""
    monkeypatch.setenv("TEST_GITHUB_TOKEN", "")
    integrations = ScmIntegrationRegistry.from_file(config_file)
    if integrations.by_host("github.com").token is not None:
        pytest.fail("Expected blank token to be None")


def test_github_by_host() -> None:
    """Test that only GitHub integrations are returned by github_by_host."""
    integrations = ScmIntegrationRegistry.from_config(None)
    if integrations.github_by_host("github.com") is None:
        pytest.fail("Expected GitHub integration for github.com")
    if integrations.github_by_host("gitlab.com") is not None:
        pytest.fail("Expected no GitHub integration for gitlab.com")


def test_lookup_is_case_insensitive() -> None:
    """Test host lookups ignore case."""
    integrations = ScmIntegrationRegistry.from_config(None)
    if integrations.by_host("GitHub.COM") is None:
        pytest.fail("Expected case-insensitive host lookup")


@pytest.mark.parametrize(
    "config",
    [
        {"integrations": ["github.com"]},
        {"integrations": {"github": {"host": "github.com"}}},
        {"integrations": {"github": ["github.com"]}},
        {"integrations": {"github": [{"token": "no-host"}]}},
        {"integrations": {"github": [{"host": ""}]}},
        {"integrations": {"svn": [{"host": "svn.example.com"}]}},
        {"integrations": {"github": [{"host": "ghe.example.com"}], "gitlab": [{"host": "ghe.example.com"}]}},
    ],
)
def test_invalid_config(config: dict) -> None:
    """Test that invalid configuration documents are rejected."""
    with pytest.raises(ConfigurationError):
        ScmIntegrationRegistry.from_config(config)


def test_invalid_yaml(tmp_path: Path) -> None:
    """Test that YAML syntax errors are reported as configuration errors."""
    path = tmp_path / "broken.yaml"
    path.write_text("integrations: [github\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Error parsing YAML"):
        ScmIntegrationRegistry.from_file(path)


def test_non_mapping_document(tmp_path: Path) -> None:
    """Test that a top-level list is rejected."""
    path = tmp_path / "list.yaml"
    path.write_text("- github.com\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Expected a mapping"):
        ScmIntegrationRegistry.from_file(path)


def test_integration_config_alias() -> None:
    """Test that apiBaseUrl and api_base_url are both accepted."""
    by_alias = IntegrationConfig.model_validate({"host": "x.com", "type": "gitea", "apiBaseUrl": "https://x.com/api"})
    by_name = IntegrationConfig(host="x.com", type=ProviderType.GITEA, api_base_url="https://x.com/api")
    if by_alias.api_base_url != by_name.api_base_url:
        pytest.fail("Expected alias and field name to be equivalent")


@pytest.mark.parametrize(
    ("provider_type", "host", "expected"),
    [
        (ProviderType.GITHUB, "github.com", "https://api.github.com"),
        (ProviderType.GITHUB, "ghe.example.com", "https://ghe.example.com/api/v3"),
        (ProviderType.GITLAB, "gitlab.com", "https://gitlab.com/api/v4"),
        (ProviderType.BITBUCKET, "bitbucket.org", "https://api.bitbucket.org/2.0"),
        (ProviderType.AZURE, "dev.azure.com", "https://dev.azure.com"),
        (ProviderType.GERRIT, "gerrit.example.com", None),
        (ProviderType.BITBUCKET_SERVER, "bitbucket.example.com", None),
    ],
)
def test_default_api_base_url(provider_type: ProviderType, host: str, expected: str | None) -> None:
    """Test the default API base URL per provider kind."""
    if default_api_base_url(provider_type, host) != expected:
        pytest.fail(f"Expected {expected}, got {default_api_base_url(provider_type, host)}")
