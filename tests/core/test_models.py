# ruff: noqa: PLR2004,S106
import dataclasses

import pytest

from scaffolder_actions.core.exceptions import ConfigurationError
from scaffolder_actions.core.models import ClientOptions, ProviderType, RepoSpec, SerializedFile


def test_provider_type_from_string() -> None:
    """Test ProviderType.from_string conversion."""
    if ProviderType.from_string("github") != ProviderType.GITHUB:
        pytest.fail("Expected 'github' to convert to GITHUB")
    if ProviderType.from_string("BitbucketCloud") != ProviderType.BITBUCKET_CLOUD:
        pytest.fail("Expected case-insensitive conversion of 'BitbucketCloud'")
    if str(ProviderType.GERRIT) != "gerrit":
        pytest.fail(f"Unexpected string form: {ProviderType.GERRIT}")

    with pytest.raises(ConfigurationError, match="Invalid provider type: svn"):
        ProviderType.from_string("svn")


def test_repo_spec_is_immutable() -> None:
    """Test that RepoSpec cannot be modified after creation."""
    spec = RepoSpec(host="github.com", repo="service", owner="acme")
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.repo = "other"


def test_repo_spec_to_dict() -> None:
    """Test that only populated fields are exported."""
    spec = RepoSpec(host="gitlab.com", project="42")
    if spec.to_dict() != {"host": "gitlab.com", "project": "42"}:
        pytest.fail(f"Unexpected dictionary: {spec.to_dict()}")


def test_serialized_file_defaults() -> None:
    """Test SerializedFile default flags."""
    file = SerializedFile(path="README.md", content=b"# readme")
    if file.executable or file.symlink:
        pytest.fail("Expected executable and symlink to default to False")


def test_client_options_headers() -> None:
    """Test that headers carry the token and the preview media types."""
    options = ClientOptions(auth="token", base_url="https://api.github.com")
    headers = options.headers()
    if headers["Authorization"] != "token token":
        pytest.fail(f"Unexpected Authorization header: {headers['Authorization']}")
    if headers["Accept"] != "application/vnd.github.nebula-preview+json":
        pytest.fail(f"Unexpected Accept header: {headers['Accept']}")

    no_previews = ClientOptions(auth="token", previews=())
    if no_previews.headers()["Accept"] != "application/vnd.github+json":
        pytest.fail("Expected the default media type without previews")


def test_client_options_redacted() -> None:
    """Test that the token is masked."""
    redacted = ClientOptions(auth="secret", base_url="https://api.github.com").redacted()
    if redacted["auth"] != "***":
        pytest.fail(f"Expected masked token, got {redacted['auth']}")
    if redacted["timeout"] != 60:
        pytest.fail(f"Expected default timeout, got {redacted['timeout']}")


def test_client_options_fields() -> None:
    """Test that client options only carry the values a client is built from."""
    names = [field.name for field in dataclasses.fields(ClientOptions)]
    if names != ["auth", "base_url", "previews", "timeout"]:
        pytest.fail(f"Unexpected fields: {names}")
    if callable(getattr(ClientOptions, "create_session", None)):
        pytest.fail("Expected no session factory on the options record")
