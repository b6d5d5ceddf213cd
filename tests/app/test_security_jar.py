import os

import pytest

from stirling_init.errors import ArtifactDownloadError
from stirling_init.security_jar import (
    alternate_version_tag,
    build_download_urls,
    fetch_security_jar,
)

BASE = "https://github.com/Frooodle/Stirling-PDF/releases/download"


@pytest.fixture
def mock_download(mocker):
    return mocker.patch("stirling_init.security_jar.download_file")


def _writes_jar(content=b"secure jar"):
    def _download(url, destination, timeout=None, current_logger=None):
        destination.write_bytes(content)
        return True

    return _download


@pytest.mark.parametrize(
    "tag,expected",
    [("v1.2.3", "1.2.3"), ("1.2.3", "v1.2.3"), ("v", "vv"), ("0.30.1", "v0.30.1")],
)
def test_alternate_version_tag(tag, expected):
    assert alternate_version_tag(tag) == expected


def test_build_download_urls(make_settings):
    settings = make_settings(version_tag="v1.2.3")

    assert build_download_urls(settings) == [
        f"{BASE}/v1.2.3/Stirling-PDF-with-login.jar",
        f"{BASE}/1.2.3/Stirling-PDF-with-login.jar",
    ]


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"docker_enable_security": "false", "version_tag": "v1.2.3"},
        {"docker_enable_security": "True", "version_tag": "v1.2.3"},
        {"docker_enable_security": "true"},
        {"docker_enable_security": "true", "version_tag": "alpha"},
    ],
)
def test_skips_without_network(make_settings, mock_download, overrides):
    settings = make_settings(**overrides)

    assert fetch_security_jar(settings) is False

    mock_download.assert_not_called()
    assert not os.path.lexists(settings.app_jar)


def test_existing_jar_skips_download_and_swap(make_settings, mock_download):
    settings = make_settings(docker_enable_security="true", version_tag="v1.2.3")
    settings.security_jar.write_bytes(b"already here")
    settings.app_jar.write_bytes(b"stock")

    assert fetch_security_jar(settings) is False

    mock_download.assert_not_called()
    assert not settings.app_jar.is_symlink()
    assert settings.app_jar.read_bytes() == b"stock"


def test_primary_success_swaps_entry_point(make_settings, mock_download):
    settings = make_settings(docker_enable_security="true", version_tag="v1.2.3")
    settings.app_jar.write_bytes(b"stock")
    mock_download.side_effect = _writes_jar()

    assert fetch_security_jar(settings) is True

    mock_download.assert_called_once()
    assert mock_download.call_args.args == (
        f"{BASE}/v1.2.3/Stirling-PDF-with-login.jar",
        settings.security_jar,
    )
    assert settings.app_jar.is_symlink()
    assert settings.app_jar.resolve() == settings.security_jar.resolve()


def test_fallback_success_swaps_entry_point(make_settings, mock_download):
    settings = make_settings(docker_enable_security="true", version_tag="v1.2.3")
    settings.app_jar.write_bytes(b"stock")
    write_jar = _writes_jar()

    def _primary_fails(url, destination, timeout=None, current_logger=None):
        if "/v1.2.3/" in url:
            return False
        return write_jar(url, destination, timeout, current_logger)

    mock_download.side_effect = _primary_fails

    assert fetch_security_jar(settings) is True

    urls = [c.args[0] for c in mock_download.call_args_list]
    assert urls == [
        f"{BASE}/v1.2.3/Stirling-PDF-with-login.jar",
        f"{BASE}/1.2.3/Stirling-PDF-with-login.jar",
    ]
    assert settings.security_jar.is_file()
    assert settings.app_jar.is_symlink()
    assert os.readlink(settings.app_jar) == settings.security_jar.name
    assert settings.app_jar.read_bytes() == b"secure jar"


def test_both_downloads_fail_is_fatal(make_settings, mock_download):
    settings = make_settings(docker_enable_security="true", version_tag="1.2.3")
    settings.app_jar.write_bytes(b"stock")
    mock_download.return_value = False

    with pytest.raises(ArtifactDownloadError) as excinfo:
        fetch_security_jar(settings)

    assert excinfo.value.urls == [
        f"{BASE}/1.2.3/Stirling-PDF-with-login.jar",
        f"{BASE}/v1.2.3/Stirling-PDF-with-login.jar",
    ]
    assert mock_download.call_count == 2
    assert not settings.app_jar.is_symlink()
    assert settings.app_jar.read_bytes() == b"stock"


def test_download_timeout_is_passed(make_settings, mock_download):
    settings = make_settings(
        docker_enable_security="true", version_tag="v1.2.3", download_timeout=12
    )
    mock_download.side_effect = _writes_jar()

    fetch_security_jar(settings)

    assert mock_download.call_args.kwargs["timeout"] == 12


def test_success_without_file_is_fatal(make_settings, mock_download):
    settings = make_settings(docker_enable_security="true", version_tag="v1.2.3")
    mock_download.return_value = True

    with pytest.raises(ArtifactDownloadError, match="missing"):
        fetch_security_jar(settings)

    assert not os.path.lexists(settings.app_jar)


def test_directory_at_jar_path_does_not_skip_download(make_settings, mock_download):
    settings = make_settings(docker_enable_security="true", version_tag="v1.2.3")
    settings.security_jar.mkdir()
    mock_download.return_value = False

    with pytest.raises(ArtifactDownloadError):
        fetch_security_jar(settings)

    assert mock_download.call_count == 2
