"""Test configuration for xcexport."""

import io
import os
import tempfile
from pathlib import Path

import pytest
import structlog
from rich.console import Console

PROFILE_UUID = "1A2B3C4D-5E6F-7A8B-9C0D-1E2F3A4B5C6D"


class ScriptedReader:
    """Stand-in for terminal input that replays canned answers.

    Raises EOFError once the answers run out so a broken loop fails fast.
    """

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


def profile_xml(name="MyProfile", uuid=PROFILE_UUID):
    """Render the plist body of a provisioning profile."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<plist version=\"1.0\">\n"
        "<dict>\n"
        "\t<key>AppIDName</key>\n"
        "\t<string>Example App</string>\n"
        "\t<key>Name</key>\n"
        f"\t<string>{name}</string>\n"
        "\t<key>UUID</key>\n"
        f"\t<string>{uuid}</string>\n"
        "</dict>\n"
        "</plist>\n"
    )


def signed_profile_bytes(name="MyProfile", uuid=PROFILE_UUID):
    """Profile plist wrapped in a few bytes of fake CMS envelope."""
    return b"0\x82\x1d\x0b\x06\t*\x86H\x86\xf7\r\x01\x07\x02" + profile_xml(name, uuid).encode() + b"\x00\xa0\x82"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove XCEXPORT_* variables so tests see defaults."""
    for key in list(os.environ):
        if key.startswith("XCEXPORT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def dirs(temp_dir):
    """Create empty archives, profiles and export roots.

    Returns:
        dict: Paths keyed by 'archives', 'profiles' and 'export'.
    """
    roots = {name: temp_dir / name for name in ("archives", "profiles", "export")}
    for path in roots.values():
        path.mkdir()
    return roots


@pytest.fixture
def make_archive(dirs):
    """Factory creating an .xcarchive bundle two levels below the archives root.

    Args (of the returned callable):
        name: Bundle file name, including the .xcarchive suffix.
        day: Date directory the bundle is placed in.
        embedded: Bytes of embedded.mobileprovision; None for the default
            profile, False to omit it.

    Returns:
        Callable returning the bundle Path.
    """

    def _make(name="MyApp 15-01-2024, 10.30.xcarchive", day="2024-01-15", embedded=None):
        bundle = dirs["archives"] / day / name
        app_dir = bundle / "Products" / "Applications" / "MyApp.app"
        app_dir.mkdir(parents=True)
        if embedded is None:
            embedded = signed_profile_bytes()
        if embedded is not False:
            (app_dir / "embedded.mobileprovision").write_bytes(embedded)
        return bundle

    return _make


@pytest.fixture
def install_profile(dirs):
    """Factory writing an installed profile named after its UUID."""

    def _install(uuid=PROFILE_UUID, name="MyProfile", content=None):
        path = dirs["profiles"] / f"{uuid}.mobileprovision"
        path.write_bytes(content if content is not None else signed_profile_bytes(name, uuid))
        return path

    return _install


@pytest.fixture
def config_factory(dirs):
    """Factory building a Config pointed at the temporary roots."""
    from xcexport.core.config import Config

    def _config(**overrides):
        values = {
            "archives_dir": dirs["archives"],
            "profiles_dir": dirs["profiles"],
            "export_dir": dirs["export"],
        }
        values.update(overrides)
        return Config(**values)

    return _config


@pytest.fixture
def output():
    """Plain console capturing everything the messenger prints."""
    return Console(file=io.StringIO(), color_system=None, highlight=False, soft_wrap=True)


@pytest.fixture
def messenger_factory(output):
    """Factory building a Messenger that reads scripted answers.

    Returns:
        Callable(*answers, auto_accept=False) -> (Messenger, ScriptedReader)
    """
    from xcexport.ui.console import Messenger

    def _messenger(*answers, auto_accept=False):
        reader = ScriptedReader(*answers)
        return Messenger(auto_accept=auto_accept, console=output, reader=reader), reader

    return _messenger


@pytest.fixture
def printed(output):
    """Callable returning the captured output lines, right-stripped."""

    def _printed():
        return [line.rstrip() for line in output.file.getvalue().splitlines()]

    return _printed


@pytest.fixture
def profile_uuid():
    """UUID embedded in the default test profile."""
    return PROFILE_UUID


@pytest.fixture
def profile_bytes():
    """Factory for signed profile bytes: (name, uuid) -> bytes."""
    return signed_profile_bytes
