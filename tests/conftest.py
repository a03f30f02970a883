"""
Shared pytest fixtures.

Browsers are never launched: candidate executables are small shell scripts in
a temporary install directory and system locations are stripped from the
descriptors so whatever is installed on the test host can't leak in.
"""
import stat
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Tuple

import pytest

from selenium_assistant.core.browsers.descriptors import BrowserDescriptor, KNOWN_DESCRIPTORS
from selenium_assistant.core.browsers.registry import BrowserRegistry
from selenium_assistant.data_models import AssistantSettings

posix_only = pytest.mark.skipif(sys.platform.startswith('win'), reason="uses /bin/sh scripts as fake browsers")


def write_fake_browser(path: Path, stdout: str = "", exit_code: int = 0) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!/bin/sh\necho '{stdout}'\nexit {exit_code}\n", encoding='utf-8')
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "install"
    directory.mkdir()
    return directory


@pytest.fixture
def isolated_descriptors() -> Tuple[BrowserDescriptor, ...]:
    return tuple(replace(descriptor, system_paths={}) for descriptor in KNOWN_DESCRIPTORS)


@pytest.fixture
def descriptor_by_id(isolated_descriptors) -> Callable[[str], BrowserDescriptor]:
    table = {descriptor.id: descriptor for descriptor in isolated_descriptors}
    return table.__getitem__


@pytest.fixture
def settings(install_dir: Path) -> AssistantSettings:
    return AssistantSettings(
        install_dir=install_dir,
        kill_grace_period_seconds=0.05,
        kill_settle_period_seconds=0.05,
    )


@pytest.fixture
def registry(settings, isolated_descriptors) -> BrowserRegistry:
    return BrowserRegistry(settings, platform='linux', descriptors=isolated_descriptors)


@pytest.fixture
def chrome_stable_path(install_dir: Path) -> Path:
    return install_dir / 'chrome' / 'stable' / 'opt/google/chrome/google-chrome'


@pytest.fixture
def firefox_stable_path(install_dir: Path) -> Path:
    return install_dir / 'firefox' / 'stable' / 'firefox/firefox'
