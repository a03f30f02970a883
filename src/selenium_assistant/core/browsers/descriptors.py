import logging
import plistlib
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..browser_manager.constants import CHROME, FIREFOX, EDGE, SAFARI, INTERNET_EXPLORER

logger = logging.getLogger(__name__)

STABLE = 'stable'
BETA = 'beta'
UNSTABLE = 'unstable'
RELEASES: Tuple[str, ...] = (STABLE, BETA, UNSTABLE)

UNKNOWN_VERSION = -1

PathTable = Mapping[str, Mapping[str, Tuple[str, ...]]]


def platform_key(platform: str) -> str:
    """Collapses sys.platform values to the keys used in the path tables."""
    if platform.startswith('linux'):
        return 'linux'
    if platform.startswith('win') or platform == 'cygwin':
        return 'win32'
    return platform


def _frozen(table: Dict) -> Mapping:
    return MappingProxyType({
        key: _frozen(value) if isinstance(value, dict) else value
        for key, value in table.items()
    })


@dataclass(frozen=True)
class BrowserDescriptor:
    """
    Static description of one browser family.

    `system_paths` and `install_paths` map platform -> release -> candidate
    executables, most preferred first. Install paths are relative to
    `<install_dir>/<id>/<release>/` and are probed before system paths.
    """

    id: str
    pretty_name: str
    release_names: Mapping[str, str] = field(default_factory=dict)
    system_paths: PathTable = field(default_factory=dict)
    install_paths: PathTable = field(default_factory=dict)
    version_args: Tuple[str, ...] = ('--version',)
    version_pattern: str = r'(\d+)\.\d+'
    raw_version_reader: Optional[Callable[[str], Optional[str]]] = None
    min_version: Optional[int] = None
    blacklist: Mapping[int, str] = field(default_factory=dict)
    release_capabilities: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    release_driver_paths: Mapping[str, str] = field(default_factory=dict)
    local: bool = True
    remote: bool = True

    @property
    def selenium_name(self) -> str:
        return self.id

    def candidate_paths(self, release: str, platform: str, install_dir: Optional[Path]) -> List[Path]:
        key = platform_key(platform)
        candidates: List[Path] = []
        if install_dir is not None:
            release_dir = Path(install_dir) / self.id / release
            for relative in self.install_paths.get(key, {}).get(release, ()):
                candidates.append(release_dir / relative)
        for absolute in self.system_paths.get(key, {}).get(release, ()):
            candidates.append(Path(absolute))
        return candidates

    def parse_version(self, raw_version: Optional[str]) -> int:
        if not raw_version:
            return UNKNOWN_VERSION
        match = re.search(self.version_pattern, raw_version)
        if not match:
            logger.debug(f"Unable to parse a {self.pretty_name} version from {raw_version!r}")
            return UNKNOWN_VERSION
        try:
            return int(match.group(1))
        except (IndexError, ValueError):
            return UNKNOWN_VERSION


def read_app_bundle_version(executable_path: str) -> Optional[str]:
    """Reads CFBundleShortVersionString from the Info.plist of a macOS .app bundle."""
    plist_path = Path(executable_path).parent.parent / 'Info.plist'
    try:
        with plist_path.open('rb') as f:
            info = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException) as e:
        logger.debug(f"Could not read {plist_path}: {e}")
        return None
    version = info.get('CFBundleShortVersionString')
    return str(version) if version else None


CHROME_DESCRIPTOR = BrowserDescriptor(
    id=CHROME,
    pretty_name='Google Chrome',
    release_names=_frozen({BETA: 'Beta', UNSTABLE: 'Dev'}),
    system_paths=_frozen({
        'linux': {
            STABLE: ('/usr/bin/google-chrome-stable', '/usr/bin/google-chrome'),
            BETA: ('/usr/bin/google-chrome-beta',),
            UNSTABLE: ('/usr/bin/google-chrome-unstable',),
        },
        'darwin': {
            STABLE: ('/Applications/Google Chrome.app/Contents/MacOS/Google Chrome',),
            BETA: ('/Applications/Google Chrome Beta.app/Contents/MacOS/Google Chrome Beta',),
            UNSTABLE: (
                '/Applications/Google Chrome Dev.app/Contents/MacOS/Google Chrome Dev',
                '/Applications/Google Chrome Canary.app/Contents/MacOS/Google Chrome Canary',
            ),
        },
        'win32': {
            STABLE: (r'C:\Program Files\Google\Chrome\Application\chrome.exe',),
            BETA: (r'C:\Program Files\Google\Chrome Beta\Application\chrome.exe',),
            UNSTABLE: (r'C:\Program Files\Google\Chrome Dev\Application\chrome.exe',),
        },
    }),
    install_paths=_frozen({
        'linux': {
            STABLE: ('opt/google/chrome/google-chrome',),
            BETA: ('opt/google/chrome-beta/google-chrome-beta',),
            UNSTABLE: ('opt/google/chrome-unstable/google-chrome-unstable',),
        },
        'darwin': {
            STABLE: ('Google Chrome.app/Contents/MacOS/Google Chrome',),
            BETA: ('Google Chrome Beta.app/Contents/MacOS/Google Chrome Beta',),
            UNSTABLE: ('Google Chrome Dev.app/Contents/MacOS/Google Chrome Dev',),
        },
    }),
    version_pattern=r'(?:Google Chrome|Chromium) (\d+)\.\d+',
    blacklist=_frozen({54: 'Chrome 54 fails to start sessions with the bundled chromedriver.'}),
)

FIREFOX_DESCRIPTOR = BrowserDescriptor(
    id=FIREFOX,
    pretty_name='Firefox',
    release_names=_frozen({BETA: 'Beta', UNSTABLE: 'Nightly'}),
    system_paths=_frozen({
        'linux': {
            STABLE: ('/usr/bin/firefox',),
            BETA: ('/usr/bin/firefox-beta',),
            UNSTABLE: ('/usr/bin/firefox-nightly',),
        },
        'darwin': {
            STABLE: ('/Applications/Firefox.app/Contents/MacOS/firefox',),
            UNSTABLE: ('/Applications/Firefox Nightly.app/Contents/MacOS/firefox',),
        },
        'win32': {
            STABLE: (r'C:\Program Files\Mozilla Firefox\firefox.exe',),
            UNSTABLE: (r'C:\Program Files\Firefox Nightly\firefox.exe',),
        },
    }),
    install_paths=_frozen({
        'linux': {release: ('firefox/firefox',) for release in RELEASES},
        'darwin': {
            STABLE: ('Firefox.app/Contents/MacOS/firefox',),
            BETA: ('Firefox.app/Contents/MacOS/firefox',),
            UNSTABLE: ('Firefox Nightly.app/Contents/MacOS/firefox',),
        },
    }),
    version_pattern=r'Mozilla Firefox (\d+)\.\d+',
    # geckodriver can't drive anything older
    min_version=47,
)

EDGE_DESCRIPTOR = BrowserDescriptor(
    id=EDGE,
    pretty_name='Microsoft Edge',
    release_names=_frozen({BETA: 'Beta', UNSTABLE: 'Dev'}),
    system_paths=_frozen({
        'linux': {
            STABLE: ('/usr/bin/microsoft-edge-stable', '/usr/bin/microsoft-edge'),
            BETA: ('/usr/bin/microsoft-edge-beta',),
            UNSTABLE: ('/usr/bin/microsoft-edge-dev',),
        },
        'darwin': {
            STABLE: ('/Applications/Microsoft Edge.app/Contents/MacOS/Microsoft Edge',),
            BETA: ('/Applications/Microsoft Edge Beta.app/Contents/MacOS/Microsoft Edge Beta',),
            UNSTABLE: ('/Applications/Microsoft Edge Dev.app/Contents/MacOS/Microsoft Edge Dev',),
        },
        'win32': {
            STABLE: (r'C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe',),
            BETA: (r'C:\Program Files (x86)\Microsoft\Edge Beta\Application\msedge.exe',),
            UNSTABLE: (r'C:\Program Files (x86)\Microsoft\Edge Dev\Application\msedge.exe',),
        },
    }),
    install_paths=_frozen({
        'linux': {
            STABLE: ('opt/microsoft/msedge/microsoft-edge',),
            BETA: ('opt/microsoft/msedge-beta/microsoft-edge-beta',),
            UNSTABLE: ('opt/microsoft/msedge-dev/microsoft-edge-dev',),
        },
    }),
    version_pattern=r'Microsoft Edge (\d+)\.\d+',
)

SAFARI_DESCRIPTOR = BrowserDescriptor(
    id=SAFARI,
    pretty_name='Safari',
    release_names=_frozen({BETA: 'Technology Preview'}),
    system_paths=_frozen({
        'darwin': {
            STABLE: ('/Applications/Safari.app/Contents/MacOS/Safari',),
            BETA: ('/Applications/Safari Technology Preview.app/Contents/MacOS/Safari Technology Preview',),
        },
    }),
    raw_version_reader=read_app_bundle_version,
    release_capabilities=_frozen({BETA: {'browserName': 'Safari Technology Preview'}}),
    release_driver_paths=_frozen({
        BETA: '/Applications/Safari Technology Preview.app/Contents/MacOS/safaridriver',
    }),
    # First release that ships safaridriver
    min_version=10,
)

INTERNET_EXPLORER_DESCRIPTOR = BrowserDescriptor(
    id=INTERNET_EXPLORER,
    pretty_name='Internet Explorer',
    local=False,
)

KNOWN_DESCRIPTORS: Tuple[BrowserDescriptor, ...] = (
    CHROME_DESCRIPTOR,
    FIREFOX_DESCRIPTOR,
    EDGE_DESCRIPTOR,
    SAFARI_DESCRIPTOR,
    INTERNET_EXPLORER_DESCRIPTOR,
)
