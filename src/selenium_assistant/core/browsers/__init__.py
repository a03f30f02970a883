"""
Browser models.

Public API:
- BrowserRegistry: Creates local and Sauce Labs browsers and discovers usable local ones.
- LocalBrowser / RemoteBrowser: The two kinds of BrowserEntity.
- BrowserDescriptor and KNOWN_DESCRIPTORS: Static per-family metadata.
"""

from .base import BrowserEntity, ProbeCache
from .descriptors import BrowserDescriptor, KNOWN_DESCRIPTORS, RELEASES, UNKNOWN_VERSION
from .local import LocalBrowser
from .registry import BrowserRegistry
from .remote import RemoteBrowser

__all__ = [
    "BrowserDescriptor",
    "BrowserEntity",
    "BrowserRegistry",
    "KNOWN_DESCRIPTORS",
    "LocalBrowser",
    "ProbeCache",
    "RELEASES",
    "RemoteBrowser",
    "UNKNOWN_VERSION",
]
