from __future__ import annotations

import os
from importlib import resources
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Union

from .errors import ResourceReadError
from .logger import get_logger
from .properties import parse_properties

log = get_logger(__name__)

__all__ = [
    "PROPERTIES_SUFFIX",
    "DEFAULT_PARENT_IDENTITY",
    "THEMES_DIR_ENV",
    "BUNDLED_THEMES_PACKAGE",
    "ResourceLocator",
    "PackageResourceLocator",
    "DirectoryResourceLocator",
    "ChainedResourceLocator",
    "resource_name_for",
    "themes_dirs_from_env",
    "default_locator",
    "PropertySourceLoader",
]

PROPERTIES_SUFFIX = ".properties"
DEFAULT_PARENT_IDENTITY = "JewelLaf"
THEMES_DIR_ENV = "JEWEL_THEMES_DIR"
BUNDLED_THEMES_PACKAGE = "jewel_themes.core.themes"


def resource_name_for(identity: str) -> str:
    """``dark.Midnight`` -> ``dark/Midnight.properties``."""
    identity = identity.strip()
    if not identity:
        raise ValueError("Theme identity must not be empty")
    return identity.replace(".", "/") + PROPERTIES_SUFFIX


class ResourceLocator(Protocol):
    """
    Named-resource lookup.

    ``read_text`` returns None when the resource does not exist and raises
    ``OSError``/``UnicodeDecodeError`` when it exists but cannot be read.
    """

    def exists(self, name: str) -> bool: ...

    def read_text(self, name: str) -> Optional[str]: ...

    def describe(self, name: str) -> str: ...


class DirectoryResourceLocator:
    """Looks resources up below a directory on disk."""

    def __init__(self, root: Union[Path, str]):
        self.root = Path(root)

    def _path(self, name: str) -> Path:
        return self.root.joinpath(*name.split("/"))

    def exists(self, name: str) -> bool:
        return self._path(name).is_file()

    def read_text(self, name: str) -> Optional[str]:
        path = self._path(name)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def describe(self, name: str) -> str:
        return str(self._path(name))

    def __repr__(self) -> str:
        return f"DirectoryResourceLocator({str(self.root)!r})"


class PackageResourceLocator:
    """Looks resources up in package data (the bundled themes by default)."""

    def __init__(self, package: str = BUNDLED_THEMES_PACKAGE):
        self.package = package

    def _traversable(self, name: str):
        node = resources.files(self.package)
        for part in name.split("/"):
            node = node.joinpath(part)
        return node

    def exists(self, name: str) -> bool:
        return self._traversable(name).is_file()

    def read_text(self, name: str) -> Optional[str]:
        node = self._traversable(name)
        if not node.is_file():
            return None
        return node.read_text(encoding="utf-8")

    def describe(self, name: str) -> str:
        return f"{self.package}:{name}"

    def __repr__(self) -> str:
        return f"PackageResourceLocator({self.package!r})"


class ChainedResourceLocator:
    """First locator that has the resource wins."""

    def __init__(self, locators: Iterable[ResourceLocator]):
        self.locators: List[ResourceLocator] = list(locators)

    def _owner(self, name: str) -> Optional[ResourceLocator]:
        for locator in self.locators:
            if locator.exists(name):
                return locator
        return None

    def exists(self, name: str) -> bool:
        return self._owner(name) is not None

    def read_text(self, name: str) -> Optional[str]:
        owner = self._owner(name)
        if owner is None:
            return None
        return owner.read_text(name)

    def describe(self, name: str) -> str:
        try:
            owner = self._owner(name)
        except OSError:
            owner = None
        if owner is not None:
            return owner.describe(name)
        if self.locators:
            return self.locators[0].describe(name)
        return name

    def __repr__(self) -> str:
        return f"ChainedResourceLocator({self.locators!r})"


def themes_dirs_from_env(environ: Optional[Dict[str, str]] = None) -> List[Path]:
    """Theme directories listed in ``JEWEL_THEMES_DIR`` (os.pathsep separated)."""
    env = os.environ if environ is None else environ
    value = env.get(THEMES_DIR_ENV, "")
    dirs = [Path(item) for item in value.split(os.pathsep) if item.strip()]
    if dirs:
        log.debug("Using theme directories from %s: %s", THEMES_DIR_ENV, dirs)
    return dirs


def default_locator(themes_dirs: Sequence[Union[Path, str]] = ()) -> ResourceLocator:
    """User theme directories first, then the bundled themes."""
    locators: List[ResourceLocator] = [
        DirectoryResourceLocator(d) for d in themes_dirs
    ]
    locators.append(PackageResourceLocator())
    if len(locators) == 1:
        return locators[0]
    return ChainedResourceLocator(locators)


class PropertySourceLoader:
    """Loads a theme's raw properties merged over the shared parent set."""

    def __init__(
        self,
        locator: Optional[ResourceLocator] = None,
        parent_identity: str = DEFAULT_PARENT_IDENTITY,
    ):
        self.locator = locator if locator is not None else default_locator()
        self.parent_identity = parent_identity

    def read_source(self, identity: str) -> Dict[str, str]:
        """
        Read one property source.

        Returns:
            Parsed properties, empty when the resource does not exist

        Raises:
            ResourceReadError: the resource exists but could not be read
        """
        name = resource_name_for(identity)
        try:
            text = self.locator.read_text(name)
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceReadError(self.locator.describe(name), exc) from exc

        if text is None:
            log.debug("No property source for %s (%s)", identity, name)
            return {}
        props = parse_properties(text, source=self.locator.describe(name))
        log.debug("Read %s properties from %s", len(props), name)
        return props

    def load(self, identity: str) -> Dict[str, str]:
        """
        Merge the theme set over the parent set.

        Theme entries win on key collisions; parent entries only fill keys the
        theme does not define.
        """
        parent = self.read_source(self.parent_identity)
        theme: Dict[str, str] = {}
        if identity != self.parent_identity:
            theme = self.read_source(identity)

        merged: Dict[str, str] = dict(parent)
        merged.update(theme)
        log.info(
            "Loaded %s properties for %s (%s theme, %s parent)",
            len(merged),
            identity,
            len(theme),
            len(parent),
        )
        return merged
