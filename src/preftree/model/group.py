"""Settings and groups attached to categories.

The category tree only relies on the narrow protocols below (breadcrumb
propagation, retranslation, unmarking). ``Setting`` and ``Group`` are the
default implementations used by the search service and the tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .breadcrumbs import join_breadcrumb

__all__ = [
    "Translator",
    "SettingLike",
    "GroupLike",
    "Setting",
    "Group",
    "groups_to_settings",
]


@runtime_checkable
class Translator(Protocol):
    def translate(self, key: str) -> str: ...  # pragma: no cover - structural


@runtime_checkable
class SettingLike(Protocol):
    def unmark(self) -> None: ...  # pragma: no cover - structural


@runtime_checkable
class GroupLike(Protocol):
    settings: Sequence[Any]

    def add_to_breadcrumb(self, breadcrumb: str, delimiter: Optional[str] = None) -> None: ...  # pragma: no cover

    def retranslate(self, service: Optional[Translator] = None) -> None: ...  # pragma: no cover

    def unmark(self) -> None: ...  # pragma: no cover


def _translated(key: Optional[str], service: Optional[Translator]) -> str:
    if not key:
        return key or ""
    if service is None:
        return key
    return service.translate(key)


@dataclass(eq=False)
class Setting:
    """A single user-configurable value."""

    description_key: str
    value: Any = None
    description: str = ""
    breadcrumb: str = ""
    marked: bool = False

    def __post_init__(self) -> None:
        if not self.description:
            self.description = self.description_key

    @classmethod
    def of(cls, description: str, value: Any = None) -> "Setting":
        return cls(description_key=description, value=value)

    def add_to_breadcrumb(self, breadcrumb: str, delimiter: Optional[str] = None) -> None:
        self.breadcrumb = join_breadcrumb(breadcrumb, self.description, delimiter)

    def translate(self, service: Optional[Translator] = None) -> None:
        self.description = _translated(self.description_key, service)

    def mark(self) -> None:
        self.marked = True

    def unmark(self) -> None:
        self.marked = False

    def __str__(self) -> str:
        return self.description


@dataclass(eq=False)
class Group:
    """A collection of related settings, optionally titled."""

    settings: Tuple[Setting, ...] = ()
    description_key: Optional[str] = None
    description: str = ""
    breadcrumb: str = ""
    marked: bool = False
    translation_service: Optional[Translator] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.settings = tuple(self.settings)
        if not self.description:
            self.description = self.description_key or ""

    @classmethod
    def of(cls, *settings: Setting, description: Optional[str] = None) -> "Group":
        return cls(settings=settings, description_key=description)

    def add_to_breadcrumb(self, breadcrumb: str, delimiter: Optional[str] = None) -> None:
        """Take the owning category's breadcrumb and pass it on to the settings.

        ``delimiter`` defaults to the configured one; the breadcrumb builder
        passes its own so a whole path uses a single separator.
        """
        self.breadcrumb = breadcrumb
        prefix = join_breadcrumb(breadcrumb, self.description, delimiter) if self.description else breadcrumb
        for setting in self.settings:
            setting.add_to_breadcrumb(prefix, delimiter)

    def retranslate(self, service: Optional[Translator] = None) -> None:
        """Re-apply the translation to the title and the settings.

        Without ``service`` the last service used is reapplied.
        """
        if service is not None:
            self.translation_service = service
        self.description = _translated(self.description_key, self.translation_service)
        for setting in self.settings:
            setting.translate(self.translation_service)

    def mark(self) -> None:
        self.marked = True

    def unmark(self) -> None:
        self.marked = False


def groups_to_settings(groups: Sequence[GroupLike]) -> list:
    """Flatten the settings of all ``groups`` preserving order."""
    return [setting for group in groups for setting in group.settings]
