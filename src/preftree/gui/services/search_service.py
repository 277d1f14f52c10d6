"""Search over the preference tree.

A search pass:
 1. unmarks every category (groups and settings),
 2. collects categories, groups and settings whose description contains the
    search text (case-insensitive unless configured otherwise),
 3. marks the matching groups and settings for visual highlighting,
 4. narrows the tree predicate to categories that match or hold a match.

An empty search restores the tree's base predicate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Set

from preftree.gui.filterable_tree import FilterableCategoryTree, TreeItemPredicate
from preftree.model.category import Category
from preftree.model.group import groups_to_settings

from .event_bus import EventBus, GUIEvent
from preftree.config.settings_service import SettingsService

__all__ = ["SearchResult", "SearchService"]

_logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    text: str
    categories: List[Category] = field(default_factory=list)
    groups: List[Any] = field(default_factory=list)
    settings: List[Any] = field(default_factory=list)

    @property
    def has_matches(self) -> bool:
        return bool(self.categories)

    @property
    def match_count(self) -> int:
        return len(self.categories) + len(self.groups) + len(self.settings)


class SearchService:
    def __init__(
        self,
        tree: FilterableCategoryTree,
        *,
        bus: Optional[EventBus] = None,
        case_sensitive: Optional[bool] = None,
        apply_predicate: Optional[Callable[[Optional[TreeItemPredicate]], None]] = None,
    ) -> None:
        self._tree = tree
        self._bus = bus
        self._case_sensitive = case_sensitive
        self._apply = apply_predicate or self._set_tree_predicate
        self._last: Optional[SearchResult] = None

    def _set_tree_predicate(self, predicate: Optional[TreeItemPredicate]) -> None:
        self._tree.predicate = predicate

    @property
    def case_sensitive(self) -> bool:
        if self._case_sensitive is None:
            return SettingsService.instance.search_case_sensitive
        return self._case_sensitive

    @property
    def last_result(self) -> Optional[SearchResult]:
        return self._last

    def _contains(self, haystack: Optional[str], needle: str) -> bool:
        if not haystack:
            return False
        if self.case_sensitive:
            return needle in haystack
        return needle in haystack.lower()

    def search(self, text: str) -> SearchResult:
        text = (text or "").strip()
        categories = self._tree.all_categories()
        for category in categories:
            category.unmark_all()
        if not text:
            result = SearchResult(text="")
            self._apply(self._tree.base_predicate)
            self._finish(result)
            return result

        needle = text if self.case_sensitive else text.lower()
        result = SearchResult(text=text)
        matched: Set[int] = set()
        for category in categories:
            hit = self._contains(category.description, needle)
            groups = category.groups or ()
            for group in groups:
                if self._contains(getattr(group, "description", ""), needle):
                    group.mark()
                    result.groups.append(group)
                    hit = True
            for setting in groups_to_settings(groups):
                if self._contains(getattr(setting, "description", ""), needle):
                    setting.mark()
                    result.settings.append(setting)
                    hit = True
            if hit:
                matched.add(id(category))
                result.categories.append(category)

        def _predicate(category: Category) -> bool:
            return id(category) in matched

        self._apply(_predicate)
        self._finish(result)
        return result

    def clear(self) -> SearchResult:
        return self.search("")

    def _finish(self, result: SearchResult) -> None:
        self._last = result
        _logger.debug(
            "Search %r: %d categories, %d groups, %d settings",
            result.text,
            len(result.categories),
            len(result.groups),
            len(result.settings),
        )
        if self._bus is not None:
            self._bus.publish(
                GUIEvent.SEARCH_CHANGED,
                {"text": result.text, "categories": len(result.categories)},
            )
