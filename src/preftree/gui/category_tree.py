"""Category tree view.

Navigation widget listing the preference categories. The tree root is never
shown; categories flagged with ``Category.expand()`` are expanded whenever
the tree is (re)populated, and one initial category is selected on start.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from PyQt6.QtCore import QItemSelection, QModelIndex, pyqtSignal
from PyQt6.QtWidgets import QAbstractItemView, QTreeView

from preftree.gui.category_tree_model import CategoryTreeModel
from preftree.gui.filterable_tree import (
    FilterableCategoryTree,
    TreeItemPredicate,
    configured_predicate,
)
from preftree.gui.services.event_bus import EventBus, GUIEvent
from preftree.gui.services.search_service import SearchResult, SearchService
from preftree.model.category import Category, translate_categories
from preftree.model.group import Translator

__all__ = ["CategoryTree"]

_logger = logging.getLogger(__name__)

CategoryRef = Union[Category, str]


class CategoryTree(QTreeView):
    categorySelected = pyqtSignal(object)  # Category

    def __init__(
        self,
        categories: Sequence[Category],
        *,
        initial_category: Optional[CategoryRef] = None,
        predicate: Optional[TreeItemPredicate] = None,
        bus: Optional[EventBus] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._bus = bus
        self._current: Optional[Category] = None
        if predicate is None:
            predicate = configured_predicate()
        self._tree = FilterableCategoryTree(categories, predicate)
        self._model = CategoryTreeModel(self._tree, self)
        self._search = SearchService(self._tree, bus=bus, apply_predicate=self.set_predicate)
        self.setModel(self._model)
        # Root item is invisible; its rows are the top-level categories.
        self.setHeaderHidden(True)
        self.setRootIsDecorated(True)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.selectionModel().selectionChanged.connect(self._on_selection_changed)  # type: ignore
        self._expand_flagged()
        if initial_category is not None and not self.select_category(initial_category):
            _logger.debug("Initial category %r not found in tree", initial_category)

    # Accessors ----------------------------------------------------
    @property
    def filterable_tree(self) -> FilterableCategoryTree:
        return self._tree

    @property
    def category_model(self) -> CategoryTreeModel:
        return self._model

    @property
    def search_service(self) -> SearchService:
        return self._search

    # Filtering ----------------------------------------------------
    def set_predicate(self, predicate: Optional[TreeItemPredicate]) -> None:
        self._repopulate(lambda: self._model.set_predicate(predicate))

    def _repopulate(self, reset) -> None:
        """Run a model reset, then restore expansion and the selection if still visible."""
        selected = self.current_category()
        reset()
        self._expand_flagged()
        if selected is None or not self.select_category(selected):
            self._current = None

    def search(self, text: str) -> SearchResult:
        """Filter the tree to categories matching ``text`` and mark matches."""
        result = self._search.search(text)
        if result.text:
            self.expandAll()
        return result

    # Translation ------------------------------------------------
    def retranslate(self, service: Optional[Translator]) -> None:
        """Apply ``service`` to every category and group, then restamp breadcrumbs."""
        translate_categories(self._tree.categories, service)
        # labels changed, so predicates that inspect them must be re-evaluated
        self._repopulate(self._model.refilter)
        if self._bus is not None:
            self._bus.publish(GUIEvent.LOCALE_CHANGED, getattr(service, "locale", None))

    # Selection ----------------------------------------------------
    def select_category(self, category: CategoryRef) -> bool:
        """Select ``category`` (instance or description); False if not visible."""
        target = self._resolve(category)
        if target is None:
            return False
        idx = self._model.index_for_category(target)
        if not idx.isValid():
            return False
        self.setCurrentIndex(idx)
        self.scrollTo(idx)
        return True

    def current_category(self) -> Optional[Category]:
        return self._model.category_at(self.currentIndex())

    def _resolve(self, category: CategoryRef) -> Optional[Category]:
        if isinstance(category, Category):
            return category
        for candidate in self._tree.visible_categories():
            if category in (candidate.description, candidate.description_key):
                return candidate
        return None

    def _on_selection_changed(self, selected: QItemSelection, _deselected: QItemSelection) -> None:
        indexes = selected.indexes()
        if not indexes:
            return
        category = self._model.category_at(indexes[0])
        if category is None or category is self._current:
            return
        self._current = category
        self.categorySelected.emit(category)
        if self._bus is not None:
            self._bus.publish(GUIEvent.CATEGORY_SELECTED, category)

    # Expansion ----------------------------------------------------
    def _expand_flagged(self) -> None:
        for category in self._tree.visible_categories():
            if category.auto_expand:
                idx = self._model.index_for_category(category)
                if idx.isValid():
                    self.expand(idx)

    def index_for(self, category: Category) -> QModelIndex:
        return self._model.index_for_category(category)
