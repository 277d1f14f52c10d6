"""Category Tree Model.

Provides a QAbstractItemModel over a ``FilterableCategoryTree``. The
invisible super-root and the payload-less source item are never rendered:
the source item's visible children are the top-level rows.

Predicate changes reset the model; description changes (retranslation)
emit ``dataChanged`` for the affected row.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from PyQt6.QtCore import QAbstractItemModel, QModelIndex, Qt

from preftree.gui.filterable_tree import FilterableCategoryTree, FilterableTreeItem, TreeItemPredicate
from preftree.model.category import Category
from preftree.model.observable import ObservableValue, Subscription

_Binding = Tuple[ObservableValue, Subscription]


def _release(bindings: List[_Binding]) -> None:
    for observable, subscription in bindings:
        observable.unsubscribe(subscription)
    bindings.clear()


class CategoryTreeModel(QAbstractItemModel):
    def __init__(self, tree: FilterableCategoryTree, parent=None):
        super().__init__(parent)
        self._tree = tree
        self._bindings: List[_Binding] = []
        for category in tree.all_categories():
            observable = category.description_changed
            sub = observable.subscribe(lambda _change, c=category: self._on_description_changed(c))
            self._bindings.append((observable, sub))
        # Categories outlive the model; drop the handlers with the C++ object.
        bindings = self._bindings
        self.destroyed.connect(lambda *_: _release(bindings))

    @property
    def tree(self) -> FilterableCategoryTree:
        return self._tree

    def dispose(self) -> None:
        """Stop tracking description changes of the wrapped categories."""
        _release(self._bindings)

    # Required overrides
    def rowCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if parent.isValid() and parent.column() != 0:
            return 0
        return len(self._item_from_index(parent).children)

    def columnCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        return 1

    def index(self, row: int, column: int, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if column != 0 or row < 0:
            return QModelIndex()
        parent_item = self._item_from_index(parent)
        children = parent_item.children
        if row >= len(children):
            return QModelIndex()
        return self.createIndex(row, column, children[row])

    def parent(self, index: QModelIndex):  # type: ignore[override]
        if not index.isValid():
            return QModelIndex()
        item: FilterableTreeItem = index.internalPointer()  # type: ignore
        parent = item.parent
        if parent is None or parent is self._tree.source_root:
            return QModelIndex()
        return self.createIndex(parent.row(), 0, parent)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if not index.isValid():
            return None
        category: Category = index.internalPointer().value  # type: ignore
        if role == Qt.ItemDataRole.DisplayRole:
            return category.description
        if role == Qt.ItemDataRole.ToolTipRole:
            return category.breadcrumb
        if role == Qt.ItemDataRole.DecorationRole:
            return category.item_icon
        if role == Qt.ItemDataRole.UserRole:
            return category
        return None

    def flags(self, index: QModelIndex):  # type: ignore[override]
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable

    # Filtering ----------------------------------------------------
    def set_predicate(self, predicate: Optional[TreeItemPredicate]) -> None:
        self.beginResetModel()
        self._tree.predicate = predicate
        self.endResetModel()

    def refilter(self) -> None:
        self.beginResetModel()
        self._tree.refilter()
        self.endResetModel()

    # Lookup -------------------------------------------------------
    def index_for_category(self, category: Category) -> QModelIndex:
        """Index of a visible category; invalid if absent or filtered out."""
        item = self._tree.item_for(category)
        if item is None:
            return QModelIndex()
        return self._index_for_item(item)

    def category_at(self, index: QModelIndex) -> Optional[Category]:
        if not index.isValid():
            return None
        return index.internalPointer().value  # type: ignore

    # Helpers
    def _item_from_index(self, index: QModelIndex) -> FilterableTreeItem:
        if not index.isValid():
            return self._tree.source_root
        return index.internalPointer()  # type: ignore

    def _index_for_item(self, item: FilterableTreeItem) -> QModelIndex:
        parent = item.parent
        if parent is None or item not in parent.children:
            return QModelIndex()
        if parent is not self._tree.source_root and not self._index_for_item(parent).isValid():
            return QModelIndex()
        return self.createIndex(item.row(), 0, item)

    def _on_description_changed(self, category: Category) -> None:
        idx = self.index_for_category(category)
        if idx.isValid():
            self.dataChanged.emit(idx, idx)


__all__ = ["CategoryTreeModel"]
