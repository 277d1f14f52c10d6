"""Filterable tree (headless).

``FilterableTreeItem`` keeps the full, permanent list of its children
(``source_children``) and exposes the subset accepted by the current
predicate (``children``). Filtering never discards items, so clearing a
search restores the original tree exactly.

``FilterableCategoryTree`` wraps a list of top-level categories::

    root (invisible, never filtered)
      source item (no payload)
        category A
          category A1
        category B

The Qt model in ``category_tree_model`` renders the source item's visible
children as top-level rows.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from preftree.config.settings_service import SettingsService
from preftree.model.breadcrumbs import ensure_acyclic
from preftree.model.category import Category

__all__ = [
    "TreeItemPredicate",
    "FilterableTreeItem",
    "FilterableCategoryTree",
    "show_all",
    "named_category_predicate",
    "configured_predicate",
]

_logger = logging.getLogger(__name__)

T = TypeVar("T")
TreeItemPredicate = Callable[[Category], bool]


def show_all(category: Category) -> bool:  # noqa: ARG001 - predicate signature
    return True


def named_category_predicate(name: str) -> TreeItemPredicate:
    """Predicate accepting only the category whose description key is ``name``.

    The key is matched rather than the displayed label so the predicate keeps
    working after the tree is retranslated.
    """

    def _matches(category: Category) -> bool:
        return category.description_key == name

    return _matches


def configured_predicate() -> Optional[TreeItemPredicate]:
    """Predicate for the configured default category, or None (show all)."""
    name = SettingsService.instance.default_category
    return named_category_predicate(name) if name else None


class FilterableTreeItem(Generic[T]):
    def __init__(self, value: Optional[T] = None) -> None:
        self.value = value
        self.parent: Optional["FilterableTreeItem[T]"] = None
        self._source_children: List["FilterableTreeItem[T]"] = []
        self._children: Tuple["FilterableTreeItem[T]", ...] = ()
        self._predicate: Optional[Callable[[T], bool]] = None

    # Structure ------------------------------------------------------
    def add_source_child(self, child: "FilterableTreeItem[T]") -> "FilterableTreeItem[T]":
        child.parent = self
        child._predicate = self._predicate
        self._source_children.append(child)
        if self._accepts(child):
            self._children = self._children + (child,)
        return child

    @property
    def source_children(self) -> Tuple["FilterableTreeItem[T]", ...]:
        return tuple(self._source_children)

    @property
    def children(self) -> Tuple["FilterableTreeItem[T]", ...]:
        return self._children

    def row(self) -> int:
        """Position among the parent's visible children (0 for detached items)."""
        if self.parent is None:
            return 0
        return self.parent._children.index(self)

    # Filtering ------------------------------------------------------
    @property
    def predicate(self) -> Optional[Callable[[T], bool]]:
        return self._predicate

    @predicate.setter
    def predicate(self, predicate: Optional[Callable[[T], bool]]) -> None:
        self._predicate = predicate
        self.refilter()

    def refilter(self) -> None:
        """Re-evaluate the current predicate over the whole subtree.

        Used when the content the predicate inspects has changed (e.g. a new
        search marked different settings) while the predicate object stayed.
        """
        for child in self._source_children:
            child._predicate = self._predicate
            child.refilter()
        self._children = tuple(c for c in self._source_children if self._accepts(c))

    def _accepts(self, child: "FilterableTreeItem[T]") -> bool:
        if child._children:
            return True
        if child.value is None:
            return False
        if self._predicate is None:
            return True
        return bool(self._predicate(child.value))

    # Traversal ------------------------------------------------------
    def iter_source(self) -> Iterator["FilterableTreeItem[T]"]:
        """Yield every item below this one (permanent children, pre-order)."""
        for child in self._source_children:
            yield child
            yield from child.iter_source()

    def iter_visible(self) -> Iterator["FilterableTreeItem[T]"]:
        for child in self._children:
            yield child
            yield from child.iter_visible()

    def find(self, value: T) -> Optional["FilterableTreeItem[T]"]:
        for item in self.iter_source():
            if item.value is value:
                return item
        return None

    def __repr__(self) -> str:
        return f"FilterableTreeItem({self.value!r}, {len(self._children)}/{len(self._source_children)})"


class FilterableCategoryTree:
    """Filterable tree built from top-level categories.

    Parameters
    ----------
    categories : Sequence[Category]
        Top-level categories, each possibly nested via ``sub_categories``.
    predicate : callable | None
        Initial visibility predicate. ``None`` shows every category; pass
        ``named_category_predicate(...)`` to open on a single category.
    """

    def __init__(
        self,
        categories: Optional[Sequence[Category]],
        predicate: Optional[TreeItemPredicate] = None,
    ) -> None:
        self._categories: Tuple[Category, ...] = tuple(categories or ())
        if SettingsService.instance.debug_tree_checks:
            ensure_acyclic(self._categories)
        self._root: FilterableTreeItem[Category] = FilterableTreeItem()
        self._source_root: FilterableTreeItem[Category] = FilterableTreeItem()
        self._add_recursive(self._source_root, self._categories)
        self._root.add_source_child(self._source_root)
        self._base_predicate = predicate
        self._root.predicate = predicate
        _logger.debug(
            "Built category tree: %d top-level, %d total",
            len(self._categories),
            sum(1 for _ in self._source_root.iter_source()),
        )

    def _add_recursive(
        self, parent: FilterableTreeItem[Category], categories: Optional[Sequence[Category]]
    ) -> None:
        for category in categories or ():
            category.seal()
            item: FilterableTreeItem[Category] = FilterableTreeItem(category)
            # children first so the item is accepted based on its full subtree
            self._add_recursive(item, category.children)
            parent.add_source_child(item)

    @property
    def root(self) -> FilterableTreeItem[Category]:
        return self._root

    @property
    def source_root(self) -> FilterableTreeItem[Category]:
        return self._source_root

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    @property
    def base_predicate(self) -> Optional[TreeItemPredicate]:
        """Predicate supplied at construction (restored when a search is cleared)."""
        return self._base_predicate

    @property
    def predicate(self) -> Optional[TreeItemPredicate]:
        return self._root.predicate

    @predicate.setter
    def predicate(self, predicate: Optional[TreeItemPredicate]) -> None:
        self._root.predicate = predicate
        _logger.debug("Tree predicate changed: %d visible", len(self.visible_categories()))

    def refilter(self) -> None:
        self._root.refilter()

    def item_for(self, category: Category) -> Optional[FilterableTreeItem[Category]]:
        return self._source_root.find(category)

    def visible_categories(self) -> List[Category]:
        """Visible categories in display order (pre-order)."""
        return [item.value for item in self._source_root.iter_visible() if item.value is not None]

    def all_categories(self) -> List[Category]:
        return [item.value for item in self._source_root.iter_source() if item.value is not None]
