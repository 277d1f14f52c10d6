"""preftree: hierarchical preference categories and their navigation tree."""

from preftree.model import Category, Group, Setting, stamp_breadcrumbs

__all__ = ["Category", "Group", "Setting", "stamp_breadcrumbs"]
