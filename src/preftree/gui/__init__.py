"""Navigation layer: filterable category tree, Qt model/view and services."""
