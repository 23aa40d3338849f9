"""Application layer: filter groups, collection, builders, reporters."""

from depfilter.application.builders import (
    FilterCollectionBuilder,
    FilterGroupBuilder,
    FilterStage,
    build_filter_collection,
    build_filter_group,
)
from depfilter.application.filter_collection import FilterCollection
from depfilter.application.filter_group import FilterGroup

__all__ = [
    "FilterCollection",
    "FilterCollectionBuilder",
    "FilterGroup",
    "FilterGroupBuilder",
    "FilterStage",
    "build_filter_collection",
    "build_filter_group",
]
