"""Compaction of multi-language translation tables into reviewable source code."""

# Package exports should be side-effect free.

from . import (
    models,
    compactor,
    gap_filler,
    jsast,
    tree_builder,
    storage,
    config,
    pipeline,
)

__all__ = [
    "models",
    "compactor",
    "gap_filler",
    "jsast",
    "tree_builder",
    "storage",
    "config",
    "pipeline",
]
