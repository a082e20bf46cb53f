"""Release domains built on release_spine.core primitives."""
