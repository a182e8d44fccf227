"""tapedeck configuration models - re-exports the public config classes."""

from tapedeck.models.config import (
    FilteringConfig,
    HeaderFilterConfig,
    TapedeckConfig,
    build_header_filter,
    load_project_config,
)

__all__ = [
    "FilteringConfig",
    "HeaderFilterConfig",
    "TapedeckConfig",
    "build_header_filter",
    "load_project_config",
]
