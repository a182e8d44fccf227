"""Project configuration model for tapedeck.

Captures tapedeck.yaml fields with defaults for the tape directory,
emitter width and the header filters applied before recording.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from tapedeck.handler.header_filter import (
    REDACTED_PLACEHOLDER,
    HeaderFilter,
    HeaderTransform,
    compose,
    redact_headers,
    remove_headers,
    replace_headers,
    strip_hop_by_hop,
)

CONFIG_FILENAME = "tapedeck.yaml"


class HeaderFilterConfig(BaseModel):
    """Header rules for one direction (request or response).

    Rules run in a fixed order: hop-by-hop stripping, removal,
    redaction, then replacement.
    """

    model_config = {"extra": "forbid"}

    strip_hop_by_hop: bool = True
    remove: list[str] = Field(default_factory=list)
    redact: list[str] = Field(default_factory=list)
    replace: dict[str, str] = Field(default_factory=dict)

    def to_transform(self, placeholder: str = REDACTED_PLACEHOLDER) -> HeaderTransform:
        """Build the header transform described by these rules."""
        steps: list[HeaderTransform] = []
        if self.strip_hop_by_hop:
            steps.append(strip_hop_by_hop)
        if self.remove:
            steps.append(remove_headers(*self.remove))
        if self.redact:
            steps.append(redact_headers(*self.redact, placeholder=placeholder))
        if self.replace:
            steps.append(replace_headers(self.replace))
        return compose(*steps)


class FilteringConfig(BaseModel):
    """Header filtering configuration for both directions."""

    model_config = {"extra": "forbid"}

    request: HeaderFilterConfig = Field(default_factory=HeaderFilterConfig)
    response: HeaderFilterConfig = Field(default_factory=HeaderFilterConfig)


class TapedeckConfig(BaseModel):
    """Project-level configuration loaded from tapedeck.yaml."""

    model_config = {"extra": "forbid"}

    tape_root: str = "tapes"
    placeholder: str = REDACTED_PLACEHOLDER
    width: int = Field(default=120, ge=20)
    filters: FilteringConfig = Field(default_factory=FilteringConfig)


def build_header_filter(config: TapedeckConfig) -> HeaderFilter:
    """Return a new HeaderFilter step configured from config.

    A fresh instance is returned on every call because a chain step can
    only be linked into one chain.
    """
    return HeaderFilter(
        request_transform=config.filters.request.to_transform(config.placeholder),
        response_transform=config.filters.response.to_transform(config.placeholder),
    )


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) looking for tapedeck.yaml.

    Args:
        start: Starting path (file or directory). Defaults to cwd.

    Returns:
        Path to the directory containing tapedeck.yaml, or cwd if none is
        found.
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists():
            return current
        current = current.parent
    return Path.cwd()


def load_project_config(project_root: Path | None = None) -> TapedeckConfig:
    """Load TapedeckConfig from tapedeck.yaml. Returns defaults if not found.

    Args:
        project_root: Path to the project root directory. If None,
            uses find_project_root() to locate it.

    Returns:
        Validated TapedeckConfig instance.
    """
    if project_root is None:
        project_root = find_project_root()
    return load_config_file(project_root / CONFIG_FILENAME)


def load_config_file(config_path: Path) -> TapedeckConfig:
    """Load and validate a specific config file; defaults if it is missing or empty.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If the contents do not match the schema.
    """
    if not config_path.exists():
        return TapedeckConfig()
    import yaml

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return TapedeckConfig()
    return TapedeckConfig.model_validate(raw)
