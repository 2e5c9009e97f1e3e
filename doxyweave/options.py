"""Typed view of the configuration consumed by the workspace and renderers."""

from dataclasses import dataclass, field
from typing import Any

from doxyweave.errors import ConfigError
from doxyweave.escaping import OUTPUT_FORMATS, OutputFormat

SIDEBAR_COLLECTIONS = ("groups", "namespaces", "classes", "files", "pages")


@dataclass(frozen=True)
class Options:
    """Switches that gate optional output; none of them affect parsing."""

    verbose: bool = False
    render_program_listing: bool = True
    render_program_listing_inline: bool = True
    suggest_to_do_descriptions: bool = False
    output_format: OutputFormat = "markdown"
    base_url: str = "/api/"
    workers: int = 1
    sidebar_collections: tuple[str, ...] = SIDEBAR_COLLECTIONS
    front_matter: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Options":
        """Build options from a merged configuration dictionary."""
        output_format = config.get("output_format", "markdown")
        if output_format not in OUTPUT_FORMATS:
            msg = f"output_format must be one of {', '.join(OUTPUT_FORMATS)}"
            raise ConfigError(msg)
        collections = tuple(config.get("sidebar_collections", SIDEBAR_COLLECTIONS))
        unknown = [name for name in collections if name not in SIDEBAR_COLLECTIONS]
        if unknown:
            msg = f"unknown sidebar collection: {unknown[0]}"
            raise ConfigError(msg)
        workers = int(config.get("workers", 1))
        if workers < 1:
            msg = "workers must be at least 1"
            raise ConfigError(msg)
        base_url = str(config.get("base_url", "/api/"))
        if not base_url.endswith("/"):
            base_url += "/"
        return cls(
            verbose=bool(config.get("verbose", False)),
            render_program_listing=bool(config.get("render_program_listing", True)),
            render_program_listing_inline=bool(
                config.get("render_program_listing_inline", True)
            ),
            suggest_to_do_descriptions=bool(
                config.get("suggest_to_do_descriptions", False)
            ),
            output_format=output_format,
            base_url=base_url,
            workers=workers,
            sidebar_collections=collections,
            front_matter=dict(config.get("front_matter") or {}),
        )
