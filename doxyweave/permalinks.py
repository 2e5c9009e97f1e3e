"""Helpers turning Doxygen names and ids into URL-safe permalinks and anchors."""

import re

_SEGMENT_RE = re.compile(r"[^a-z0-9]+")
_HEX_ANCHOR_RE = re.compile(r"_1[0-9a-fg]*$")
_TEXT_ANCHOR_RE = re.compile(r"_1_[0-9a-z]*$")
_ANCHOR_PREFIX_RE = re.compile(r"^.*_1")


def sanitize_segment(name: str) -> str:
    """Lower-case a single path segment and hyphenate non-alphanumeric runs."""
    return _SEGMENT_RE.sub("-", name.lower()).strip("-")


def sanitize_hierarchical_path(path: str) -> str:
    """Sanitize each ``/``-separated segment, dropping empty ones."""
    segments = (sanitize_segment(s) for s in path.split("/"))
    return "/".join(s for s in segments if s)


def sanitize_template_suffix(template_parameters: str) -> str:
    """Turn ``<int, 3>`` into ``int-3`` so specializations get distinct paths."""
    return sanitize_segment(template_parameters.replace("::", "-"))


def strip_permalink_hex_anchor(refid: str) -> str:
    """Drop the ``_1<hex>`` member suffix, leaving the owning compound id."""
    return _HEX_ANCHOR_RE.sub("", refid)


def strip_permalink_text_anchor(refid: str) -> str:
    """Drop a ``_1_<text>`` section suffix, leaving the page id."""
    return _TEXT_ANCHOR_RE.sub("", refid)


def get_permalink_anchor(refid: str) -> str:
    """Return the part of a refid after its last ``_1`` separator."""
    return _ANCHOR_PREFIX_RE.sub("", refid)


def sanitize_anonymous_namespace(name: str) -> str:
    """Shorten ``anonymous_namespace{file}`` to ``anonymous{file}``."""
    return name.replace("anonymous_namespace{", "anonymous{")
