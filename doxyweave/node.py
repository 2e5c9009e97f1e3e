"""Base class shared by every parsed Doxygen XML node."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.errors import ParseError
    from doxyweave.xml_accessor import XmlAccessor

ContentItem = Union[str, "DataModelNode"]
NodeFactory = Callable[["XmlAccessor", "etree._Element"], "DataModelNode"]


class DataModelNode:
    """A parsed XML element.

    Subclasses do all their parsing in ``__init__`` and raise ParseError on
    any shape mismatch, so a constructed node is always complete. Mixed
    content is kept in ``children`` in document order.
    """

    def __init__(self, element_name: str) -> None:
        """Initialize with the originating tag name."""
        self.element_name = element_name
        self.children: list[ContentItem] = []

    def __repr__(self) -> str:
        """Return a short debugging representation."""
        return f"{type(self).__name__}(<{self.element_name}>)"

    def _check_attributes(
        self,
        xml: XmlAccessor,
        element: etree._Element,
        required: Iterable[str] = (),
        optional: Iterable[str] = (),
    ) -> None:
        """Reject unknown attributes and missing required ones."""
        required = set(required)
        allowed = required | set(optional)
        names = set(xml.attribute_names(element))
        unknown = sorted(names - allowed)
        if unknown:
            raise xml.error(
                element,
                "unexpected attribute",
                expected=", ".join(sorted(allowed)) or "no attributes",
                found=unknown[0],
            )
        missing = sorted(required - names)
        if missing:
            raise xml.error(element, "missing attribute", expected=f"@{missing[0]}")

    def _parse_mixed(
        self,
        xml: XmlAccessor,
        element: etree._Element,
        content: Mapping[str, NodeFactory | None],
    ) -> None:
        """Append text runs and child nodes to ``children`` in document order.

        A ``None`` factory marks an element that is recognised but dropped.
        """
        for item in xml.iter_content(element):
            if isinstance(item, str):
                self.children.append(item)
                continue
            if item.tag not in content:
                raise xml.error(
                    element,
                    "unexpected child element",
                    expected=f"one of {len(content)} known elements",
                    found=f"<{item.tag}>",
                )
            factory = content[item.tag]
            if factory is not None:
                self.children.append(factory(xml, item))

    def _parse_elements(
        self,
        xml: XmlAccessor,
        element: etree._Element,
        content: Mapping[str, NodeFactory | None],
    ) -> None:
        """Append child nodes to ``children``, rejecting non-blank text."""
        for child in self._element_children(xml, element):
            if child.tag not in content:
                raise self._unexpected(xml, element, child)
            factory = content[child.tag]
            if factory is not None:
                self.children.append(factory(xml, child))

    def _parse_text(self, xml: XmlAccessor, element: etree._Element) -> str:
        """Store the element's text as the single child and return it."""
        text = xml.get_inner_text(element)
        if text:
            self.children.append(text)
        return text

    def _element_children(
        self, xml: XmlAccessor, element: etree._Element
    ) -> Iterator[etree._Element]:
        """Yield child elements, rejecting stray non-blank text."""
        for item in xml.iter_content(element):
            if isinstance(item, str):
                if item.strip():
                    raise xml.error(
                        element,
                        "unexpected text",
                        expected="elements only",
                        found=repr(item.strip()[:40]),
                    )
                continue
            yield item

    def _set_once(
        self, xml: XmlAccessor, element: etree._Element, field: str, value: Any
    ) -> None:
        """Assign a field that may appear at most once."""
        if getattr(self, field) is not None:
            raise xml.error(
                element, "child element repeated", expected=f"at most one <{field}>"
            )
        setattr(self, field, value)

    def _unexpected(
        self, xml: XmlAccessor, element: etree._Element, child: etree._Element
    ) -> ParseError:
        """Build the error for a child element this node does not accept."""
        return xml.error(element, "unexpected child element", found=f"<{child.tag}>")

    def text(self) -> str:
        """Return the concatenated plain text of this subtree."""
        parts = []
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.text())
        return "".join(parts)


def iter_nodes(node: DataModelNode) -> Iterator[DataModelNode]:
    """Yield ``node`` and every node reachable from its fields, depth first."""
    yield node
    seen = {id(node)}
    for value in vars(node).values():
        items = value if isinstance(value, list) else [value]
        for item in items:
            if isinstance(item, tuple):
                candidates = list(item)
            else:
                candidates = [item]
            for candidate in candidates:
                if isinstance(candidate, DataModelNode) and id(candidate) not in seen:
                    seen.add(id(candidate))
                    yield from iter_nodes(candidate)
