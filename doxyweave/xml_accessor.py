"""Stateless helpers over lxml elements: attributes, inner elements and text."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from lxml import etree

from doxyweave.errors import ParseError

_PREFIXES = {
    "http://www.w3.org/XML/1998/namespace": "xml",
    "http://www.w3.org/2001/XMLSchema-instance": "xsi",
}


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
        huge_tree=True,
    )


def load_xml(path: Path) -> etree._Element:
    """Parse an XML file and return its root element."""
    try:
        return etree.parse(str(path), _parser()).getroot()
    except (OSError, etree.XMLSyntaxError) as e:
        msg = f"cannot parse XML: {e}"
        raise ParseError(msg, path=str(path)) from e


def load_xml_string(text: str | bytes) -> etree._Element:
    """Parse an XML document held in memory."""
    data = text.encode("utf-8") if isinstance(text, str) else text
    try:
        return etree.fromstring(data, _parser())
    except etree.XMLSyntaxError as e:
        msg = f"cannot parse XML: {e}"
        raise ParseError(msg) from e


def _attribute_name(key: str) -> str:
    if not key.startswith("{"):
        return key
    qname = etree.QName(key)
    prefix = _PREFIXES.get(qname.namespace or "")
    return f"{prefix}:{qname.localname}" if prefix else qname.localname


class XmlAccessor:
    """Answers shape questions about raw elements and extracts typed values.

    Every extraction method raises ParseError when the element does not have
    the requested shape. ``path`` is only used to name the file in errors.
    """

    def __init__(self, path: str | None = None) -> None:
        """Initialize the accessor for one source file."""
        self.path = path

    def error(
        self,
        element: etree._Element | None,
        message: str,
        *,
        expected: str | None = None,
        found: str | None = None,
    ) -> ParseError:
        """Build a ParseError located at ``element``."""
        name = None
        if element is not None:
            name = element.tag
            if element.sourceline:
                message = f"line {element.sourceline}: {message}"
        return ParseError(
            message, path=self.path, element=name, expected=expected, found=found
        )

    # Attributes

    def attribute_names(self, element: etree._Element) -> list[str]:
        """Return the attribute names, namespaced ones as ``xml:lang`` style."""
        return [_attribute_name(k) for k in element.attrib]

    def _raw_attribute(self, element: etree._Element, name: str) -> str | None:
        for key, value in element.attrib.items():
            if _attribute_name(key) == name:
                return value
        return None

    def has_attribute(self, element: etree._Element, name: str) -> bool:
        """Return True if the named attribute is present."""
        return self._raw_attribute(element, name) is not None

    def get_attribute_string(self, element: etree._Element, name: str) -> str:
        """Return an attribute value as a string."""
        value = self._raw_attribute(element, name)
        if value is None:
            raise self.error(element, "missing attribute", expected=f"@{name}")
        return value

    def get_attribute_number(self, element: etree._Element, name: str) -> int:
        """Return an attribute value as an integer."""
        value = self.get_attribute_string(element, name)
        try:
            return int(value)
        except ValueError:
            raise self.error(
                element, f"attribute {name} is not a number", found=repr(value)
            ) from None

    def get_attribute_boolean(self, element: etree._Element, name: str) -> bool:
        """Return a ``yes``/``no`` attribute value as a bool."""
        value = self.get_attribute_string(element, name)
        if value == "yes":
            return True
        if value == "no":
            return False
        raise self.error(
            element,
            f"attribute {name} is not a boolean",
            expected="yes|no",
            found=value,
        )

    # Inner elements

    def children(self, element: etree._Element) -> list[etree._Element]:
        """Return the child elements in document order."""
        return [child for child in element if isinstance(child.tag, str)]

    def iter_content(self, element: etree._Element) -> Iterator[str | etree._Element]:
        """Yield text runs and child elements in document order."""
        if element.text:
            yield element.text
        for child in element:
            if isinstance(child.tag, str):
                yield child
            if child.tail:
                yield child.tail

    def has_inner_element(self, element: etree._Element, name: str) -> bool:
        """Return True if at least one child element has the given name."""
        return any(child.tag == name for child in self.children(element))

    def is_inner_element_text(self, element: etree._Element, name: str) -> bool:
        """Return True if exactly one child ``name`` exists and holds only text."""
        matches = self._named(element, name)
        return len(matches) == 1 and len(self.children(matches[0])) == 0

    def has_inner_text(self, element: etree._Element) -> bool:
        """Return True if the element holds non-blank text of its own."""
        return any(
            isinstance(item, str) and item.strip()
            for item in self.iter_content(element)
        )

    def _named(self, element: etree._Element, name: str) -> list[etree._Element]:
        return [child for child in self.children(element) if child.tag == name]

    def get_inner_elements(
        self, element: etree._Element, name: str
    ) -> list[etree._Element]:
        """Return the ordered child elements with the given name."""
        matches = self._named(element, name)
        if not matches:
            raise self.error(element, "missing child element", expected=f"<{name}>")
        return matches

    def get_inner_element_text(self, element: etree._Element, name: str) -> str:
        """Return the text of the single child ``name`` ('' when empty)."""
        matches = self.get_inner_elements(element, name)
        if len(matches) > 1:
            raise self.error(
                element,
                "child element repeated",
                expected=f"one <{name}>",
                found=str(len(matches)),
            )
        return self.get_inner_text(matches[0])

    def get_inner_element_number(self, element: etree._Element, name: str) -> int:
        """Return the text of the single child ``name`` as an integer."""
        text = self.get_inner_element_text(element, name)
        try:
            return int(text)
        except ValueError:
            raise self.error(
                element, f"<{name}> is not a number", found=repr(text)
            ) from None

    def get_inner_element_boolean(self, element: etree._Element, name: str) -> bool:
        """Return the text of the single child ``name`` as a bool."""
        text = self.get_inner_element_text(element, name).strip()
        if text in ("true", "yes"):
            return True
        if text in ("false", "no"):
            return False
        raise self.error(
            element, f"<{name}> is not a boolean", expected="true|false", found=text
        )

    def get_inner_text(self, element: etree._Element) -> str:
        """Return the element's text; it must not contain child elements."""
        inner = self.children(element)
        if inner:
            raise self.error(
                element, "expected text only", found=f"<{inner[0].tag}>"
            )
        return element.text or ""
