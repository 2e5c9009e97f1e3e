"""Table-driven model for the character entity elements of Doxygen prose."""

from __future__ import annotations

from html.entities import name2codepoint
from typing import TYPE_CHECKING

from doxyweave.node import DataModelNode

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor

# Doxygen element names that differ from the HTML entity of the same character.
_ALIASES = {
    "nonbreakablespace": "nbsp",
    "umlaut": "uml",
    "registered": "reg",
    "trademark": "trade",
    "tm": "trade",
    "imaginary": "image",
    "Yumlaut": "Yuml",
}

_NAMES = """
    nonbreakablespace iexcl cent pound curren yen brvbar sect umlaut copy ordf
    laquo not shy registered macr deg plusmn sup2 sup3 acute micro para middot
    cedil sup1 ordm raquo frac14 frac12 frac34 iquest
    Agrave Aacute Acirc Atilde Aumlaut Aring AElig Ccedil Egrave Eacute Ecirc
    Eumlaut Igrave Iacute Icirc Iumlaut ETH Ntilde Ograve Oacute Ocirc Otilde
    Oumlaut times Oslash Ugrave Uacute Ucirc Uumlaut Yacute THORN szlig
    agrave aacute acirc atilde aumlaut aring aelig ccedil egrave eacute ecirc
    eumlaut igrave iacute icirc iumlaut eth ntilde ograve oacute ocirc otilde
    oumlaut divide oslash ugrave uacute ucirc uumlaut yacute thorn yumlaut
    fnof Alpha Beta Gamma Delta Epsilon Zeta Eta Theta Iota Kappa Lambda Mu Nu
    Xi Omicron Pi Rho Sigma Tau Upsilon Phi Chi Psi Omega
    alpha beta gamma delta epsilon zeta eta theta iota kappa lambda mu nu xi
    omicron pi rho sigmaf sigma tau upsilon phi chi psi omega thetasym upsih piv
    bull hellip prime Prime oline frasl weierp imaginary real trademark alefsym
    larr uarr rarr darr harr crarr lArr uArr rArr dArr hArr
    forall part exist empty nabla isin notin ni prod sum minus lowast radic prop
    infin ang and or cap cup int there4 sim cong asymp ne equiv le ge sub sup
    nsub sube supe oplus otimes perp sdot lceil rceil lfloor rfloor lang rang
    loz spades clubs hearts diams OElig oelig Scaron scaron Yumlaut circ tilde
    ensp emsp thinsp zwnj zwj lrm rlm ndash mdash lsquo rsquo sbquo ldquo rdquo
    bdquo dagger Dagger permil lsaquo rsaquo euro tm
""".split()


def _character(name: str) -> str:
    entity = _ALIASES.get(name)
    if entity is None:
        entity = name.replace("umlaut", "uml") if name.endswith("umlaut") else name
    return chr(name2codepoint[entity])


SYMBOLS: dict[str, str] = {name: _character(name) for name in _NAMES}


class DocSymbol(DataModelNode):
    """An empty element standing for a single character, like ``<copy/>``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        if len(element) or (element.text or "").strip():
            raise xml.error(element, "symbol element must be empty")
        self.character = SYMBOLS[element.tag]

    def text(self) -> str:
        """Return the character."""
        return self.character


SYMBOL_ELEMENTS = {name: DocSymbol for name in SYMBOLS}
