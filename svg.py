import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from lxml import etree

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"
KEPT_NAMESPACES = (SVG_NS, XLINK_NS, XML_NS)
XML_SPACE = f"{{{XML_NS}}}space"

TEXT_ELEMENTS = ("text", "tspan", "textPath", "title", "desc", "style")

WHITESPACE_RE = re.compile(r"\s+")
BARE_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")
LENGTH_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([A-Za-z]+|%)?$")


@dataclass(frozen=True)
class DeclaredSize:
    width: Optional[str] = None
    height: Optional[str] = None


def _parser(**kwargs) -> etree.XMLParser:
    # No network access and no entity expansion for untrusted icon files.
    return etree.XMLParser(resolve_entities=False, no_network=True, **kwargs)


def _to_bytes(markup: Union[str, bytes]) -> bytes:
    return markup.encode("utf-8") if isinstance(markup, str) else markup


def extract_svg_size(markup: Union[str, bytes]) -> DeclaredSize:
    """Read width/height from the root element. Anything unreadable is treated as absent."""
    try:
        root = etree.fromstring(_to_bytes(markup), parser=_parser())
    except etree.XMLSyntaxError as e:
        logging.debug(f"Ignoring size of unparsable SVG: {e}")
        return DeclaredSize()

    def _attr(name: str) -> Optional[str]:
        value = (root.get(name) or "").strip()
        return value or None

    return DeclaredSize(_attr("width"), _attr("height"))


def is_bare_number(value: str) -> bool:
    return bool(BARE_NUMBER_RE.match(value))


def is_length(value: str) -> bool:
    """A number, optionally followed by a unit such as ``px`` or ``%``."""
    return bool(LENGTH_RE.match(value))


def _localname(elem) -> str:
    return etree.QName(elem).localname


def _preserves_space(elem) -> bool:
    while elem is not None:
        value = elem.get(XML_SPACE)
        if value is not None:
            return value == "preserve"
        elem = elem.getparent()
    return False


def _squeeze(value: Optional[str], container) -> Optional[str]:
    """Collapse whitespace runs. Blank text only survives inside text content."""
    if value is None or _preserves_space(container):
        return value
    value = WHITESPACE_RE.sub(" ", value)
    if not value.strip() and _localname(container) not in TEXT_ELEMENTS:
        return None
    return value


def minify_svg(markup: Union[str, bytes]) -> str:
    """
    Reduce an SVG to a single line: comments, processing instructions, blank text
    and editor metadata (Inkscape, Sodipodi, ...) are dropped.

    Raises lxml's XMLSyntaxError for markup that cannot be parsed.
    """
    root = etree.fromstring(
        _to_bytes(markup),
        parser=_parser(remove_comments=True, remove_pis=True),
    )

    # Remove all elements in foreign namespaces (metadata, sodipodi:namedview, ...).
    # Icons without an xmlns declaration have no namespace at all and are kept.
    for elem in root.xpath(".//*"):  # type: ignore
        namespace = etree.QName(elem).namespace
        if namespace is not None and namespace not in KEPT_NAMESPACES:
            parent = elem.getparent()
            if parent is not None:
                parent.remove(elem)

    for elem in root.iter():
        if not isinstance(elem.tag, str):
            continue

        for attr_name in list(elem.attrib.keys()):
            # Remove editor-namespaced attributes, keeping xlink:href and xml:space
            if "}" in attr_name and attr_name[1:].split("}", 1)[0] not in KEPT_NAMESPACES:
                del elem.attrib[attr_name]

        # Clean up -inkscape CSS properties from style attribute
        if "style" in elem.attrib:
            style_parts = [
                part.strip()
                for part in elem.attrib["style"].split(";")
                if part.strip() and not part.strip().startswith("-inkscape")
            ]
            if style_parts:
                elem.attrib["style"] = ";".join(style_parts)
            else:
                del elem.attrib["style"]

        elem.text = _squeeze(elem.text, elem)
        parent = elem.getparent()
        if parent is not None:
            elem.tail = _squeeze(elem.tail, parent)

    # Clean up unused namespace declarations
    etree.cleanup_namespaces(root)

    return etree.tostring(root, encoding="unicode")
