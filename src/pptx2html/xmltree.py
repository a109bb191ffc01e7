#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/xmltree.py
"""Order-preserving XML tree used by every renderer.

PPTX parts are parsed with :mod:`lxml.etree` and wrapped in :class:`XmlNode`
objects. Element and attribute names are exposed with their conventional OOXML
prefixes (``"p:sp"``, ``"a:off"``, ``"r:id"``) regardless of the prefixes the
document itself declares, so lookups never depend on how a producer named its
namespaces. Children are kept in document order, which the custom-geometry
path emitter and the chart styling fixer both depend on.

The underlying lxml tree keeps the document's own prefixes, comments and
processing instructions, so a part that is edited and serialized again only
differs where it was changed.

Examples
--------
>>> root = parse_xml('<a:xfrm xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main">'
...                  '<a:off x="12700" y="0"/></a:xfrm>')
>>> attr(root, "a:off", "x")
'12700'

"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import MutableMapping
from typing import Iterator

from lxml import etree

from pptx2html.exceptions import MalformedFileError

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# Canonical prefixes used for lookups, keyed by namespace URI
KNOWN_NAMESPACES: dict[str, str] = {
    "http://schemas.openxmlformats.org/drawingml/2006/main": "a",
    "http://schemas.openxmlformats.org/presentationml/2006/main": "p",
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships": "r",
    "http://schemas.openxmlformats.org/drawingml/2006/chart": "c",
    "http://schemas.openxmlformats.org/drawingml/2006/picture": "pic",
    "http://schemas.openxmlformats.org/drawingml/2006/diagram": "dgm",
    "http://schemas.openxmlformats.org/markup-compatibility/2006": "mc",
    "http://schemas.microsoft.com/office/drawing/2010/main": "a14",
    "http://schemas.microsoft.com/office/powerpoint/2010/main": "p14",
    "http://schemas.microsoft.com/office/drawing/2007/8/2/chart": "c14",
    "http://schemas.microsoft.com/office/drawing/2015/06/chart": "c16r2",
    "http://schemas.openxmlformats.org/package/2006/relationships": "",
    XML_NAMESPACE: "xml",
}

_PREFIX_NAMESPACES: dict[str, str] = {prefix: uri for uri, prefix in KNOWN_NAMESPACES.items() if prefix}

_DECLARATION = re.compile(rb"^\s*(<\?xml[^>]*\?>)")


def _canonical(name: str, element: etree._Element) -> str:
    """Map a Clark name (``{uri}local``) to its canonical prefixed form."""
    if not name.startswith("{"):
        return name
    uri, _, local = name[1:].partition("}")
    prefix = KNOWN_NAMESPACES.get(uri)
    if prefix is None:
        prefix = next((p for p, u in element.nsmap.items() if u == uri and p), "")
    return f"{prefix}:{local}" if prefix else local


def _clark(name: str, element: etree._Element | None = None) -> str:
    """Map a canonical prefixed name back to a Clark name.

    Prefixes outside the known table are looked up in the element's in-scope
    declarations; an unknown prefix is returned unchanged and never matches.
    """
    prefix, sep, local = name.rpartition(":")
    if not sep:
        return name
    uri = _PREFIX_NAMESPACES.get(prefix)
    if uri is None and element is not None:
        uri = element.nsmap.get(prefix)
    return f"{{{uri}}}{local}" if uri else name


def _is_element(node: etree._Element) -> bool:
    # Comments and processing instructions have a callable tag
    return isinstance(node.tag, str)


class _Attributes(MutableMapping):
    """Attribute view keyed by canonical names, writing through to lxml."""

    def __init__(self, element: etree._Element) -> None:
        self._element = element

    def __getitem__(self, key: str) -> str:
        value = self._element.get(_clark(key, self._element))
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str) -> None:
        self._element.set(_clark(key, self._element), value)

    def __delitem__(self, key: str) -> None:
        name = _clark(key, self._element)
        if name not in self._element.attrib:
            raise KeyError(key)
        del self._element.attrib[name]

    def __iter__(self) -> Iterator[str]:
        return iter([_canonical(name, self._element) for name in self._element.attrib])

    def __len__(self) -> int:
        return len(self._element.attrib)


class XmlNode:
    """A parsed XML element.

    Parameters
    ----------
    element : lxml.etree._Element
        The wrapped element. Edits made through the node write through to it.
    declaration : str, optional
        The source XML declaration, kept on the root returned by
        :func:`parse_xml` and written back by :meth:`to_xml`.

    """

    __slots__ = ("element", "declaration")

    def __init__(self, element: etree._Element, declaration: str | None = None) -> None:
        self.element = element
        self.declaration = declaration

    def __eq__(self, other: object) -> bool:
        return isinstance(other, XmlNode) and other.element is self.element

    def __hash__(self) -> int:
        return id(self.element)

    def __repr__(self) -> str:
        return f"XmlNode({self.tag!r})"

    @property
    def tag(self) -> str:
        """Qualified element name using the canonical prefix, e.g. ``"c:ser"``."""
        return _canonical(self.element.tag, self.element)

    @property
    def local(self) -> str:
        """Element name without its prefix."""
        return etree.QName(self.element).localname

    @property
    def attrs(self) -> _Attributes:
        """Attributes keyed by canonical name (``"val"``, ``"r:embed"``)."""
        return _Attributes(self.element)

    @property
    def children(self) -> list[XmlNode]:
        """Child elements in document order, without comments or PIs."""
        return [XmlNode(child) for child in self.element if _is_element(child)]

    @property
    def text(self) -> str | None:
        return self.element.text

    @property
    def tail(self) -> str | None:
        return self.element.tail

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.element.get(_clark(name, self.element), default)

    def first(self, name: str) -> XmlNode | None:
        """Return the first child named ``name``, or None."""
        for child in self.element:
            if _is_element(child) and _canonical(child.tag, child) == name:
                return XmlNode(child)
        return None

    def all(self, name: str) -> list[XmlNode]:
        """Return every child named ``name`` in document order."""
        return [
            XmlNode(child) for child in self.element if _is_element(child) and _canonical(child.tag, child) == name
        ]

    def find(self, path: str) -> XmlNode | None:
        """Follow a ``/``-separated path of first children.

        Parameters
        ----------
        path : str
            Child names separated by ``/``, e.g. ``"p:spPr/a:xfrm/a:off"``.
            An empty path returns the node itself.

        Returns
        -------
        XmlNode or None
            The node at the end of the path, or None when any step is missing.

        """
        node: XmlNode | None = self
        for step in _split_path(path):
            if node is None:
                return None
            node = node.first(step)
        return node

    def find_all(self, path: str) -> list[XmlNode]:
        """Return all children matching the last step of ``path``."""
        steps = _split_path(path)
        if not steps:
            return [self]
        parent = self.find("/".join(steps[:-1]))
        return parent.all(steps[-1]) if parent is not None else []

    def iter(self, name: str | None = None) -> Iterator[XmlNode]:
        """Depth-first iteration over this node and its descendants."""
        for descendant in self.element.iter():
            if _is_element(descendant) and (name is None or _canonical(descendant.tag, descendant) == name):
                yield XmlNode(descendant)

    def text_content(self) -> str:
        """Concatenated text of this node and all descendants, without tails."""
        parts = [self.text or ""]
        for child in self.children:
            parts.append(child.text_content())
        return "".join(parts)

    def index(self, child: XmlNode) -> int:
        for i, candidate in enumerate(self.children):
            if candidate == child:
                return i
        raise ValueError(f"{child.tag} is not a child of {self.tag}")

    def append(self, node: XmlNode) -> None:
        self.element.append(node.element)

    def insert(self, index: int, node: XmlNode) -> None:
        """Insert ``node`` before the element child at ``index``."""
        children = self.children
        if index >= len(children):
            self.element.append(node.element)
        else:
            self.element.insert(self.element.index(children[index].element), node.element)

    def insert_after(self, anchor: XmlNode, node: XmlNode) -> None:
        """Insert ``node`` directly after ``anchor``, copying its tail."""
        self.index(anchor)
        position = self.element.index(anchor.element)
        node.element.tail = anchor.element.tail
        self.element.insert(position + 1, node.element)

    def replace_children(self, *nodes: XmlNode) -> None:
        """Drop every child (comments included) and append ``nodes``."""
        for child in list(self.element):
            self.element.remove(child)
        for node in nodes:
            self.element.append(node.element)

    def to_xml(self) -> str:
        """Serialize the tree back to XML text.

        Returns
        -------
        str
            The serialized document with its own namespace prefixes, including
            the original XML declaration when the source had one.

        """
        if self.element.getparent() is None:
            body = etree.tostring(self.element.getroottree(), encoding="unicode")
        else:
            body = etree.tostring(self.element, encoding="unicode", with_tail=False)
        return f"{self.declaration}\n{body}" if self.declaration else body


def _split_path(path: str) -> list[str]:
    return [step for step in path.split("/") if step]


def attr(node: XmlNode | None, path: str, name: str, default: str | None = None) -> str | None:
    """Read attribute ``name`` from ``node.find(path)``.

    Missing nodes at any step yield ``default`` instead of raising.
    """
    if node is None:
        return default
    target = node.find(path)
    if target is None:
        return default
    return target.get(name, default)


def element(tag: str, attrs: dict[str, str] | None = None, *children: XmlNode) -> XmlNode:
    """Build a new detached node, for tree edits.

    ``children`` are deep-copied, so nodes taken from another tree (a theme
    line style, say) are never moved out of it.
    """
    prefix, sep, _ = tag.rpartition(":")
    nsmap = {prefix: _PREFIX_NAMESPACES[prefix]} if sep and prefix in _PREFIX_NAMESPACES else None
    node = XmlNode(etree.Element(_clark(tag), nsmap=nsmap))
    for key, value in (attrs or {}).items():
        node.attrs[key] = value
    for child in children:
        node.element.append(copy.deepcopy(child.element))
    return node


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


def parse_xml(source: str | bytes) -> XmlNode:
    """Parse XML text into an order-preserving :class:`XmlNode` tree.

    Parameters
    ----------
    source : str or bytes
        The XML document.

    Returns
    -------
    XmlNode
        The root element.

    Raises
    ------
    MalformedFileError
        If the text is not well-formed XML or declares entities. Entities are
        never expanded and external resources are never fetched.

    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    if isinstance(source, str) and data.lstrip().startswith(b"<?xml"):
        # The declared encoding no longer applies once text has been re-encoded
        data = re.sub(rb'encoding="[^"]*"', b'encoding="UTF-8"', data, count=1)

    try:
        root = etree.fromstring(data, parser=_parser())
    except etree.XMLSyntaxError as exc:
        raise MalformedFileError(f"Malformed XML: {exc}", original_error=exc) from exc

    dtd = root.getroottree().docinfo.internalDTD
    if dtd is not None and any(True for _ in dtd.iterentities()):
        raise MalformedFileError("XML entity declarations are not allowed")

    match = _DECLARATION.match(data)
    return XmlNode(root, declaration=match.group(1).decode("utf-8") if match else None)
