"""Namespace-aware accessors over an ElementTree document.

Core ODM elements are matched by local name regardless of namespace, while
Define-XML extension elements and attributes are matched against the ``def``
namespace URI declared on the document root.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias
from xml.etree.ElementTree import Element


if TYPE_CHECKING:
    XmlElement: TypeAlias = Element[str]
else:
    XmlElement: TypeAlias = Element


def tag(namespace: str, name: str) -> str:
    return f"{{{namespace}}}{name}"


def attr(namespace: str, name: str) -> str:
    return f"{{{namespace}}}{name}"


def local_name(element_tag: object) -> str:
    if not isinstance(element_tag, str):
        return ""
    return element_tag.rsplit("}", 1)[-1]


def iter_local(element: XmlElement, name: str) -> Iterator[XmlElement]:
    """Descendants of ``element`` with the given local name, in document order."""
    for node in element.iter():
        if node is not element and local_name(node.tag) == name:
            yield node


def iter_ns(element: XmlElement, namespace: str, name: str) -> Iterator[XmlElement]:
    for node in element.iter(tag(namespace, name)):
        if node is not element:
            yield node


def children_local(element: XmlElement, name: str) -> list[XmlElement]:
    return [child for child in element if local_name(child.tag) == name]


def find_local(element: XmlElement | None, name: str) -> XmlElement | None:
    if element is None:
        return None
    return next(iter_local(element, name), None)


def find_path(element: XmlElement | None, *names: str) -> XmlElement | None:
    """First match of a descendant chain, like the CSS selector ``A B C``."""
    if element is None or not names:
        return element
    head, *rest = names
    for candidate in iter_local(element, head):
        found = find_path(candidate, *rest)
        if found is not None:
            return found
    return None


def text_content(element: XmlElement | None) -> str | None:
    if element is None:
        return None
    return "".join(element.itertext())


def path_text(element: XmlElement | None, *names: str) -> str | None:
    """Text of ``find_path``; empty text collapses to ``None``."""
    return text_content(find_path(element, *names)) or None


def get_attr(element: XmlElement | None, name: str) -> str | None:
    if element is None:
        return None
    return element.get(name)


def ns_attr(element: XmlElement | None, namespace: str, name: str) -> str | None:
    if element is None:
        return None
    return element.get(attr(namespace, name))


@dataclass(frozen=True, slots=True)
class DefineNamespaces:
    define: str
    arm: str
    xlink: str
    xml: str

    def def_attr(self, element: XmlElement | None, name: str) -> str | None:
        """Resolve a Define-XML extension attribute to one canonical value.

        ``def:Name`` wins; an unqualified ``Name`` is accepted for documents
        that drop the prefix.
        """
        if element is None:
            return None
        value = element.get(attr(self.define, name))
        if value is None:
            value = element.get(name)
        return value

    def iter_def(self, element: XmlElement, name: str) -> Iterator[XmlElement]:
        return iter_ns(element, self.define, name)

    def find_def(self, element: XmlElement | None, name: str) -> XmlElement | None:
        if element is None:
            return None
        return next(self.iter_def(element, name), None)

    def is_def(self, element: XmlElement, name: str) -> bool:
        return element.tag == tag(self.define, name)
