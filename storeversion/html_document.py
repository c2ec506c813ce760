"""
Minimal HTML document tree.

Store pages only need lookups by class name and tag name plus text
content, so this builds a small tree on top of html.parser instead of
pulling in a full DOM.
"""

from collections.abc import Callable, Iterable
from html.parser import HTMLParser

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


class Element:
    def __init__(self, tag: str, attrs: dict[str, str] | None = None, parent=None):
        self.tag = tag
        self.attrs = attrs or {}
        self.parent = parent
        self.children: list["Element | str"] = []

    def __repr__(self) -> str:
        return f"<Element {self.tag} classes={sorted(self.classes)}>"

    @property
    def classes(self) -> set[str]:
        return set(self.attrs.get("class", "").split())

    def _iter_nodes(self):
        # Explicit stack: unclosed <p>/<li> runs can nest deeper than the
        # recursion limit.
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Element):
                stack.extend(reversed(node.children))

    @property
    def text(self) -> str:
        return "".join(node for node in self._iter_nodes() if isinstance(node, str))

    def iter_descendants(self):
        for node in self._iter_nodes():
            if isinstance(node, Element):
                yield node

    def find_by_class(self, name: str) -> list["Element"]:
        return [el for el in self.iter_descendants() if name in el.classes]

    def find_by_tag(self, name: str) -> list["Element"]:
        name = name.lower()
        return [el for el in self.iter_descendants() if el.tag == name]

    def query_class(self, name: str) -> "Element | None":
        return first_matching(lambda el: name in el.classes, self.iter_descendants())


def first_matching(
    predicate: Callable[[Element], bool], elements: Iterable[Element]
) -> Element | None:
    for element in elements:
        if predicate(element):
            return element
    return None


class _TreeBuilder(HTMLParser):
    def __init__(self):
        # Entities are unescaped in text; raw text elements stay verbatim.
        super().__init__(convert_charrefs=True)
        self.root = Element("#document")
        self._current = self.root

    def handle_starttag(self, tag, attrs):
        element = Element(
            tag, {k: v if v is not None else "" for k, v in attrs}, self._current
        )
        self._current.children.append(element)
        if tag not in VOID_ELEMENTS:
            self._current = element

    def handle_startendtag(self, tag, attrs):
        element = Element(
            tag, {k: v if v is not None else "" for k, v in attrs}, self._current
        )
        self._current.children.append(element)

    def handle_endtag(self, tag):
        # Close up to the nearest open element with this tag; stray end tags
        # are ignored.
        node = self._current
        while node is not self.root and node.tag != tag:
            node = node.parent
        if node is not self.root:
            self._current = node.parent

    def handle_data(self, data):
        self._current.children.append(data)


def parse_html(text: str) -> Element:
    builder = _TreeBuilder()
    builder.feed(text)
    builder.close()
    return builder.root
