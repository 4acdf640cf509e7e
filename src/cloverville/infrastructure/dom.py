"""In-memory HTML document model.

A small element tree built with the stdlib :class:`html.parser.HTMLParser`
and serialized back with markupsafe escaping.  It carries the subset of
the browser DOM the page scripts rely on: lookup by id and by simple
selectors, class lists, inline styles, inner HTML/text assignment, and
click listeners.
"""

from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from html.parser import HTMLParser

from markupsafe import escape

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
        "source",
        "track",
        "wbr",
    }
)

# Children of these elements are serialized verbatim.
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# Start tags that close an open <p>.
_CLOSES_P = frozenset(
    """
    address article aside blockquote dd details div dl dt fieldset figcaption
    figure footer form h1 h2 h3 h4 h5 h6 header hgroup hr li main menu nav ol
    p pre section table ul
    """.split()
)
_P = frozenset({"p"})
_SCOPE = frozenset({"button", "caption", "html", "table", "td", "th", "template"})

# Optional end tags: start tag -> (open tags it closes, tags that stop the search).
_IMPLIED_END: dict[str, tuple[frozenset[str], frozenset[str]]] = {
    "li": (frozenset({"li"}), frozenset({"ul", "ol", "menu"}) | _SCOPE),
    "dt": (frozenset({"dt", "dd"}), frozenset({"dl"}) | _SCOPE),
    "dd": (frozenset({"dt", "dd"}), frozenset({"dl"}) | _SCOPE),
    "option": (frozenset({"option"}), frozenset({"select", "datalist", "optgroup"})),
    "optgroup": (frozenset({"option", "optgroup"}), frozenset({"select"})),
    "tr": (frozenset({"tr"}), frozenset({"table", "thead", "tbody", "tfoot"})),
    "td": (frozenset({"td", "th"}), frozenset({"tr", "table"})),
    "th": (frozenset({"td", "th"}), frozenset({"tr", "table"})),
    "thead": (frozenset({"thead", "tbody", "tfoot"}), frozenset({"table"})),
    "tbody": (frozenset({"thead", "tbody", "tfoot"}), frozenset({"table"})),
    "tfoot": (frozenset({"thead", "tbody", "tfoot"}), frozenset({"table"})),
}

_COMPOUND_RE = re.compile(r"^(?P<tag>[A-Za-z][A-Za-z0-9-]*|\*)?(?P<rest>(?:[#.][A-Za-z0-9_-]+)*)$")
_PART_RE = re.compile(r"([#.])([A-Za-z0-9_-]+)")


# ── Nodes ─────────────────────────────────────────────────────────────


class Node:
    """Base class for everything that lives in the tree."""

    parent: Element | None = None

    def to_html(self) -> str:
        raise NotImplementedError


class Text(Node):
    """A run of character data (stored unescaped)."""

    def __init__(self, data: str) -> None:
        self.data = data

    def to_html(self) -> str:
        if self.parent is not None and self.parent.tag in RAW_TEXT_ELEMENTS:
            return self.data
        return str(escape(self.data))


class Comment(Node):
    def __init__(self, data: str) -> None:
        self.data = data

    def to_html(self) -> str:
        return f"<!--{self.data}-->"


class Doctype(Node):
    def __init__(self, declaration: str) -> None:
        self.declaration = declaration

    def to_html(self) -> str:
        return f"<!{self.declaration}>"


@dataclass(frozen=True)
class Event:
    """A dispatched event; listeners receive it as their only argument."""

    type: str
    target: Element


Listener = Callable[[Event], None]


class ClassList:
    """Live view over an element's ``class`` attribute."""

    def __init__(self, element: Element) -> None:
        self._element = element

    def _tokens(self) -> list[str]:
        return (self._element.attrs.get("class") or "").split()

    def _store(self, tokens: list[str]) -> None:
        if tokens:
            self._element.attrs["class"] = " ".join(tokens)
        else:
            self._element.attrs.pop("class", None)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens()

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens())

    def __len__(self) -> int:
        return len(self._tokens())

    def contains(self, token: str) -> bool:
        return token in self._tokens()

    def add(self, token: str) -> None:
        tokens = self._tokens()
        if token not in tokens:
            self._store([*tokens, token])

    def remove(self, token: str) -> None:
        self._store([t for t in self._tokens() if t != token])

    def toggle(self, token: str) -> bool:
        """Flip *token*; return True when it is present afterwards."""
        if token in self._tokens():
            self.remove(token)
            return False
        self.add(token)
        return True


class Style:
    """Live view over an element's inline ``style`` declarations."""

    def __init__(self, element: Element) -> None:
        self._element = element

    def _declarations(self) -> dict[str, str]:
        declarations: dict[str, str] = {}
        for chunk in (self._element.attrs.get("style") or "").split(";"):
            prop, sep, value = chunk.partition(":")
            if sep and prop.strip():
                declarations[prop.strip().lower()] = value.strip()
        return declarations

    def _store(self, declarations: dict[str, str]) -> None:
        if declarations:
            self._element.attrs["style"] = "; ".join(f"{k}: {v}" for k, v in declarations.items())
        else:
            self._element.attrs.pop("style", None)

    def __getitem__(self, prop: str) -> str:
        return self._declarations()[prop.lower()]

    def __setitem__(self, prop: str, value: str) -> None:
        declarations = self._declarations()
        declarations[prop.lower()] = value
        self._store(declarations)

    def __delitem__(self, prop: str) -> None:
        declarations = self._declarations()
        del declarations[prop.lower()]
        self._store(declarations)

    def __contains__(self, prop: object) -> bool:
        return isinstance(prop, str) and prop.lower() in self._declarations()

    def get(self, prop: str, default: str | None = None) -> str | None:
        return self._declarations().get(prop.lower(), default)


# ── Elements ──────────────────────────────────────────────────────────


class Element(Node):
    """An HTML element with attributes, children, and event listeners."""

    def __init__(self, tag: str, attrs: dict[str, str | None] | None = None) -> None:
        self.tag = tag
        self.attrs: dict[str, str | None] = dict(attrs or {})
        self.children: list[Node] = []
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident}>"

    # --- attributes ---

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    def get_attribute(self, name: str) -> str | None:
        return self.attrs.get(name)

    def set_attribute(self, name: str, value: str | None) -> None:
        self.attrs[name] = value

    @property
    def class_list(self) -> ClassList:
        return ClassList(self)

    @property
    def style(self) -> Style:
        return Style(self)

    # --- tree ---

    def append_child(self, node: Node) -> Node:
        node.parent = self
        self.children.append(node)
        return node

    def replace_children(self, nodes: list[Node]) -> None:
        for old in self.children:
            old.parent = None
        self.children = []
        for node in nodes:
            self.append_child(node)

    def iter_elements(self) -> Iterator[Element]:
        """Yield descendant elements in document order."""
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter_elements()

    def query_selector_all(self, selectors: str) -> list[Element]:
        matchers = _compile_selectors(selectors)
        return [el for el in self.iter_elements() if any(m(el) for m in matchers)]

    def query_selector(self, selectors: str) -> Element | None:
        matchers = _compile_selectors(selectors)
        return next((el for el in self.iter_elements() if any(m(el) for m in matchers)), None)

    # --- content ---

    @property
    def inner_html(self) -> str:
        return "".join(child.to_html() for child in self.children)

    @inner_html.setter
    def inner_html(self, markup: str) -> None:
        self.replace_children(parse_fragment(markup))

    @property
    def inner_text(self) -> str:
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.data)
            elif isinstance(child, Element):
                parts.append(child.inner_text)
        return "".join(parts)

    @inner_text.setter
    def inner_text(self, value: str) -> None:
        self.replace_children([Text(value)] if value else [])

    # --- events ---

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def dispatch_event(self, event: Event) -> None:
        for listener in list(self._listeners.get(event.type, ())):
            listener(event)

    def click(self) -> None:
        self.dispatch_event(Event("click", self))

    # --- serialization ---

    def to_html(self) -> str:
        attrs = "".join(
            f" {name}" if value is None else f' {name}="{escape(value)}"'
            for name, value in self.attrs.items()
        )
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html}</{self.tag}>"


class Document(Element):
    """Root of a parsed page."""

    def __init__(self) -> None:
        super().__init__("#document")

    @classmethod
    def from_html(cls, markup: str) -> Document:
        document = cls()
        _TreeBuilder(document).feed_all(markup)
        return document

    def get_element_by_id(self, element_id: str) -> Element | None:
        return next((el for el in self.iter_elements() if el.id == element_id), None)

    def to_html(self) -> str:
        return self.inner_html


def parse_fragment(markup: str) -> list[Node]:
    """Parse *markup* into a list of detached top-level nodes."""
    holder = Element("#fragment")
    _TreeBuilder(holder).feed_all(markup)
    nodes = list(holder.children)
    for node in nodes:
        node.parent = None
    return nodes


# ── Parsing ───────────────────────────────────────────────────────────


class _TreeBuilder(HTMLParser):
    """Feed-driven builder that appends parsed nodes under *root*."""

    def __init__(self, root: Element) -> None:
        super().__init__(convert_charrefs=True)
        self._stack: list[Element] = [root]

    def feed_all(self, markup: str) -> None:
        self.feed(markup)
        self.close()

    def _close_open(self, closes: frozenset[str], boundary: frozenset[str]) -> None:
        """Pop up to and including the nearest open element in *closes*."""
        for index in range(len(self._stack) - 1, 0, -1):
            tag = self._stack[index].tag
            if tag in closes:
                del self._stack[index:]
                return
            if tag in boundary:
                return

    def _imply_end_tags(self, tag: str) -> None:
        if tag in _CLOSES_P:
            self._close_open(_P, _SCOPE)
        if tag in _IMPLIED_END:
            self._close_open(*_IMPLIED_END[tag])

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._imply_end_tags(tag)
        element = Element(tag, dict(attrs))
        self._stack[-1].append_child(element)
        if tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._imply_end_tags(tag)
        self._stack[-1].append_child(Element(tag, dict(attrs)))

    def handle_endtag(self, tag: str) -> None:
        # Close the nearest open element with this tag; stray end tags are dropped.
        for index in range(len(self._stack) - 1, 0, -1):
            if self._stack[index].tag == tag:
                del self._stack[index:]
                return

    def handle_data(self, data: str) -> None:
        self._stack[-1].append_child(Text(data))

    def handle_comment(self, data: str) -> None:
        self._stack[-1].append_child(Comment(data))

    def handle_decl(self, decl: str) -> None:
        self._stack[-1].append_child(Doctype(decl))


# ── Selectors ─────────────────────────────────────────────────────────


def _compile_selectors(selectors: str) -> list[Callable[[Element], bool]]:
    """Compile a comma-separated list of compound selectors.

    Supported: ``tag``, ``*``, ``#id``, ``.class`` and combinations such as
    ``div.card#first``.  Combinators are not supported.
    """
    matchers: list[Callable[[Element], bool]] = []
    for raw in selectors.split(","):
        selector = raw.strip()
        match = _COMPOUND_RE.match(selector)
        if not selector or match is None:
            msg = f"Unsupported selector: {raw.strip()!r}"
            raise ValueError(msg)
        tag = match.group("tag")
        ids: list[str] = []
        classes: list[str] = []
        for kind, name in _PART_RE.findall(match.group("rest")):
            (ids if kind == "#" else classes).append(name)
        matchers.append(_compound_matcher(tag, ids, classes))
    return matchers


def _compound_matcher(
    tag: str | None, ids: list[str], classes: list[str]
) -> Callable[[Element], bool]:
    wanted_tag = None if tag in (None, "*") else tag.lower()

    def matches(element: Element) -> bool:
        if wanted_tag is not None and element.tag != wanted_tag:
            return False
        if any(element.id != ident for ident in ids):
            return False
        tokens = element.class_list
        return all(tokens.contains(name) for name in classes)

    return matches
