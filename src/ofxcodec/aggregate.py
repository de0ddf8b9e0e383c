"""Declarative codec for fixed-shape OFX aggregates.

Records are slotted dataclasses whose fields are declared with
:func:`element`. A field path such as ``'STMTRQ>INCTRAN>INCLUDE'`` names the
intermediate wrapper elements and the element holding the value; consecutive
fields sharing a wrapper are written inside a single wrapper element.
Decoding walks the token stream and skips child elements the record does not
declare.
"""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Self
from xml.sax.saxutils import escape

from ofxcodec.errors import ScalarFormatError, StructuralParseError, ValidityError
from ofxcodec.tokens import EndElement, StartElement, TokenReader, describe
from ofxcodec.types import UID

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from ofxcodec.constants import MessageType, OfxVersion

INDENT = '    '


def element(path: str, kind: Any, *, many: bool = False, optional: bool = False, default: Any = None) -> Any:
    """Declare a dataclass field stored at ``path`` and coded by ``kind``.

    ``kind`` is a scalar codec (anything with ``from_text``/``to_text``) or an
    :class:`Aggregate` subclass. ``many`` fields collect every occurrence into
    a list. ``optional`` fields are left out of the output when ``None`` or
    empty; a required field that is ``None`` cannot be encoded.
    """

    metadata = {'ofx': (tuple(path.split('>')), kind, many, optional)}
    if many:
        return field(default_factory=list, metadata=metadata)
    return field(default=default, metadata=metadata)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    path: tuple[str, ...]
    kind: Any
    many: bool
    optional: bool

    @property
    def tag(self) -> str:
        return self.path[-1]

    @property
    def is_aggregate(self) -> bool:
        return isinstance(self.kind, type) and issubclass(self.kind, Aggregate)


@dataclass(frozen=True, slots=True)
class Layout:
    fields: tuple[FieldSpec, ...]
    tree: Mapping[str, Any]


@functools.cache
def layout(cls: type[Aggregate]) -> Layout:
    """Return the field specs of ``cls`` and the element tree used for decoding."""

    specs: list[FieldSpec] = []
    tree: dict[str, Any] = {}
    for item in dataclasses.fields(cls):  # type: ignore[arg-type]
        meta = item.metadata.get('ofx')
        if meta is None:
            continue
        spec = FieldSpec(item.name, *meta)
        specs.append(spec)
        node = tree
        for group in spec.path[:-1]:
            node = node.setdefault(group, {})
            if not isinstance(node, dict):
                raise TypeError(f'{cls.__name__}: {group} is both a value and a wrapper')
        if spec.tag in node:
            raise TypeError(f'{cls.__name__}: element {spec.tag} declared twice')
        node[spec.tag] = spec
    return Layout(tuple(specs), tree)


def _subclasses(cls: type) -> Iterator[type]:
    for sub in cls.__subclasses__():
        yield sub
        yield from _subclasses(sub)


@functools.cache
def leaf_elements() -> frozenset[str]:
    """Element names that only ever hold text, used to close unclosed SGML leaves."""

    leaves: set[str] = set()
    wrappers: set[str] = set()
    for cls in _subclasses(Aggregate):
        if not dataclasses.is_dataclass(cls):
            continue
        for spec in layout(cls).fields:
            wrappers.update(spec.path[:-1])
            (wrappers if spec.is_aggregate else leaves).add(spec.tag)
        wrappers.update(getattr(cls, 'VARIANTS', {}))
    return frozenset(leaves - wrappers)


class Encoder:
    """Accumulate OFX markup for one document.

    SGML output leaves leaf elements unclosed. ``indent=None`` produces
    compact output with no line breaks.
    """

    def __init__(self, *, sgml: bool = False, indent: str | None = INDENT, newline: str = '\n') -> None:
        self.sgml = sgml
        self.indent = indent
        self.newline = newline
        self._parts: list[str] = []
        self._depth = 0

    def _line(self, markup: str) -> None:
        if self.indent is None:
            self._parts.append(markup)
        else:
            self._parts.append(f'{self.indent * self._depth}{markup}{self.newline}')

    def raw(self, text: str) -> None:
        self._parts.append(text)

    def start(self, name: str) -> None:
        self._line(f'<{name}>')
        self._depth += 1

    def end(self, name: str) -> None:
        self._depth -= 1
        self._line(f'</{name}>')

    def leaf(self, name: str, text: str) -> None:
        if self.sgml:
            self._line(f'<{name}>{escape(text)}')
        else:
            self._line(f'<{name}>{escape(text)}</{name}>')

    def getvalue(self) -> str:
        return ''.join(self._parts)


def decode_leaf(reader: TokenReader, start: StartElement, codec: Any) -> Any:
    """Read the text of ``start`` and decode it, reporting bad text as a parse error."""

    text = reader.read_text(start)
    try:
        return codec.from_text(text)
    except ScalarFormatError as exc:
        raise StructuralParseError(f'<{start.name}>: {exc}') from exc


def child_elements(reader: TokenReader, start: StartElement) -> Iterator[StartElement]:
    """Yield each child start tag of ``start``; the caller must consume the child."""

    while True:
        token = reader.next_significant()
        if isinstance(token, StartElement):
            yield token
        elif isinstance(token, EndElement) and token.name == start.name:
            return
        else:
            raise StructuralParseError(f'unexpected {describe(token)} inside <{start.name}>')


def _decode_children(reader: TokenReader, start: StartElement, tree: Mapping[str, Any], values: dict[str, Any]) -> None:
    while True:
        token = reader.next_significant()
        if isinstance(token, EndElement):
            if token.name != start.name:
                raise StructuralParseError(f'unexpected </{token.name}> inside <{start.name}>')
            return
        if not isinstance(token, StartElement):
            continue
        target = tree.get(token.name)
        if target is None:
            reader.skip_element(token)
        elif isinstance(target, dict):
            _decode_children(reader, token, target, values)
        else:
            if target.is_aggregate:
                value = target.kind.from_element(reader, token)
            else:
                value = decode_leaf(reader, token, target.kind)
            if target.many:
                values.setdefault(target.name, []).append(value)
            else:
                values[target.name] = value


def _is_absent(value: Any, spec: FieldSpec) -> bool:
    if spec.many:
        return not value
    return value is None or (spec.optional and isinstance(value, str) and value == '')


class Aggregate:
    """Base class for records made of nested elements."""

    __slots__ = ()

    @classmethod
    def from_element(cls, reader: TokenReader, start: StartElement) -> Self:
        """Decode the element opened by ``start`` into a new instance."""

        values: dict[str, Any] = {}
        _decode_children(reader, start, layout(cls).tree, values)
        return cls(**values)

    def write_element(self, encoder: Encoder, name: str) -> None:
        encoder.start(name)
        self.write_fields(encoder)
        encoder.end(name)

    def write_fields(self, encoder: Encoder) -> None:
        open_groups: list[str] = []
        for spec in layout(type(self)).fields:
            value = getattr(self, spec.name)
            if _is_absent(value, spec):
                if spec.optional or spec.many:
                    continue
                raise ValidityError(f'{type(self).__name__}.{spec.name} is required')
            groups = spec.path[:-1]
            shared = 0
            while shared < min(len(groups), len(open_groups)) and groups[shared] == open_groups[shared]:
                shared += 1
            while len(open_groups) > shared:
                encoder.end(open_groups.pop())
            for group in groups[shared:]:
                encoder.start(group)
                open_groups.append(group)
            for item in value if spec.many else (value,):
                if spec.is_aggregate:
                    item.write_element(encoder, spec.tag)
                else:
                    encoder.leaf(spec.tag, spec.kind.to_text(item))
        while open_groups:
            encoder.end(open_groups.pop())


class Variant(Aggregate):
    """Aggregate that names its own element, used as a child of a variant list."""

    __slots__ = ()
    ELEMENT: ClassVar[str]

    def write(self, encoder: Encoder) -> None:
        self.write_element(encoder, self.ELEMENT)


def decode_variant(reader: TokenReader, start: StartElement, variants: Mapping[str, type[Variant]], container: str) -> Variant:
    variant = variants.get(start.name)
    if variant is None:
        raise StructuralParseError(f'invalid {container} child <{start.name}>')
    return variant.from_element(reader, start)


def write_variant(encoder: Encoder, item: Variant, variants: Mapping[str, type[Variant]], container: str) -> None:
    if variants.get(getattr(item, 'ELEMENT', '')) is not type(item):
        raise ValidityError(f'invalid {container} child type {type(item).__name__}')
    item.write(encoder)


class Message(Variant):
    """A transaction wrapper that lives directly inside a message set."""

    __slots__ = ()
    MESSAGE_TYPE: ClassVar[MessageType]

    def element_name(self) -> str:
        return self.ELEMENT

    def message_type(self) -> MessageType:
        return self.MESSAGE_TYPE

    def validate(self, version: OfxVersion) -> None:
        """Raise ``ValidityError`` if the message is not valid for ``version``."""

        trnuid = getattr(self, 'trnuid', None)
        if trnuid is None:
            raise ValidityError(f'{self.ELEMENT} is missing its TRNUID')
        UID(trnuid).validate()
        if hasattr(self, 'status'):
            if self.status is None:
                raise ValidityError(f'{self.ELEMENT} is missing its STATUS')
            self.status.validate()
