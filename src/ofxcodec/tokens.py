"""Structural tokens shared by the SGML and XML wire syntaxes.

``TokenReader`` turns document text into a balanced stream of start, end,
text and processing-instruction tokens. In strict mode (XML) every start tag
must be closed by a matching end tag. In lenient mode (SGML) closing tags are
optional: an element that received text, or that is a known leaf, is closed
as soon as other markup follows it, and an end tag for an outer element closes
everything opened inside it.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ofxcodec.errors import StructuralParseError

_NAME_RE = re.compile(r'[A-Za-z_][A-Za-z0-9_.:-]*')


@dataclass(frozen=True, slots=True)
class StartElement:
    name: str


@dataclass(frozen=True, slots=True)
class EndElement:
    name: str


@dataclass(frozen=True, slots=True)
class CharData:
    text: str

    def is_whitespace(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True, slots=True)
class ProcInst:
    target: str
    content: str


Token = StartElement | EndElement | CharData | ProcInst


def _find(text: str, marker: str, start: int) -> int:
    index = text.find(marker, start)
    if index == -1:
        raise StructuralParseError(f'unterminated markup starting at offset {start}')
    return index


def _element_name(body: str, markup: str) -> str:
    name = body.split(None, 1)[0] if body else ''
    if not _NAME_RE.fullmatch(name):
        raise StructuralParseError(f'invalid element name in {markup!r}')
    return name


def scan(text: str) -> Iterator[Token]:
    """Yield raw tokens from ``text`` without checking how elements nest."""

    pos = 0
    length = len(text)
    while pos < length:
        if text[pos] != '<':
            end = text.find('<', pos)
            if end == -1:
                end = length
            yield CharData(html.unescape(text[pos:end]))
            pos = end
        elif text.startswith('<?', pos):
            end = _find(text, '?>', pos)
            parts = text[pos + 2 : end].split(None, 1)
            if not parts:
                raise StructuralParseError(f'empty processing instruction at offset {pos}')
            yield ProcInst(parts[0], parts[1].strip() if len(parts) > 1 else '')
            pos = end + 2
        elif text.startswith('<!--', pos):
            pos = _find(text, '-->', pos) + 3
        elif text.startswith('<![CDATA[', pos):
            end = _find(text, ']]>', pos)
            yield CharData(text[pos + 9 : end])
            pos = end + 3
        elif text.startswith('<!', pos):
            pos = _find(text, '>', pos) + 1
        else:
            end = _find(text, '>', pos)
            markup = text[pos : end + 1]
            body = text[pos + 1 : end].strip()
            pos = end + 1
            if body.startswith('/'):
                yield EndElement(_element_name(body[1:].strip(), markup))
                continue
            self_closing = body.endswith('/')
            name = _element_name(body.rstrip('/'), markup)
            yield StartElement(name)
            if self_closing:
                yield EndElement(name)


class TokenReader:
    """Pull balanced structural tokens from document text."""

    def __init__(self, text: str, *, strict: bool = True, leaf_elements: Iterable[str] = ()) -> None:
        self.strict = strict
        self._leaves = frozenset(leaf_elements)
        self._stack: list[str] = []
        self._top_has_text = False
        self._tokens = self._balance(scan(text))

    def _close_top(self) -> EndElement:
        self._top_has_text = False
        return EndElement(self._stack.pop())

    def _balance(self, raw: Iterator[Token]) -> Iterator[Token]:
        for token in raw:
            if isinstance(token, CharData):
                if self._stack and not token.is_whitespace():
                    self._top_has_text = True
                yield token
            elif isinstance(token, StartElement):
                if not self.strict and self._stack and (self._top_has_text or self._stack[-1] in self._leaves):
                    yield self._close_top()
                self._stack.append(token.name)
                self._top_has_text = False
                yield token
            elif isinstance(token, EndElement):
                yield from self._end(token)
            else:
                yield token

    def _end(self, token: EndElement) -> Iterator[Token]:
        if self._stack and self._stack[-1] == token.name:
            yield self._close_top()
            return
        if self.strict:
            expected = self._stack[-1] if self._stack else None
            raise StructuralParseError(f'unexpected </{token.name}>, expected </{expected}>')
        if token.name not in self._stack:
            return
        while self._stack[-1] != token.name:
            yield self._close_top()
        yield self._close_top()

    def next_token(self) -> Token:
        """Return the next token, raising ``StructuralParseError`` at end of input."""

        try:
            return next(self._tokens)
        except StopIteration:
            open_elements = '>'.join(self._stack)
            raise StructuralParseError(f'unexpected end of document inside {open_elements or "document"}') from None

    def next_significant(self) -> Token:
        """Return the next token that is not whitespace-only text."""

        while True:
            token = self.next_token()
            if isinstance(token, CharData) and token.is_whitespace():
                continue
            return token

    def expect_start(self, name: str) -> StartElement:
        token = self.next_significant()
        if not isinstance(token, StartElement) or token.name != name:
            raise StructuralParseError(f'expected <{name}>, found {describe(token)}')
        return token

    def expect_end(self, name: str) -> EndElement:
        token = self.next_significant()
        if not isinstance(token, EndElement) or token.name != name:
            raise StructuralParseError(f'expected </{name}>, found {describe(token)}')
        return token

    def read_text(self, start: StartElement) -> str:
        """Return the text content of the leaf element opened by ``start``."""

        parts: list[str] = []
        while True:
            token = self.next_token()
            if isinstance(token, CharData):
                parts.append(token.text)
            elif isinstance(token, EndElement):
                return ''.join(parts)
            elif isinstance(token, StartElement):
                raise StructuralParseError(f'unexpected <{token.name}> inside <{start.name}>')

    def skip_element(self, start: StartElement) -> None:
        """Consume tokens up to and including the end tag matching ``start``."""

        depth = 1
        while depth:
            token = self.next_token()
            if isinstance(token, StartElement):
                depth += 1
            elif isinstance(token, EndElement):
                depth -= 1


def describe(token: Token) -> str:
    """Return a short human readable rendering of ``token`` for error messages."""

    if isinstance(token, StartElement):
        return f'<{token.name}>'
    if isinstance(token, EndElement):
        return f'</{token.name}>'
    if isinstance(token, CharData):
        return f'text {token.text.strip()[:20]!r}'
    return f'<?{token.target}?>'
