from __future__ import annotations
"""
Minifier adapters and their suffix registry.

    minify_markup      – lxml: drop comments, collapse whitespace. Inputs that
                         start with an XML declaration or an <svg> root go
                         through the XML parser. Full documents keep their
                         doctype; partials that carry their own <head> or
                         <body> keep those elements and their attributes.
    minify_vector      – lxml XML parser only; SVG files never reach the HTML
                         parser.
    minify_script      – rjsmin.
    minify_stylesheet  – rcssmin.

Every adapter raises MinifyError; library exceptions are chained.

MinifierRegistry exposes the markup and vector minifiers and maps text-file
suffixes to minifiers:
    .js → script, .css → stylesheet, .html → markup, anything else → None.
"""

import re
from typing import Callable, Dict, FrozenSet, Optional

import lxml.html
import rcssmin
import rjsmin
from lxml import etree

from docinject.core.errors import MinifyError
from docinject.core.interfaces.render import MinifierProtocol, MinifierRegistryProtocol

_WS_RE = re.compile(r'\s+')
_XML_RE = re.compile(r'^\s*(?:<!--.*?-->\s*)*(?:<\?xml\b|<svg\b|<!doctype\s+svg\b)', re.I | re.S)
_DOCTYPE_RE = re.compile(r'^\s*<!doctype\b', re.I)
_DOCUMENT_TAG_RE = re.compile(r'<(html|head|body)\b', re.I)
_INTERNAL_SUBSET_RE = re.compile(r'<!doctype[^>\[]*\[', re.I)

_PRESERVE_TAGS: FrozenSet[str] = frozenset({'pre', 'textarea', 'script', 'style'})
_BLOCK_TAGS: FrozenSet[str] = frozenset({
    'html', 'head', 'body', 'title', 'meta', 'link', 'base', 'script', 'style', 'noscript',
    'address', 'article', 'aside', 'blockquote', 'details', 'dialog', 'dd', 'div', 'dl', 'dt',
    'fieldset', 'figcaption', 'figure', 'footer', 'form', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'header', 'hgroup', 'hr', 'li', 'main', 'nav', 'ol', 'p', 'pre', 'section', 'summary',
    'table', 'thead', 'tbody', 'tfoot', 'tr', 'td', 'th', 'caption', 'colgroup', 'col', 'ul',
    'option', 'optgroup', 'select', 'template', 'svg',
})

_WRAPPER = 'div'


def _local(tag) -> str:
    if not isinstance(tag, str):
        return ''
    return tag.rsplit('}', 1)[-1].lower()


def _squeeze(value: Optional[str], *, drop_blank: bool) -> Optional[str]:
    if value is None:
        return None
    if not value.strip():
        return None if drop_blank else ' '
    return _WS_RE.sub(' ', value)


def _is_block(el, block_tags: Optional[FrozenSet[str]]) -> bool:
    if el is None:
        return True
    return block_tags is None or _local(el.tag) in block_tags


def _is_preserved(el) -> bool:
    if _local(el.tag) in _PRESERVE_TAGS:
        return True
    return any(_local(a.tag) in _PRESERVE_TAGS for a in el.iterancestors())


def _collapse_tree(root, *, block_tags: Optional[FrozenSet[str]]) -> None:
    """Collapse whitespace runs in place.

    Whitespace-only text next to a block element (or any element when
    `block_tags` is None) is removed; elsewhere it shrinks to one space.
    """
    for el in root.iter():
        if not isinstance(el.tag, str):
            continue
        if not _is_preserved(el):
            children = list(el)
            first = children[0] if children else None
            drop = _is_block(el, block_tags) and (first is None or _is_block(first, block_tags))
            el.text = _squeeze(el.text, drop_blank=drop)
        parent = el.getparent()
        if el is root or parent is None or _is_preserved(parent):
            continue
        nxt = el.getnext()
        drop_tail = _is_block(el, block_tags) or _is_block(nxt, block_tags)
        el.tail = _squeeze(el.tail, drop_blank=drop_tail)


def _minify_xml(text: str) -> str:
    if _INTERNAL_SUBSET_RE.search(text):
        raise ValueError('internal DTD subsets are not rewritten')
    parser = etree.XMLParser(
        remove_comments=True,
        remove_blank_text=True,
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
    )
    root = etree.fromstring(text.strip().encode('utf-8'), parser)
    doctype = root.getroottree().docinfo.doctype
    _collapse_tree(root, block_tags=None)
    return (doctype or '') + etree.tostring(root, encoding='unicode')


def _drop_comments(root) -> None:
    for comment in list(root.iter(etree.Comment)):
        comment.drop_tree()


def _minify_document(text: str) -> str:
    doc = lxml.html.document_fromstring(text)
    doctype = doc.getroottree().docinfo.doctype
    _drop_comments(doc)
    _collapse_tree(doc, block_tags=_BLOCK_TAGS)
    return lxml.html.tostring(doc, encoding='unicode', doctype=doctype or None)


def _minify_sections(text: str, present: FrozenSet[str]) -> str:
    """Minify a partial holding <head> and/or <body> but no <html> root.

    Only the sections written in the source are emitted. Content the parser
    would move into a section the source never opened raises instead.
    """
    doc = lxml.html.document_fromstring(text)
    _drop_comments(doc)
    _collapse_tree(doc, block_tags=_BLOCK_TAGS)
    parts = []
    for section in doc:
        if not isinstance(section.tag, str):
            continue
        name = _local(section.tag)
        if name in present:
            parts.append(lxml.html.tostring(section, encoding='unicode', with_tail=False))
        elif len(section) or (section.text or '').strip():
            raise MinifyError('markup', f'content outside the partial\'s sections would move into <{name}>')
    return ''.join(parts)


def _minify_fragment(text: str) -> str:
    wrapper = lxml.html.fragment_fromstring(text, create_parent=_WRAPPER)
    _drop_comments(wrapper)
    _collapse_tree(wrapper, block_tags=_BLOCK_TAGS)
    rendered = lxml.html.tostring(wrapper, encoding='unicode', with_tail=False)
    inner = rendered[len(f'<{_WRAPPER}>'):-len(f'</{_WRAPPER}>')]
    return inner.strip()


def minify_markup(text: str) -> str:
    """Remove comments and collapse whitespace in HTML or SVG markup."""
    if not text.strip():
        return ''
    try:
        if _XML_RE.match(text):
            return _minify_xml(text)
        sections = frozenset(m.group(1).lower() for m in _DOCUMENT_TAG_RE.finditer(text))
        if 'html' in sections or _DOCTYPE_RE.match(text):
            return _minify_document(text)
        if sections:
            return _minify_sections(text, sections)
        return _minify_fragment(text)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError, TypeError) as exc:
        raise MinifyError('markup', str(exc)) from exc


def minify_vector(text: str) -> str:
    """Minify an SVG file with the XML parser; never reinterprets it as HTML."""
    if not text.strip():
        return ''
    try:
        return _minify_xml(text)
    except (etree.XMLSyntaxError, ValueError, TypeError) as exc:
        raise MinifyError('vector', str(exc)) from exc


def minify_script(text: str) -> str:
    try:
        return rjsmin.jsmin(text)
    except (TypeError, ValueError) as exc:
        raise MinifyError('script', str(exc)) from exc


def minify_stylesheet(text: str) -> str:
    try:
        return rcssmin.cssmin(text)
    except (TypeError, ValueError) as exc:
        raise MinifyError('stylesheet', str(exc)) from exc


class FunctionMinifier(MinifierProtocol):
    def __init__(self, fn: Callable[[str], str], *, kind: str) -> None:
        self._fn = fn
        self.kind = kind

    def minify(self, text: str) -> str:
        return self._fn(text)


class MinifierRegistry(MinifierRegistryProtocol):
    def __init__(
        self,
        *,
        markup: Optional[MinifierProtocol] = None,
        vector: Optional[MinifierProtocol] = None,
        script: Optional[MinifierProtocol] = None,
        stylesheet: Optional[MinifierProtocol] = None,
    ) -> None:
        self._markup: MinifierProtocol = markup or FunctionMinifier(minify_markup, kind='markup')
        self._vector: MinifierProtocol = vector or FunctionMinifier(minify_vector, kind='vector')
        self._by_suffix: Dict[str, MinifierProtocol] = {
            '.js': script or FunctionMinifier(minify_script, kind='script'),
            '.css': stylesheet or FunctionMinifier(minify_stylesheet, kind='stylesheet'),
            '.html': self._markup,
        }

    @property
    def markup(self) -> MinifierProtocol:
        return self._markup

    @property
    def vector(self) -> MinifierProtocol:
        return self._vector

    def for_suffix(self, suffix: str) -> Optional[MinifierProtocol]:
        return self._by_suffix.get(suffix.lower())
