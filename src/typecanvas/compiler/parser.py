# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lenient parser for pasted interface and type declarations.

Recovers type values, properties and type-box skeletons from a restricted
subset of TypeScript-like source. Anything outside the subset yields ``None``
(or is skipped) instead of raising, so a bad paste never interrupts editing.
"""

from __future__ import annotations

import logging
import re

from typecanvas.model.entities import BoxKind, Property, TypeBoxSkeleton
from typecanvas.model.types import (
    PRIMITIVE_NAMES,
    BuiltInType,
    BuiltInTypeRef,
    CustomTypeRef,
    IntersectionTypeRef,
    PrimitiveType,
    PrimitiveTypeRef,
    TypeValue,
    UnionTypeRef,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def split_top_level(text: str, delimiter: str) -> list[str]:
    """Split *text* on *delimiter* wherever it is not nested in ``<>``, ``()`` or ``[]``.

    Parts are stripped; a trailing empty part is dropped.

    >>> split_top_level("Array<A, B> | C", "|")
    ['Array<A, B>', 'C']
    """
    return _split_at_depth(text, delimiter, _OPENERS, _CLOSERS)


def split_top_level_commas(text: str) -> list[str]:
    """Split generic arguments or tuple elements on top-level commas, dropping empty parts."""
    return [part for part in split_top_level(text, ",") if part]


def parse_type(text: str) -> TypeValue:
    """Parse a type expression into a :class:`TypeValue`.

    Detection order, first match wins: empty input (``any``), trailing ``[]``
    suffixes, tuple literal, top-level ``|``, top-level ``&``, parenthesised
    group, ``Name<...>`` generic call, primitive keyword, bare ``Object`` or
    ``Map``, and finally a custom reference.

    Generic arguments of unrecognised names are dropped: ``Foo<Bar>`` parses as
    the custom reference ``Foo``.
    """
    src = text.strip()
    if not src:
        return PrimitiveTypeRef(name=PrimitiveType.ANY)

    single_operand = len(split_top_level(src, "|")) == 1 and len(split_top_level(src, "&")) == 1

    if single_operand:
        suffix = _ARRAY_SUFFIX.match(src)
        if suffix and suffix.group(1).strip():
            base, brackets = suffix.group(1), suffix.group(2)
            node = parse_type(base)
            for _ in range(len(brackets) // 2):
                node = BuiltInTypeRef(name=BuiltInType.ARRAY, generic_args=[node])
            return node

        if _is_wrapped(src, "[", "]"):
            inner = src[1:-1].strip()
            elements = [parse_type(e) for e in split_top_level_commas(inner)]
            return BuiltInTypeRef(name=BuiltInType.TUPLE, generic_args=elements)

    union = split_top_level(src, "|")
    if len(union) > 1:
        return UnionTypeRef(types=[parse_type(part) for part in union])

    intersection = split_top_level(src, "&")
    if len(intersection) > 1:
        return IntersectionTypeRef(types=[parse_type(part) for part in intersection])

    if _is_wrapped(src, "(", ")"):
        return parse_type(src[1:-1])

    generic = _GENERIC_CALL.match(src)
    if generic:
        return _parse_generic_call(generic.group(1), generic.group(2))

    if src in PRIMITIVE_NAMES:
        return PrimitiveTypeRef(name=PrimitiveType(src))

    # Bare containers; renderers fill in placeholder arguments.
    if src == "Object":
        return BuiltInTypeRef(name=BuiltInType.OBJECT)
    if src == "Map":
        return BuiltInTypeRef(name=BuiltInType.MAP)

    return CustomTypeRef(name=src)


def parse_property_line(line: str) -> Property | None:
    """Parse a property signature such as ``readonly tags?: string[];``.

    Returns None for anything that is not a plain property signature, e.g.
    method signatures or index signatures.
    """
    trimmed = line.strip().removesuffix(";").strip()
    if not trimmed:
        return None
    match = _PROPERTY_LINE.match(trimmed)
    if not match:
        return None
    readonly, name, optional, type_src = match.groups()
    return Property(
        name=name,
        type=parse_type(type_src),
        optional=bool(optional),
        readonly=bool(readonly),
    )


def parse_box(text: str) -> TypeBoxSkeleton | None:
    """Parse one ``interface`` or ``type`` declaration into a skeleton.

    A leading ``/** ... */`` block becomes the box comment. Returns None for
    enums and every other unsupported form.
    """
    body = text.strip()
    if not body:
        return None

    comment: str | None = None
    doc = _LEADING_DOC_COMMENT.match(body)
    if doc:
        comment = _dedent_doc_comment(doc.group(1))
        body = body[doc.end() :].strip()
    body = _TRAILING_COMMENTS.sub("", body)

    match = _INTERFACE_DECL.match(body)
    if match:
        name, extends_src, inside = match.groups()
        extends = [e.strip() for e in (extends_src or "").split(",") if e.strip()]
        return TypeBoxSkeleton(
            name=name,
            kind=BoxKind.INTERFACE,
            properties=_parse_members(inside),
            extends=extends,
            comment=comment,
        )

    match = _TYPE_DECL.match(body)
    if match:
        name, rhs_src = match.groups()
        rhs = rhs_src.strip().removesuffix(";").strip()
        if not rhs:
            return None
        box = TypeBoxSkeleton(name=name, kind=BoxKind.TYPE, comment=comment)
        if _is_wrapped(rhs, "{", "}"):
            box.properties = _parse_members(rhs[1:-1])
            return box
        union = split_top_level(rhs, "|")
        if len(union) > 1:
            box.union_types = union
            return box
        intersection = split_top_level(rhs, "&")
        if len(intersection) > 1:
            box.intersection_types = intersection
            return box
        # A plain alias is kept as a one-member union so it renders unchanged.
        box.union_types = [rhs]
        return box

    return None


def split_declarations(buffer: str) -> list[str]:
    """Split a buffer holding several declarations into one text block each.

    A line opening an ``interface`` or ``type`` declaration starts a new block.
    A doc comment trailing a block is carried forward to the declaration it
    documents, and a block left with an unclosed ``/**`` (or holding nothing
    but a doc comment) is merged with the following one.
    """
    blocks: list[list[str]] = []
    current: list[str] = []
    for line in buffer.splitlines():
        if _DECLARATION_START.match(line) and current:
            carried = _take_trailing_doc_comment(current)
            if any(existing.strip() for existing in current):
                blocks.append(current)
            current = carried
        current.append(line)
    dangling = _take_trailing_doc_comment(current)
    for tail in (current, dangling):
        if any(existing.strip() for existing in tail):
            blocks.append(tail)

    texts = ["\n".join(block).strip() for block in blocks]
    index = 0
    while index < len(texts) - 1:
        if _has_unclosed_doc_comment(texts[index]) or _DOC_COMMENT_ONLY.match(texts[index]):
            texts[index : index + 2] = [texts[index] + "\n" + texts[index + 1]]
            continue
        index += 1
    return texts


def parse_declarations(buffer: str) -> list[TypeBoxSkeleton]:
    """Parse every supported declaration in *buffer*.

    Blocks that do not parse are skipped; the result holds only the successes,
    in source order.
    """
    skeletons: list[TypeBoxSkeleton] = []
    for block in split_declarations(buffer):
        skeleton = parse_box(block)
        if skeleton is None:
            logger.debug("Skipping unsupported declaration block: %.60r", block)
            continue
        skeletons.append(skeleton)
    return skeletons


# ################
# Implementation
# ################

_OPENERS = frozenset("<([")
_CLOSERS = frozenset(">)]")
# Members may hold inline object types whose own `;` must not split them.
_MEMBER_OPENERS = _OPENERS | {"{"}
_MEMBER_CLOSERS = _CLOSERS | {"}"}

_IDENT = r"[A-Za-z_$][\w$]*"

_ARRAY_SUFFIX = re.compile(r"^(.*?)((?:\[\])+)$", re.DOTALL)
_GENERIC_CALL = re.compile(rf"^({_IDENT})<(.+)>$", re.DOTALL)
_PROPERTY_LINE = re.compile(rf"^(readonly\s+)?({_IDENT})(\?)?\s*:\s*(.+)$", re.DOTALL)
_LEADING_DOC_COMMENT = re.compile(r"^/\*\*(.*?)\*/\s*", re.DOTALL)
_INLINE_DOC_COMMENT = re.compile(r"^/\*\*((?:(?!\*/).)*)\*/$", re.DOTALL)
_DOC_COMMENT_ONLY = re.compile(r"^/\*\*(?:(?!\*/).)*\*/$", re.DOTALL)
_INTERFACE_DECL = re.compile(
    rf"^(?:export\s+)?interface\s+({_IDENT})(?:\s+extends\s+([\w$,\s]+?))?\s*\{{(.*)\}}\s*;?$",
    re.DOTALL,
)
_TYPE_DECL = re.compile(rf"^(?:export\s+)?type\s+({_IDENT})\s*=(.*)$", re.DOTALL)
_DECLARATION_START = re.compile(rf"^\s*(?:export\s+)?(?:interface|type)\s+{_IDENT}")
_LINE_COMMENT = re.compile(r"//.*$")
_DOC_LINE_PREFIX = re.compile(r"^\s*\* ?")
# Plain or line comments closing a declaration, e.g. `type Id = string; /* legacy */`.
_TRAILING_COMMENTS = re.compile(r"(?:\s*(?:/\*(?:(?!\*/).)*\*/|//[^\n]*))+\s*$", re.DOTALL)


def _split_at_depth(text: str, delimiter: str, openers: frozenset[str], closers: frozenset[str]) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch in openers:
            depth += 1
        elif ch in closers:
            depth = max(0, depth - 1)
        if ch == delimiter and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


def _parse_generic_call(name: str, inner: str) -> TypeValue:
    args = [parse_type(a) for a in split_top_level_commas(inner)]
    if name == "Array":
        return BuiltInTypeRef(name=BuiltInType.ARRAY, generic_args=args[:1])
    if name == "Set":
        return BuiltInTypeRef(name=BuiltInType.SET, generic_args=args[:1])
    if name == "Map":
        return BuiltInTypeRef(
            name=BuiltInType.MAP,
            generic_args=[_arg_or(args, 0, PrimitiveType.UNKNOWN), _arg_or(args, 1, PrimitiveType.UNKNOWN)],
        )
    if name == "Record":
        return BuiltInTypeRef(
            name=BuiltInType.OBJECT,
            generic_args=[_arg_or(args, 0, PrimitiveType.STRING), _arg_or(args, 1, PrimitiveType.UNKNOWN)],
        )
    if name == "Tuple":
        return BuiltInTypeRef(name=BuiltInType.TUPLE, generic_args=args)
    return CustomTypeRef(name=name)


def _arg_or(args: list[TypeValue], index: int, default: PrimitiveType) -> TypeValue:
    return args[index] if index < len(args) else PrimitiveTypeRef(name=default)


def _is_wrapped(text: str, opener: str, closer: str) -> bool:
    """Return True if the opener at position 0 is closed by the last character."""
    if len(text) < 2 or text[0] != opener or text[-1] != closer:
        return False
    depth = 0
    for index, ch in enumerate(text):
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return index == len(text) - 1
    return False


def _parse_members(body: str) -> list[Property]:
    """Parse the member lines of an interface body or object literal.

    Unsupported members are skipped. An inline ``/** ... */`` line documents the
    property that follows it.
    """
    properties: list[Property] = []
    pending_comment: str | None = None
    for raw_line in body.splitlines():
        line = raw_line.strip()
        doc = _INLINE_DOC_COMMENT.match(line)
        if doc:
            pending_comment = _dedent_doc_comment(doc.group(1)) or None
            continue
        line = _LINE_COMMENT.sub("", line).strip()
        if not line:
            continue
        for member in _split_at_depth(line, ";", _MEMBER_OPENERS, _MEMBER_CLOSERS):
            prop = parse_property_line(member)
            if prop is None:
                continue
            if pending_comment is not None:
                prop.comment = pending_comment
                pending_comment = None
            properties.append(prop)
    return properties


def _dedent_doc_comment(inner: str) -> str:
    return "\n".join(_DOC_LINE_PREFIX.sub("", line) for line in inner.splitlines()).strip()


def _has_unclosed_doc_comment(text: str) -> bool:
    opened = text.rfind("/**")
    return opened != -1 and text.find("*/", opened + 3) == -1


def _take_trailing_doc_comment(lines: list[str]) -> list[str]:
    """Remove and return a complete doc comment (plus blank lines) ending *lines*.

    Only a contiguous comment block counts: it must open with `/**` on its own
    line, every following line up to the closing `*/` must be a comment line,
    and no code may share the closing line.
    """
    end = len(lines)
    while end > 0 and not lines[end - 1].strip():
        end -= 1
    if end == 0 or not lines[end - 1].rstrip().endswith("*/"):
        return []
    start = end - 1
    while not lines[start].strip().startswith("/**"):
        if start == 0 or not lines[start].strip().startswith("*"):
            return []
        start -= 1
    if start < end - 1 and "*/" in lines[start]:
        return []
    carried = lines[start:]
    del lines[start:]
    return carried
