"""Lightweight inspection of the code a comment is attached to.

Only the first statement of ``context.code`` is examined. These are
best-effort pattern matches over source text, not a parser.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

_IDENT = r"[A-Za-z_$][\w$]*"
_NAMEPATH = rf"{_IDENT}(?:\.{_IDENT})*"

_CLASS = re.compile(rf"^(?:export\s+(?:default\s+)?)?class\s+({_IDENT})(?:\s+extends\s+({_NAMEPATH}))?")
_FUNCTION = re.compile(
    rf"^(?:export\s+(?:default\s+)?)?(?:async\s+)?function\s*\*?\s*({_IDENT})\s*\(([^)]*)\)"
)
_BINDING = re.compile(rf"^(?:export\s+)?(var|let|const)\s+({_IDENT})\s*=\s*(.*)$", re.DOTALL)
_ASSIGNMENT = re.compile(rf"^((?:module\.)?{_NAMEPATH})\s*=(?!=)\s*(.*)$", re.DOTALL)
_OBJECT_PROPERTY = re.compile(rf"^['\"]?({_IDENT})['\"]?\s*:\s*(.*)$", re.DOTALL)
_METHOD = re.compile(
    rf"^(?:static\s+)?(?:async\s+)?(?:get\s+|set\s+)?\*?\s*({_IDENT})\s*\(([^)]*)\)\s*\{{"
)
_FUNCTION_VALUE = re.compile(r"^(?:async\s+)?function\b[^(]*\(([^)]*)\)")
_ARROW_VALUE = re.compile(rf"^(?:async\s+)?(?:\(([^)]*)\)|({_IDENT}))\s*=>")
_CLASS_VALUE = re.compile(rf"^class\b(?:\s+{_IDENT})?(?:\s+extends\s+({_NAMEPATH}))?")
_EXPORTS_PREFIX = re.compile(r"^(?:(?:module\.)?exports|this)\.")

_RESERVED = frozenset({"if", "for", "while", "switch", "catch", "return", "function", "new"})


@dataclass(slots=True)
class CodeSignature:
    """Structural facts recovered from a code snippet."""

    name: str | None = None
    kind: str | None = None
    params: List[str] = field(default_factory=list)
    extends: str | None = None
    binding: str | None = None


def _first_statement(code: str) -> str:
    for line in code.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith(("//", "*", "/*")):
            return stripped
    return ""


def _split_params(raw: str) -> List[str]:
    names: List[str] = []
    for chunk in raw.split(","):
        token = chunk.strip()
        if not token:
            continue
        token = token.split("=", 1)[0].strip()
        if token.startswith("..."):
            token = token[3:]
        if re.fullmatch(_IDENT, token):
            names.append(token)
    return names


def _describe_value(signature: CodeSignature, value: str) -> None:
    value = value.strip()
    function_match = _FUNCTION_VALUE.match(value)
    if function_match:
        signature.kind = "function"
        signature.params = _split_params(function_match.group(1))
        return
    arrow_match = _ARROW_VALUE.match(value)
    if arrow_match:
        signature.kind = "function"
        signature.params = _split_params(arrow_match.group(1) or arrow_match.group(2) or "")
        return
    class_match = _CLASS_VALUE.match(value)
    if class_match:
        signature.kind = "class"
        signature.extends = class_match.group(1)


def parse_signature(code: str | None) -> CodeSignature:
    """Return what can be recognised from the first statement of *code*."""

    signature = CodeSignature()
    if not code:
        return signature
    statement = _first_statement(code)
    if not statement:
        return signature

    class_match = _CLASS.match(statement)
    if class_match:
        signature.name = class_match.group(1)
        signature.kind = "class"
        signature.extends = class_match.group(2)
        return signature

    function_match = _FUNCTION.match(statement)
    if function_match:
        signature.name = function_match.group(1)
        signature.kind = "function"
        signature.params = _split_params(function_match.group(2))
        return signature

    binding_match = _BINDING.match(statement)
    if binding_match:
        signature.binding = binding_match.group(1)
        signature.name = binding_match.group(2)
        _describe_value(signature, binding_match.group(3))
        if signature.kind is None and signature.binding == "const":
            signature.kind = "constant"
        return signature

    assignment_match = _ASSIGNMENT.match(statement)
    if assignment_match:
        target = _EXPORTS_PREFIX.sub("", assignment_match.group(1))
        if target not in {"module", "module.exports", "exports"}:
            signature.name = target
            _describe_value(signature, assignment_match.group(2))
        return signature

    method_match = _METHOD.match(statement)
    if method_match and method_match.group(1) not in _RESERVED:
        signature.name = method_match.group(1)
        signature.kind = "function"
        signature.params = _split_params(method_match.group(2))
        return signature

    property_match = _OBJECT_PROPERTY.match(statement)
    if property_match:
        signature.name = property_match.group(1)
        _describe_value(signature, property_match.group(2))
    return signature


__all__ = ["CodeSignature", "parse_signature"]
