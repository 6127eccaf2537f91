"""Category predicates and the per-kind dispatch table.

Each predicate looks at a single node. ``compile_dispatch`` groups them by
the NodeKind they can fire on, so classification tests a node only
against predicates that apply to its kind.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Optional

from ..scanning.syntax import NodeKind, SyntaxNode, string_value
from . import rules

Predicate = Callable[[SyntaxNode], bool]
DispatchTable = dict[NodeKind, tuple[tuple[str, Predicate], ...]]

_FUNCTION_KINDS = (NodeKind.FUNCTION, NodeKind.FUNCTION_EXPRESSION, NodeKind.ARROW_FUNCTION)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(k in text for k in keywords)


def _identifier_name(node: Optional[SyntaxNode]) -> Optional[str]:
    if node is not None and node.type in ("identifier", "property_identifier"):
        return node.text
    return None


def _member_parts(call: SyntaxNode) -> Optional[tuple[str, str]]:
    """(base object name, method name) for ``obj.method()`` style calls.

    The base is the object identifier, or the root identifier of one level
    of property chaining (``db.users.find()`` -> ``db``); otherwise empty.
    """
    callee = call.field("function")
    if callee is None or callee.kind is not NodeKind.MEMBER_ACCESS:
        return None
    prop = callee.field("property")
    method = prop.text if prop is not None else ""

    obj = callee.field("object")
    base = ""
    if obj is not None:
        if obj.type == "identifier":
            base = obj.text
        elif obj.kind is NodeKind.MEMBER_ACCESS:
            base = _identifier_name(obj.field("object")) or ""
    return base, method


def _callee_name(call: SyntaxNode) -> Optional[str]:
    callee = call.field("function")
    if callee is not None and callee.type == "identifier":
        return callee.text
    return None


def _branch_count(function: SyntaxNode) -> int:
    body = function.field("body")
    if body is None or body.kind is not NodeKind.BLOCK:
        return 0
    return sum(1 for stmt in body.named_children if stmt.kind is NodeKind.BRANCH)


# ── ui-rendering ─────────────────────────────────────────────────


def renders_ui(node: SyntaxNode) -> bool:
    if node.kind is NodeKind.JSX:
        return True
    return_type = node.field("return_type")
    return return_type is not None and "JSX" in return_type.text


# ── ui-interaction ───────────────────────────────────────────────


def handles_interaction(node: SyntaxNode) -> bool:
    key = node.field("key") if node.kind is NodeKind.PROPERTY else node.field("name")
    name = _identifier_name(key)
    if name is None:
        return False
    lowered = name.lower()
    return lowered.startswith(rules.HANDLER_PREFIXES) or _contains_any(
        lowered, rules.HANDLER_KEYWORDS
    )


# ── business-logic ───────────────────────────────────────────────


def has_business_logic(node: SyntaxNode) -> bool:
    if node.kind is NodeKind.VARIABLE_DECLARATOR:
        value = node.field("value")
        if value is None or value.kind not in _FUNCTION_KINDS:
            return False
        node = value
    return _branch_count(node) > rules.BRANCH_LIMIT


# ── data-access ──────────────────────────────────────────────────


def accesses_data(node: SyntaxNode) -> bool:
    if node.kind is NodeKind.CALL:
        parts = _member_parts(node)
        if parts is not None:
            base, method = parts
            return _contains_any(method.lower(), rules.DB_METHODS) or _contains_any(
                base.lower(), rules.DB_OBJECTS
            )
        callee = _callee_name(node)
        return callee is not None and _contains_any(callee.lower(), rules.DATA_CALLEES)

    if node.kind is NodeKind.IMPORT:
        module = string_value(node.field("source")).lower()
        return _contains_any(module, rules.DATA_MODULES)

    if node.kind is NodeKind.VARIABLE_DECLARATOR:
        value = node.field("value")
        return value is not None and _contains_any(value.text.lower(), rules.DATA_INITIALIZERS)

    return False


# ── validation ───────────────────────────────────────────────────


def validates_input(node: SyntaxNode) -> bool:
    parts = _member_parts(node)
    return parts is not None and _contains_any(parts[1].lower(), rules.VALIDATION_METHODS)


# ── state-management ─────────────────────────────────────────────


def manages_state(node: SyntaxNode) -> bool:
    return _callee_name(node) in rules.STATE_HOOKS


# ── api-communication ────────────────────────────────────────────


def calls_api(node: SyntaxNode) -> bool:
    callee = node.field("function")
    if callee is None or callee.kind is not NodeKind.MEMBER_ACCESS:
        return False
    obj = _identifier_name(callee.field("object")) or ""
    prop = callee.field("property")
    method = prop.text.lower() if prop is not None else ""
    return _contains_any(obj.lower(), rules.API_OBJECTS) or method in rules.HTTP_VERBS


# ── utility ──────────────────────────────────────────────────────


def is_utility(node: SyntaxNode) -> bool:
    name = _identifier_name(node.field("name"))
    return name is not None and _contains_any(name.lower(), rules.UTILITY_KEYWORDS)


# ── configuration ────────────────────────────────────────────────


def _looks_constant(name: str) -> bool:
    return name == name.upper() and len(name) >= rules.CONSTANT_MIN_LENGTH


def is_configuration(node: SyntaxNode) -> bool:
    if node.kind is NodeKind.VARIABLE_DECLARATOR:
        name = _identifier_name(node.field("name"))
        keywords = rules.CONFIG_VARIABLE_KEYWORDS
    else:
        key = node.field("key")
        name = key.text if key is not None and key.type == "property_identifier" else None
        keywords = rules.CONFIG_PROPERTY_KEYWORDS
    if name is None:
        return False
    return _contains_any(name.lower(), keywords) or _looks_constant(name)


_PREDICATES: dict[str, tuple[Predicate, tuple[NodeKind, ...]]] = {
    "ui-rendering": (renders_ui, (NodeKind.JSX, NodeKind.FUNCTION, NodeKind.ARROW_FUNCTION)),
    "ui-interaction": (handles_interaction, (NodeKind.PROPERTY, NodeKind.METHOD)),
    "business-logic": (
        has_business_logic,
        (
            NodeKind.FUNCTION,
            NodeKind.FUNCTION_EXPRESSION,
            NodeKind.ARROW_FUNCTION,
            NodeKind.METHOD,
            NodeKind.VARIABLE_DECLARATOR,
        ),
    ),
    "data-access": (
        accesses_data,
        (NodeKind.CALL, NodeKind.IMPORT, NodeKind.VARIABLE_DECLARATOR),
    ),
    "validation": (validates_input, (NodeKind.CALL,)),
    "state-management": (manages_state, (NodeKind.CALL,)),
    "api-communication": (calls_api, (NodeKind.CALL,)),
    "utility": (is_utility, (NodeKind.FUNCTION, NodeKind.VARIABLE_DECLARATOR)),
    "configuration": (is_configuration, (NodeKind.VARIABLE_DECLARATOR, NodeKind.PROPERTY)),
}


@lru_cache(maxsize=2)
def compile_dispatch(enable_heuristics: bool = True) -> DispatchTable:
    """Map each NodeKind to its (category, predicate) pairs in category order."""
    table: dict[NodeKind, list[tuple[str, Predicate]]] = {}
    for tag, rule in rules.CATEGORIES.items():
        if tag not in _PREDICATES:
            continue
        if rule.heuristic and not enable_heuristics:
            continue
        predicate, kinds = _PREDICATES[tag]
        for kind in kinds:
            table.setdefault(kind, []).append((tag, predicate))
    return {kind: tuple(entries) for kind, entries in table.items()}
