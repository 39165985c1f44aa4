"""Convert tree-sitter TypeScript trees into the typed statement model."""

from __future__ import annotations

import importlib

import tree_sitter

from autowire.analysis.syntax import (
    ClassDecl,
    ExportDecl,
    ImportDecl,
    ModuleSyntax,
    NamespaceDecl,
    Parameter,
    Statement,
    TypeRef,
)
from autowire.config import GRAMMAR_MODULES
from autowire.constants import CONSTRUCTOR_NAME

_CLASS_NODE_TYPES = frozenset(
    {"class_declaration", "abstract_class_declaration", "class"}
)
_NAMESPACE_NODE_TYPES = frozenset({"internal_module", "module"})
_MEMBER_NODE_TYPES = frozenset(
    {
        "method_definition",
        "method_signature",
        "abstract_method_signature",
        "public_field_definition",
    }
)
_CONSTRUCTOR_NODE_TYPES = frozenset(
    {"method_definition", "method_signature"}
)
_PARAMETER_NODE_TYPES = frozenset({"required_parameter", "optional_parameter"})


class GrammarUnavailableError(LookupError):
    """No tree-sitter grammar is installed for an extension."""


def parse_module(source: str, extension: str = ".ts") -> ModuleSyntax:
    """Parse ``source`` and return its recognized top-level statements.

    Raises :class:`GrammarUnavailableError` when the grammar for
    ``extension`` cannot be loaded.
    """
    parser = tree_sitter.Parser(_get_language(extension))
    tree = parser.parse(source.encode("utf-8"))
    root = tree.root_node
    return ModuleSyntax(
        statements=_convert_block(root),
        has_error=root.has_error,
    )


def _convert_block(node: tree_sitter.Node) -> tuple[Statement, ...]:
    statements: list[Statement] = []
    for child in node.named_children:
        stmt = _convert_statement(child)
        if stmt is not None:
            statements.append(stmt)
    return tuple(statements)


def _convert_statement(node: tree_sitter.Node) -> Statement | None:
    kind = node.type
    if kind == "import_statement":
        return _convert_import(node)
    if kind == "export_statement":
        return _convert_export(node)
    if kind in _CLASS_NODE_TYPES:
        return _convert_class(node)
    if kind in _NAMESPACE_NODE_TYPES:
        return _convert_namespace(node)
    # `namespace A {}` may parse as an expression, `declare namespace`
    # as an ambient declaration; both wrap the real declaration.
    if kind in ("expression_statement", "ambient_declaration"):
        for child in node.named_children:
            if child.type in _NAMESPACE_NODE_TYPES | _CLASS_NODE_TYPES:
                return _convert_statement(child)
    return None


def _convert_import(node: tree_sitter.Node) -> ImportDecl | None:
    source_node = node.child_by_field_name("source")
    if source_node is None:
        source_node = _first_child_of_type(node, "string")
    if source_node is None:
        return None

    bindings: list[str] = []
    clause = _first_child_of_type(node, "import_clause")
    if clause is not None:
        for child in clause.named_children:
            if child.type == "identifier":
                bindings.append(_text(child))
            elif child.type == "namespace_import":
                ident = _first_child_of_type(child, "identifier")
                if ident is not None:
                    bindings.append(_text(ident))
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    local = spec.child_by_field_name(
                        "alias"
                    ) or spec.child_by_field_name("name")
                    if local is not None:
                        bindings.append(_text(local))

    return ImportDecl(
        source=_string_value(source_node), bindings=tuple(bindings)
    )


def _convert_export(node: tree_sitter.Node) -> ExportDecl:
    is_default = any(child.type == "default" for child in node.children)
    inner = node.child_by_field_name(
        "declaration"
    ) or node.child_by_field_name("value")

    declaration: ClassDecl | NamespaceDecl | None = None
    if inner is not None:
        converted = _convert_statement(inner)
        if isinstance(converted, (ClassDecl, NamespaceDecl)):
            declaration = converted
    return ExportDecl(default=is_default, declaration=declaration)


def _convert_namespace(node: tree_sitter.Node) -> NamespaceDecl | None:
    name_node = node.child_by_field_name("name")
    # `declare module "pkg" {}` names a module, not a namespace path
    if name_node is None or name_node.type == "string":
        return None
    path = tuple(
        part.strip() for part in _text(name_node).split(".") if part.strip()
    )
    body_node = node.child_by_field_name("body")
    body = _convert_block(body_node) if body_node is not None else ()
    return NamespaceDecl(path=path, body=body)


def _convert_class(node: tree_sitter.Node) -> ClassDecl:
    name_node = node.child_by_field_name("name")
    superclass: TypeRef | None = None
    interfaces: list[TypeRef] = []

    heritage = _first_child_of_type(node, "class_heritage")
    if heritage is not None:
        for clause in heritage.named_children:
            if clause.type == "extends_clause":
                value = clause.child_by_field_name("value")
                if value is None and clause.named_children:
                    value = clause.named_children[0]
                if value is not None:
                    superclass = _type_ref(value)
            elif clause.type == "implements_clause":
                for type_node in clause.named_children:
                    ref = _type_ref(type_node)
                    if ref is not None:
                        interfaces.append(ref)

    members: list[str] = []
    constructor: tuple[Parameter, ...] | None = None
    body = node.child_by_field_name("body")
    if body is not None:
        for member in body.named_children:
            if member.type not in _MEMBER_NODE_TYPES:
                continue
            member_name = member.child_by_field_name("name")
            if member_name is None:
                continue
            members.append(_text(member_name))
            if (
                constructor is None
                and member.type in _CONSTRUCTOR_NODE_TYPES
                and _text(member_name) == CONSTRUCTOR_NAME
            ):
                constructor = _convert_parameters(member)

    return ClassDecl(
        name=_text(name_node) if name_node is not None else None,
        abstract=node.type == "abstract_class_declaration",
        superclass=superclass,
        interfaces=tuple(interfaces),
        constructor=constructor,
        members=tuple(members),
        line=node.start_point[0] + 1,
    )


def _convert_parameters(method: tree_sitter.Node) -> tuple[Parameter, ...]:
    params_node = method.child_by_field_name("parameters")
    if params_node is None:
        return ()

    params: list[Parameter] = []
    for param in params_node.named_children:
        if param.type not in _PARAMETER_NODE_TYPES:
            continue
        pattern = param.child_by_field_name("pattern")
        annotation = param.child_by_field_name("type")
        type_ref: TypeRef | None = None
        if annotation is not None:
            type_node = (
                annotation.named_children[0]
                if annotation.type == "type_annotation"
                and annotation.named_children
                else annotation
            )
            type_ref = _type_ref(type_node)
        params.append(
            Parameter(
                name=_text(pattern) if pattern is not None else "",
                type_ref=type_ref,
            )
        )
    return tuple(params)


def _type_ref(node: tree_sitter.Node) -> TypeRef | None:
    """Build a TypeRef from a type or heritage expression node.

    Only plain and dotted names are references; generics reduce to
    their base name, everything else (unions, literals, predefined
    types, call expressions) yields None.
    """
    kind = node.type
    if kind in ("type_identifier", "identifier"):
        return TypeRef(parts=(_text(node),))
    if kind in ("nested_type_identifier", "member_expression"):
        parts = tuple(p.strip() for p in _text(node).split("."))
        if all(p.isidentifier() for p in parts):
            return TypeRef(parts=parts)
        return None
    if kind == "generic_type":
        name = node.child_by_field_name("name")
        return _type_ref(name) if name is not None else None
    if kind == "type" and node.named_children:
        return _type_ref(node.named_children[0])
    return None


def _first_child_of_type(
    node: tree_sitter.Node, kind: str
) -> tree_sitter.Node | None:
    for child in node.children:
        if child.type == kind:
            return child
    return None


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _string_value(node: tree_sitter.Node) -> str:
    raw = _text(node)
    if len(raw) >= 2 and raw[0] in "'\"`" and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


# ---------------------------------------------------------------------------
# Language cache
# ---------------------------------------------------------------------------

_language_cache: dict[str, tree_sitter.Language] = {}


def _get_language(extension: str) -> tree_sitter.Language:
    """Get or load the tree-sitter language for ``extension``.

    Parsers are built per call; a Parser must not be shared across
    the worker threads files are analyzed on.
    """
    if extension in _language_cache:
        return _language_cache[extension]

    entry = GRAMMAR_MODULES.get(extension)
    if entry is None:
        raise GrammarUnavailableError(extension)

    module_name, factory = entry
    try:
        mod = importlib.import_module(module_name)
        capsule: object = getattr(mod, factory)()
    except (ImportError, AttributeError) as exc:
        raise GrammarUnavailableError(extension) from exc

    lang = tree_sitter.Language(capsule)
    _language_cache[extension] = lang
    return lang
