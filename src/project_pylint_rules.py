"""Custom pylint rules for annotation style and the JSON adapter boundary."""

from __future__ import annotations

from collections.abc import Iterable

from astroid import nodes
from pylint.checkers import BaseChecker
from pylint.lint import PyLinter


_MESSAGE_PREFER_OPTIONAL = "prefer-optional"
_MESSAGE_RAW_JSON_CALL = "raw-json-call"

_RAW_JSON_FUNCTIONS = frozenset({"load", "loads", "dump", "dumps"})
_ADAPTER_MODULES = frozenset({"typed_json.parsing", "typed_json.serialization"})


class ProjectRulesChecker(BaseChecker):
    """Project-specific AST checks."""

    name = "project-rules"

    msgs = {
        "C9501": (
            "Use Optional[T] instead of T | None in annotations",
            _MESSAGE_PREFER_OPTIONAL,
            "Project style requires Optional[T] for nullable annotations.",
        ),
        "W9502": (
            "Use typed_json.parse/stringify instead of json.%s",
            _MESSAGE_RAW_JSON_CALL,
            "Only the parse and stringify adapters may call the json module directly; "
            "everything else goes through them so failures come back as results.",
        ),
    }

    def visit_annassign(self, node: nodes.AnnAssign) -> None:
        """Validate annotation style for annotated assignments."""
        self._check_annotation(node.annotation)

    def visit_arguments(self, node: nodes.Arguments) -> None:
        """Validate annotation style for function arguments."""
        for annotation in self._iter_argument_annotations(node):
            self._check_annotation(annotation)

    def visit_functiondef(self, node: nodes.FunctionDef) -> None:
        """Validate annotation style for function return type."""
        if node.returns is not None:
            self._check_annotation(node.returns)

    def visit_call(self, node: nodes.Call) -> None:
        """Flag ``json.loads(...)`` style calls outside the adapter modules."""
        func = node.func
        if not isinstance(func, nodes.Attribute) or func.attrname not in _RAW_JSON_FUNCTIONS:
            return
        if not isinstance(func.expr, nodes.Name) or func.expr.name != "json":
            return
        if _is_adapter_module(node):
            return
        self.add_message(_MESSAGE_RAW_JSON_CALL, node=node, args=(func.attrname,))

    def visit_importfrom(self, node: nodes.ImportFrom) -> None:
        """Flag ``from json import loads`` style imports outside the adapter modules."""
        if node.modname != "json" or _is_adapter_module(node):
            return
        for imported_name, _alias in node.names:
            if imported_name in _RAW_JSON_FUNCTIONS:
                self.add_message(_MESSAGE_RAW_JSON_CALL, node=node, args=(imported_name,))

    def _check_annotation(self, annotation: nodes.NodeNG) -> None:
        for optional_union in self._iter_optional_pipe_unions(annotation):
            self.add_message(_MESSAGE_PREFER_OPTIONAL, node=optional_union)

    @staticmethod
    def _iter_argument_annotations(arguments: nodes.Arguments) -> Iterable[nodes.NodeNG]:
        candidates = [
            *arguments.posonlyargs_annotations,
            *arguments.annotations,
            *arguments.kwonlyargs_annotations,
            arguments.varargannotation,
            arguments.kwargannotation,
        ]
        return [annotation for annotation in candidates if annotation is not None]

    @staticmethod
    def _iter_optional_pipe_unions(annotation: nodes.NodeNG) -> Iterable[nodes.BinOp]:
        for candidate in annotation.nodes_of_class(nodes.BinOp):
            if candidate.op != "|":
                continue
            if _is_none_literal(candidate.left) or _is_none_literal(candidate.right):
                yield candidate


def _is_adapter_module(node: nodes.NodeNG) -> bool:
    return node.root().name in _ADAPTER_MODULES


def _is_none_literal(node: nodes.NodeNG) -> bool:
    return isinstance(node, nodes.Const) and node.value is None


def register(linter: PyLinter) -> None:
    """Register checker."""
    linter.register_checker(ProjectRulesChecker(linter))
