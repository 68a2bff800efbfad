"""
Deserialization of topic documents into tree nodes.

Document shape:

    {"radacina": <node>}
    <node> ::= {"entitate": {"nume": str, "domeniu": str, "tip": str}}
             | {"intrebare": str, "da": <node>, "nu": <node>}

Nodes are built bottom-up with an explicit work stack, so deeply nested
documents do not depend on the interpreter recursion limit.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..exceptions import MalformedDocument
from .base import Entity, LeafNode, QuestionNode, TreeNode


ROOT_KEY = "radacina"
ENTITY_KEY = "entitate"
QUESTION_KEY = "intrebare"
YES_KEY = "da"
NO_KEY = "nu"

# Document key -> Entity field
ENTITY_FIELDS = {
    "nume": "name",
    "domeniu": "domain",
    "tip": "kind",
}

DEFAULT_SOURCE = "<document>"


def parse_document(document: Any, source: str = DEFAULT_SOURCE) -> TreeNode:
    """Parse a whole topic document and return its root node."""
    if not isinstance(document, Mapping):
        raise MalformedDocument(
            source, "$", f"expected an object, got {type(document).__name__}"
        )
    if ROOT_KEY not in document:
        raise MalformedDocument(source, ROOT_KEY, f"missing required key '{ROOT_KEY}'")
    return parse_node(document[ROOT_KEY], source=source, path=ROOT_KEY)


def parse_node(data: Any, source: str = DEFAULT_SOURCE, path: str = "$") -> TreeNode:
    """
    Parse one node record (and everything below it).

    Raises:
        MalformedDocument: a required key is absent, a value has the wrong
            type, or a record is neither a question nor an entity.
    """
    built: list[TreeNode] = []
    # (record, path, children_done)
    stack: list[tuple[Any, str, bool]] = [(data, path, False)]

    while stack:
        record, node_path, children_done = stack.pop()

        if children_done:
            no_branch = built.pop()
            yes_branch = built.pop()
            built.append(_build_question(record, yes_branch, no_branch, source, node_path))
            continue

        if not isinstance(record, Mapping):
            raise MalformedDocument(
                source, node_path, f"expected an object, got {type(record).__name__}"
            )

        has_entity = ENTITY_KEY in record
        has_question = QUESTION_KEY in record

        if has_entity and has_question:
            raise MalformedDocument(
                source,
                node_path,
                f"node has both '{ENTITY_KEY}' and '{QUESTION_KEY}'",
            )

        if has_entity:
            built.append(_build_leaf(record[ENTITY_KEY], source, f"{node_path}.{ENTITY_KEY}"))
            continue

        if has_question:
            for key in (YES_KEY, NO_KEY):
                if key not in record:
                    raise MalformedDocument(
                        source, f"{node_path}.{key}", f"missing required key '{key}'"
                    )
            stack.append((record, node_path, True))
            stack.append((record[NO_KEY], f"{node_path}.{NO_KEY}", False))
            stack.append((record[YES_KEY], f"{node_path}.{YES_KEY}", False))
            continue

        raise MalformedDocument(
            source,
            node_path,
            f"node is neither a question ('{QUESTION_KEY}') nor an entity ('{ENTITY_KEY}')",
        )

    return built.pop()


def _build_leaf(record: Any, source: str, path: str) -> LeafNode:
    if not isinstance(record, Mapping):
        raise MalformedDocument(source, path, f"expected an object, got {type(record).__name__}")

    values = {}
    for doc_key, field_name in ENTITY_FIELDS.items():
        if doc_key not in record:
            raise MalformedDocument(source, f"{path}.{doc_key}", f"missing required key '{doc_key}'")
        values[field_name] = record[doc_key]

    try:
        entity = Entity(**values)
    except ValidationError as e:
        raise MalformedDocument(source, _error_path(e, path), _error_message(e)) from e

    return LeafNode(entity=entity)


def _build_question(
    record: Mapping,
    yes_branch: TreeNode,
    no_branch: TreeNode,
    source: str,
    path: str,
) -> QuestionNode:
    try:
        return QuestionNode(question=record[QUESTION_KEY], yes=yes_branch, no=no_branch)
    except ValidationError as e:
        raise MalformedDocument(source, f"{path}.{QUESTION_KEY}", _error_message(e)) from e


def _error_path(error: ValidationError, path: str) -> str:
    """Map the first pydantic error location back to a document key."""
    field_to_key = {field: key for key, field in ENTITY_FIELDS.items()}
    loc = error.errors()[0].get("loc", ())
    if loc and loc[0] in field_to_key:
        return f"{path}.{field_to_key[loc[0]]}"
    return path


def _error_message(error: ValidationError) -> str:
    return error.errors()[0].get("msg", str(error))
