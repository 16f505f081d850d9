#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdast/ast/serialization.py
"""JSON serialization and deserialization for AST nodes.

This module converts node trees to and from the plain mdast object shape::

    {"type": "heading", "depth": 1, "children": [{"type": "text", "value": "Hi"}]}

Every node becomes a mapping holding ``type`` plus exactly the fields its
type allows. ``Root.footnotes`` is omitted when it is ``None`` and becomes a
mapping of id to serialized definition otherwise.

Examples
--------
Serialize an AST to JSON:

    >>> from mdast.ast.nodes import Root, Heading, Text
    >>> from mdast.ast.serialization import ast_to_json
    >>> ast_to_json(Root(children=[Heading(depth=1, children=[Text("Title")])]))
    '{"type": "root", "children": [{"type": "heading", "depth": 1, ...}]}'

Deserialize back:

    >>> from mdast.ast.serialization import json_to_ast
    >>> json_to_ast(json_str).children[0].depth
    1

"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import MISSING, fields
from typing import Any

from mdast.ast.nodes import NODE_TYPES, FootnoteDefinition, Node, Root
from mdast.exceptions import InputError, UnknownTypeError

logger = logging.getLogger(__name__)

# Fields holding a required string
_STRING_FIELDS = frozenset({"value", "id", "href", "src"})

# Fields holding a string or null
_OPTIONAL_STRING_FIELDS = frozenset({"lang", "alt", "title"})


def _serialize_value(name: str, value: Any) -> Any:
    """Serialize a single field value."""
    if name == "children":
        return [ast_to_dict(child) for child in value]
    if name == "footnotes":
        return {key: ast_to_dict(definition) for key, definition in value.items()}
    if name == "align":
        return list(value)
    return value


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to its mdast mapping representation.

    Parameters
    ----------
    node : Node
        The AST node to convert

    Returns
    -------
    dict
        Mapping with ``type`` first followed by the node's fields

    Raises
    ------
    UnknownTypeError
        If the object is not one of the known node classes

    Examples
    --------
    >>> from mdast.ast.nodes import Text
    >>> ast_to_dict(Text("Hello"))
    {'type': 'text', 'value': 'Hello'}

    """
    node_type = getattr(node, "type", None)
    if not isinstance(node, Node) or NODE_TYPES.get(node_type) is not type(node):  # type: ignore[arg-type]
        raise UnknownTypeError(node_type if node_type is not None else type(node).__name__)

    result: dict[str, Any] = {"type": node.type}
    for node_field in fields(node):  # type: ignore[arg-type]
        value = getattr(node, node_field.name)
        if node_field.name == "footnotes" and value is None:
            continue
        result[node_field.name] = _serialize_value(node_field.name, value)
    return result


def _deserialize_children(children_data: Any, node_type: str) -> list[Node]:
    """Recursively deserialize a list of child nodes."""
    if not isinstance(children_data, list):
        raise InputError(
            f"Expected `children` of `{node_type}` node to be a list, not `{children_data!r}`",
            parameter_name="children",
            parameter_value=children_data,
        )
    return [dict_to_ast(child) for child in children_data]


def _deserialize_footnotes(data: Any) -> dict[str, FootnoteDefinition] | None:
    """Deserialize the ``footnotes`` mapping of a root node."""
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise InputError(
            f"Expected `footnotes` to be a mapping, not `{data!r}`",
            parameter_name="footnotes",
            parameter_value=data,
        )
    footnotes: dict[str, FootnoteDefinition] = {}
    for key, value in data.items():
        definition = dict_to_ast(value)
        if not isinstance(definition, FootnoteDefinition):
            raise InputError(
                f"Expected footnote `{key}` to be a `footnoteDefinition` node, not `{definition.type}`",
                parameter_name="footnotes",
                parameter_value=value,
            )
        footnotes[key] = definition
    return footnotes


def _check_scalar(node_type: str, name: str, value: Any) -> None:
    """Check the Python type of a scalar field value."""
    if name in _STRING_FIELDS and not isinstance(value, str):
        raise InputError(
            f"Expected `{name}` of `{node_type}` node to be a string, not `{value!r}`",
            parameter_name=name,
            parameter_value=value,
        )
    if name in _OPTIONAL_STRING_FIELDS and value is not None and not isinstance(value, str):
        raise InputError(
            f"Expected `{name}` of `{node_type}` node to be a string or null, not `{value!r}`",
            parameter_name=name,
            parameter_value=value,
        )


def dict_to_ast(data: Mapping[str, Any]) -> Node:
    """Convert an mdast mapping back into an AST node.

    Parameters
    ----------
    data : Mapping
        Mapping representation of a node

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    InputError
        If the mapping has no ``type``, lacks a required field, carries a field
        its type does not allow, or a field holds a value of the wrong kind
    UnknownTypeError
        If ``type`` names a node type outside the closed node set

    Examples
    --------
    >>> node = dict_to_ast({"type": "text", "value": "Hello"})
    >>> node.value
    'Hello'

    """
    if isinstance(data, Node):
        return data
    if not isinstance(data, Mapping):
        raise InputError(f"Expected node, not `{data!r}`", parameter_name="node", parameter_value=data)

    node_type = data.get("type")
    if node_type is None:
        raise InputError(f"Expected node with a `type` field, not `{dict(data)!r}`", parameter_name="type")

    node_class = NODE_TYPES.get(node_type) if isinstance(node_type, str) else None
    if node_class is None:
        raise UnknownTypeError(node_type)

    allowed = {node_field.name: node_field for node_field in fields(node_class)}  # type: ignore[arg-type]
    extra = sorted(set(data) - set(allowed) - {"type"})
    if extra:
        raise InputError(
            f"Unexpected field(s) {', '.join(f'`{name}`' for name in extra)} on `{node_type}` node",
            parameter_name=extra[0],
            parameter_value=data[extra[0]],
        )

    kwargs: dict[str, Any] = {}
    for name, node_field in allowed.items():
        if name not in data:
            if node_field.default is MISSING and node_field.default_factory is MISSING:
                raise InputError(f"Missing field `{name}` on `{node_type}` node", parameter_name=name)
            continue
        value = data[name]
        if name == "children":
            kwargs[name] = _deserialize_children(value, node_type)
        elif name == "footnotes":
            kwargs[name] = _deserialize_footnotes(value)
        elif name == "align":
            if not isinstance(value, list):
                raise InputError(
                    f"Expected `align` of `table` node to be a list, not `{value!r}`",
                    parameter_name="align",
                    parameter_value=value,
                )
            kwargs[name] = list(value)
        else:
            _check_scalar(node_type, name, value)
            kwargs[name] = value

    try:
        return node_class(**kwargs)
    except ValueError as e:
        raise InputError(f"Invalid `{node_type}` node: {e}", original_error=e) from e


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string.

    Parameters
    ----------
    node : Node
        The AST node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string representation

    """
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str) -> Node:
    """Deserialize a JSON string to an AST node.

    Parameters
    ----------
    json_str : str
        JSON string representation

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    InputError
        If the string is not valid JSON or does not describe a node
    UnknownTypeError
        If it contains an unknown node type

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON: {e}", original_error=e) from e

    logger.debug("Deserializing %s node from JSON", data.get("type") if isinstance(data, dict) else data)
    return dict_to_ast(data)


__all__ = ["ast_to_dict", "ast_to_json", "dict_to_ast", "json_to_ast"]
