"""Elision and body formatting rules applied while building tape nodes.

Null scalars, empty sequences and empty mappings are never written:
absence in a tape means null or empty. Bodies that cannot be written as
a single plain line are switched to literal block style so multi-line
payloads stay readable and diff well.
"""

from __future__ import annotations

import re

import yaml

NULL_TAG = "tag:yaml.org,2002:null"
STR_TAG = "tag:yaml.org,2002:str"
BINARY_TAG = "tag:yaml.org,2002:binary"

LITERAL_STYLE = "|"

# First characters that make a plain scalar mean something else.
_INDICATORS = frozenset("-?:,[]{}#&*!|>'\"%@`")
_AMBIGUOUS = re.compile(r": |\s#|:$")
_RESOLVER = yaml.resolver.Resolver()


def null_node() -> yaml.ScalarNode:
    return yaml.ScalarNode(NULL_TAG, "null")


def is_elided(node: yaml.Node) -> bool:
    """True if node is a null scalar, an empty sequence or an empty mapping."""
    if isinstance(node, yaml.ScalarNode):
        return node.tag == NULL_TAG
    if isinstance(node, (yaml.SequenceNode, yaml.MappingNode)):
        return not node.value
    return False


def is_plain(text: str) -> bool:
    """True if text would be written and read back as a single plain scalar."""
    if not text or text != text.strip():
        return False
    if "\n" in text or "\r" in text or not text.isprintable():
        return False
    if text[0] in _INDICATORS or _AMBIGUOUS.search(text):
        return False
    # "true", "12", "~" and friends would come back as something else.
    return _RESOLVER.resolve(yaml.ScalarNode, text, (True, False)) == STR_TAG


def format_body(node: yaml.Node) -> yaml.Node:
    """Return the node to write for a body value.

    String bodies that are not plain, and binary bodies, get literal
    block style. Everything else is returned untouched with its default
    style.
    """
    if not isinstance(node, yaml.ScalarNode):
        return node
    if node.tag == BINARY_TAG or (node.tag == STR_TAG and not is_plain(node.value)):
        return yaml.ScalarNode(node.tag, node.value, style=LITERAL_STYLE)
    return node
