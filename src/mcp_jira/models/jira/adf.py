"""
Atlassian Document Format (ADF) utilities.

Jira Cloud's REST API v3 only accepts rich text fields such as
``description`` as ADF documents. This module builds those documents from
plain text, checks caller supplied ones, and extracts text back out of them.
"""

import copy
from typing import Any

ADF_VERSION = 1

# Nodes whose children run inline; their text is concatenated, not split by lines
_INLINE_CONTAINERS = {"paragraph", "heading"}


def empty_adf_document() -> dict[str, Any]:
    """Return the canonical empty document: one paragraph with no content."""
    return {
        "type": "doc",
        "version": ADF_VERSION,
        "content": [{"type": "paragraph", "content": []}],
    }


def text_to_adf(text: str) -> dict[str, Any]:
    """Wrap plain text, verbatim, in a single paragraph document."""
    return {
        "type": "doc",
        "version": ADF_VERSION,
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": text}]}
        ],
    }


def is_valid_adf_nodes(nodes: Any) -> bool:
    """
    Check a list of ADF nodes recursively.

    Every node must be a dict with a non-empty string ``type``. A node may
    omit ``content``; when present it must be a list whose items pass the
    same check. An empty list is valid.

    Args:
        nodes: Candidate node list

    Returns:
        True if every node in the tree is well formed
    """
    if not isinstance(nodes, list):
        return False
    for node in nodes:
        if not isinstance(node, dict):
            return False
        node_type = node.get("type")
        if not isinstance(node_type, str) or not node_type:
            return False
        if "content" in node and not is_valid_adf_nodes(node["content"]):
            return False
    return True


def is_valid_adf_document(document: Any) -> bool:
    """Check for ``{"type": "doc", "version": 1, "content": [valid nodes]}``."""
    if not isinstance(document, dict):
        return False
    version = document.get("version")
    if isinstance(version, bool) or version != ADF_VERSION:
        return False
    return document.get("type") == "doc" and is_valid_adf_nodes(
        document.get("content")
    )


def to_adf(description: str | dict[str, Any] | None) -> dict[str, Any]:
    """
    Normalize a description into an ADF document.

    Strings become a single paragraph, well formed documents are copied
    as-is, and anything else (None, empty string, malformed documents)
    becomes the canonical empty document. Never raises; rejecting bad
    input is the job of the argument schemas.

    Args:
        description: Plain text, an ADF document, or None

    Returns:
        A new ADF document
    """
    if isinstance(description, str):
        return text_to_adf(description) if description else empty_adf_document()
    if is_valid_adf_document(description):
        return copy.deepcopy(description)
    return empty_adf_document()


def adf_to_text(adf_content: dict | list | str | None) -> str | None:
    """
    Convert ADF content to plain text.

    Block nodes are separated by newlines, the text nodes inside a
    paragraph or heading are joined directly.

    Args:
        adf_content: ADF document (dict), content list, string, or None

    Returns:
        Plain text string or None if no content
    """
    if adf_content is None:
        return None

    if isinstance(adf_content, str):
        return adf_content

    if isinstance(adf_content, list):
        texts = [text for text in (adf_to_text(item) for item in adf_content) if text]
        return "\n".join(texts) if texts else None

    if isinstance(adf_content, dict):
        node_type = adf_content.get("type")
        if node_type == "text":
            return adf_content.get("text", "")
        if node_type == "hardBreak":
            return "\n"
        if node_type == "mention":
            return adf_content.get("attrs", {}).get("text")

        content = adf_content.get("content")
        if not isinstance(content, list) or not content:
            return None
        if node_type in _INLINE_CONTAINERS:
            inline = "".join(adf_to_text(item) or "" for item in content)
            return inline or None
        return adf_to_text(content)

    return None
