"""Issue type detection from conventional-commit style titles."""

from __future__ import annotations

import threading

DEFAULT_PREFIXES = {
    "feat": "Feature",
    "bug": "Bug",
    "docs": "Docs",
    "blog": "Blog",
    "interrupt": "Interrupt",
    "spike": "Spike",
    "chore": "Chore",
}


class TypeMapping:
    """Maps title prefixes to type labels, and type labels to issue type ids.

    ``prefix_to_type`` is fixed at construction. ``type_to_id`` starts empty
    and is filled once the organization's issue types have been looked up.
    """

    def __init__(self, prefix_to_type: dict[str, str] | None = None) -> None:
        self.prefix_to_type = dict(DEFAULT_PREFIXES if prefix_to_type is None else prefix_to_type)
        self.type_to_id: dict[str, str] = {}
        self._lock = threading.Lock()

    def get_type_from_title(self, title: str) -> tuple[str, bool]:
        """Detect the type label from a title such as ``feat(api): add x``.

        Args:
            title: Issue or pull request title.

        Returns:
            Tuple of (type label, matched). The label is empty when unmatched.
        """
        colon_index = title.find(":")
        if colon_index == -1:
            return "", False

        prefix = title[:colon_index].strip()

        # Drop a conventional-commit scope: "feat(api)" -> "feat"
        paren_index = prefix.find("(")
        if paren_index != -1:
            prefix = prefix[:paren_index].strip()

        type_name = self.prefix_to_type.get(prefix.lower())
        if type_name is None:
            return "", False
        return type_name, True

    def set_type_id(self, type_name: str, type_id: str) -> None:
        """Record the issue type id for a label. Last write wins."""
        with self._lock:
            self.type_to_id[type_name] = type_id

    def get_type_id(self, type_name: str) -> tuple[str, bool]:
        """Look up the issue type id for a label.

        Returns:
            Tuple of (id, found). The id is empty when not found.
        """
        type_id = self.type_to_id.get(type_name)
        if type_id is None:
            return "", False
        return type_id, True
