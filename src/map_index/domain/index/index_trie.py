"""
Prefix index over location names.

Keys are cleaned names: everything but ASCII letters and spaces is dropped, then
the rest is lowercased. Several source names may share one cleaned key, so each
terminal node keeps every original name it was given.
"""

import re
from dataclasses import dataclass, field

_NOT_LETTER_OR_SPACE = re.compile(r"[^a-zA-Z ]")


def clean_name(s: str) -> str:
    return _NOT_LETTER_OR_SPACE.sub("", s).lower()


@dataclass
class TrieNode:
    exists: bool = False
    links: dict[str, "TrieNode"] = field(default_factory=dict)
    full_names: list[str] = field(default_factory=list)
    ids: set[int] = field(default_factory=set)


class PrefixIndex:
    def __init__(self):
        self.root = TrieNode()

    def insert(self, name: str, vertex_id: int) -> None:
        node = self.root
        for ch in clean_name(name):
            node = node.links.setdefault(ch, TrieNode())
        node.exists = True
        node.full_names.append(name)
        node.ids.add(vertex_id)

    def find_exact(self, cleaned: str) -> TrieNode | None:
        """Walk an already-cleaned key; None if the path is missing."""
        node = self.root
        for ch in cleaned:
            node = node.links.get(ch)
            if node is None:
                return None
        return node

    def find_by_prefix(self, prefix: str) -> list[str]:
        node = self.find_exact(clean_name(prefix))
        if node is None:
            return []
        return list(self._collect(node))

    @staticmethod
    def _collect(start: TrieNode) -> dict[str, None]:
        # explicit stack; dict keeps first-seen order while de-duplicating
        out: dict[str, None] = {}
        stack = [start]
        while stack:
            node = stack.pop()
            if node.exists:
                out.update(dict.fromkeys(node.full_names))
            stack.extend(reversed(node.links.values()))
        return out
