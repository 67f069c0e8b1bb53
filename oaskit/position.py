"""Positions of values inside parsed YAML/JSON documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import yaml


@dataclass(frozen=True)
class Position:
    """A value position: 1-based line and column plus the node it came from."""

    line: int = 0
    column: int = 0
    node: Optional[yaml.Node] = None

    @classmethod
    def from_node(cls, node: yaml.Node) -> Position:
        """Build the position of the given node."""
        mark = node.start_mark
        return cls(line=mark.line + 1, column=mark.column + 1, node=node)

    def _mapping(self) -> Optional[list]:
        node = self.node
        if not isinstance(node, yaml.MappingNode) or not node.value:
            return None
        return node.value

    def key(self, key: str) -> Position:
        """Position of the key node for ``key``.

        Returns the parent when the key is missing, and an empty position
        when the parent is not a non-empty mapping.
        """
        pairs = self._mapping()
        if pairs is None:
            return Position()
        for key_node, _ in pairs:
            if getattr(key_node, "value", None) == key:
                return Position.from_node(key_node)
        return self

    def field(self, key: str) -> Position:
        """Position of the value node for ``key``.

        Returns the parent when the key is missing, and an empty position
        when the parent is not a non-empty mapping.
        """
        pairs = self._mapping()
        if pairs is None:
            return Position()
        for key_node, value_node in pairs:
            if getattr(key_node, "value", None) == key:
                return Position.from_node(value_node)
        return self

    def index(self, idx: int) -> Position:
        """Position of the sequence item at ``idx``, or the parent if there is none."""
        node = self.node
        if not isinstance(node, yaml.SequenceNode):
            return self
        if not 0 <= idx < len(node.value):
            return self
        return Position.from_node(node.value[idx])

    def __str__(self) -> str:
        line, column = self.line, self.column
        if self.node is not None:
            mark = self.node.start_mark
            line, column = mark.line + 1, mark.column + 1
        if column == 0:
            return str(line)
        return f"{line}:{column}"

    def with_filename(self, filename: str) -> str:
        """Render the position prefixed by ``filename:`` when a name is given."""
        if filename:
            filename += ":"
        return filename + str(self)


@dataclass
class Locator:
    """Holds an optional position of a spec value."""

    position: Optional[Position] = None

    @classmethod
    def from_node(cls, node: yaml.Node) -> Locator:
        """Build a locator set to the given node's position."""
        return cls(Position.from_node(node))

    @property
    def is_set(self) -> bool:
        return self.position is not None

    def set_position(self, position: Position) -> None:
        """Set the position."""
        self.position = position

    def key(self, key: str) -> Locator:
        """Locator of the key node for ``key``; unset if this one is unset."""
        if self.position is None:
            return Locator()
        return Locator(self.position.key(key))

    def field(self, key: str) -> Locator:
        """Locator of the value node for ``key``; unset if this one is unset."""
        if self.position is None:
            return Locator()
        return Locator(self.position.field(key))

    def index(self, idx: int) -> Locator:
        """Locator of the sequence item at ``idx``; unset if this one is unset."""
        if self.position is None:
            return Locator()
        return Locator(self.position.index(idx))