"""Positions in a module body and the replacements applied to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from es2yui.nodes import Expression, Node, Statement


@dataclass
class NodePath:
    """A statement's position inside a statement list."""

    container: list[Statement]
    index: int

    @property
    def node(self) -> Statement:
        return self.container[self.index]


@dataclass
class ReferencePath:
    """An identifier held in attribute `attr` of `owner`."""

    owner: Node
    attr: str

    @property
    def node(self) -> Expression:
        return getattr(self.owner, self.attr)

    def replace(self, expression: Expression) -> None:
        setattr(self.owner, self.attr, expression)


@dataclass
class Replacement:
    """Replace the statement at `path` with `nodes` (possibly none)."""

    path: NodePath
    nodes: list[Statement]

    @classmethod
    def swaps(cls, path: NodePath, nodes: list[Statement]) -> Replacement:
        return cls(path, list(nodes))

    @classmethod
    def removes(cls, path: NodePath) -> Replacement:
        return cls(path, [])

    def apply(self) -> None:
        """Splice the replacement into the container.

        Applying a replacement shifts the indices of later statements, so a
        batch must be applied from the last position to the first.
        """
        index = self.path.index
        self.path.container[index : index + 1] = self.nodes
