"""Bounded descendant tree construction."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .config import FilterMode, check_generations
from .records import NodeData, PersonRecord, Sex

log = logging.getLogger(__name__)


@dataclass(eq=False)
class Node:
    data: NodeData
    children: List["Node"] = field(default_factory=list)
    is_direct_line1: bool = False
    is_direct_line2: bool = False

    @property
    def id(self) -> int:
        return self.data.id

    @property
    def generation(self) -> int:
        return self.data.generation

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator["Node"]:
        """Yield the node and all its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_json(self) -> Dict[str, Any]:
        data = self.data.to_json()
        data["isDirectLine1"] = self.is_direct_line1
        data["isDirectLine2"] = self.is_direct_line2
        result: Dict[str, Any] = {"data": data}
        if self.children:
            result["children"] = [child.to_json() for child in self.children]
        return result

    @classmethod
    def from_json(cls, datum: Dict[str, Any]) -> "Node":
        data = datum.get("data") or {}
        return cls(
            data=NodeData.from_json(data),
            children=[cls.from_json(child) for child in datum.get("children") or []],
            is_direct_line1=bool(data.get("isDirectLine1", False)),
            is_direct_line2=bool(data.get("isDirectLine2", False)),
        )


class TreeBuilder:
    """Build the descendant tree of a person, one generation per ring."""

    def __init__(
        self,
        max_generations: int,
        filter_mode: FilterMode = FilterMode.ALL,
        direct_lines: Tuple[Optional[str], Optional[str]] = (None, None),
        locale: str = "de",
    ):
        self.max_generations = check_generations(max_generations)
        self.filter_mode = filter_mode
        self.direct_lines = tuple(direct_lines)
        self.locale = locale

    def build(self, root: Optional[PersonRecord]) -> Optional[Node]:
        # ids restart with every build, so builds are independent of each other
        ids = itertools.count(1)
        node = self._build(root, 1, ids)
        if node is not None and log.isEnabledFor(logging.DEBUG):
            log.debug(
                "built descendant tree of %s with %d nodes",
                root.xref,
                sum(1 for _ in node.walk()),
            )
        return node

    def _build(
        self, person: Optional[PersonRecord], generation: int, ids: Iterator[int]
    ) -> Optional[Node]:
        # Maximum generation reached
        if person is None or generation > self.max_generations:
            return None

        node = Node(NodeData.from_record(person, generation, next(ids), self.locale))
        node.is_direct_line1 = bool(self.direct_lines[0]) and person.xref == self.direct_lines[0]
        node.is_direct_line2 = bool(self.direct_lines[1]) and person.xref == self.direct_lines[1]

        for child in self.children(person, generation):
            child_node = self._build(child, generation + 1, ids)
            if child_node is None:
                continue

            node.children.append(child_node)
            node.is_direct_line1 = node.is_direct_line1 or child_node.is_direct_line1
            node.is_direct_line2 = node.is_direct_line2 or child_node.is_direct_line2

        return node

    def children(self, person: PersonRecord, generation: int) -> List[PersonRecord]:
        """Children of a person that the current filter mode lets into the tree."""
        children = person.children()

        # The root person is never filtered
        if generation <= 1 or self.filter_mode is FilterMode.ALL:
            return children

        if self.filter_mode is FilterMode.ONLY_MALE:
            return [] if person.sex is Sex.FEMALE else children

        if self.filter_mode is FilterMode.ONLY_FEMALE:
            return [] if person.sex is Sex.MALE else children

        if self.filter_mode is FilterMode.ONLY_MALE_PLUS:
            if person.sex is not Sex.FEMALE:
                return children
            family_name = set(person.last_names)
            return [child for child in children if set(child.last_names) == family_name]

        raise ValueError(f"unknown filter mode {self.filter_mode!r}")
