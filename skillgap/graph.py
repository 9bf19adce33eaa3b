"""In-memory skill graph backed by a frozen networkx MultiDiGraph."""

from __future__ import annotations

import threading
from typing import Iterable, Iterator, Literal, NamedTuple

import networkx as nx
import structlog

from skillgap.errors import GraphIntegrityWarning, ValidationError
from skillgap.models import RelationKind, Skill, SkillRelation

logger = structlog.get_logger()

Direction = Literal["out", "in"]

CYCLE_KINDS = frozenset({RelationKind.PREREQUISITE, RelationKind.BUILDS_ON})


class Neighbor(NamedTuple):
    skill_id: str
    kind: RelationKind
    strength: float


class SkillGraph:
    """Read-only adjacency over skills, addressed by skill id.

    Build with `SkillGraph.load`; the underlying graph is frozen, so one
    instance can be shared by any number of concurrent analysis runs.
    """

    def __init__(self, graph: nx.MultiDiGraph):
        self._graph = nx.freeze(graph)
        self.warnings: tuple[GraphIntegrityWarning, ...] = ()
        self.cycle_kinds: frozenset[RelationKind] = frozenset()

    @classmethod
    def load(
        cls,
        skills: Iterable[Skill],
        relations: Iterable[SkillRelation],
        cycle_kinds: Iterable[RelationKind] = CYCLE_KINDS,
    ) -> SkillGraph:
        g = nx.MultiDiGraph()
        for skill in skills:
            if skill.id in g:
                raise ValidationError(f"Duplicate skill id in catalog: {skill.id}")
            g.add_node(skill.id, skill=skill)

        for rel in relations:
            for ref in (rel.from_id, rel.to_id):
                if ref not in g:
                    raise ValidationError(f"Relation references unknown skill: {ref}")
            if rel.from_id == rel.to_id:
                raise ValidationError(f"Self-loop relation on skill: {rel.from_id}")
            try:
                kind = RelationKind(rel.kind)
            except ValueError:
                raise ValidationError(f"Unknown relation kind: {rel.kind!r}")
            if not 0.0 <= rel.strength <= 1.0:
                raise ValidationError(
                    f"Relation strength must be in [0, 1], got {rel.strength} "
                    f"for {rel.from_id} -> {rel.to_id}"
                )
            g.add_edge(rel.from_id, rel.to_id, kind=kind, strength=float(rel.strength))

        graph = cls(g)
        graph.cycle_kinds = frozenset(RelationKind(kind) for kind in cycle_kinds)
        graph.warnings = tuple(graph._detect_cycles(graph.cycle_kinds))
        for warning in graph.warnings:
            logger.warning(
                "skill_graph.cycle_detected",
                from_id=warning.from_id,
                to_id=warning.to_id,
                kind=warning.kind,
            )
        logger.debug(
            "skill_graph.loaded",
            skills=g.number_of_nodes(),
            relations=g.number_of_edges(),
        )
        return graph

    def _detect_cycles(self, kinds: frozenset[RelationKind]) -> list[GraphIntegrityWarning]:
        """Every propagation edge inside a strongly connected component lies on a cycle."""
        view = nx.subgraph_view(
            self._graph,
            filter_edge=lambda u, v, k: self._graph.edges[u, v, k]["kind"] in kinds,
        )
        component_of: dict[str, int] = {}
        for index, component in enumerate(nx.strongly_connected_components(view)):
            if len(component) > 1:
                for skill_id in component:
                    component_of[skill_id] = index

        found: list[GraphIntegrityWarning] = []
        for u, v, data in view.edges(data=True):
            if u in component_of and component_of[u] == component_of.get(v):
                found.append(GraphIntegrityWarning(u, v, str(data["kind"])))
        return found

    @property
    def relation_count(self) -> int:
        return self._graph.number_of_edges()

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def skill(self, skill_id: str) -> Skill:
        if skill_id not in self._graph:
            raise ValidationError(f"Unknown skill: {skill_id}")
        return self._graph.nodes[skill_id]["skill"]

    def skills(self) -> Iterator[Skill]:
        return (data["skill"] for _, data in self._graph.nodes(data=True))

    def neighbors(self, skill_id: str, direction: Direction = "out") -> Iterator[Neighbor]:
        """Lazily yield (related_id, kind, strength) in insertion order.

        Each call starts a fresh pass over the edge index.
        """
        if skill_id not in self._graph:
            raise ValidationError(f"Unknown skill: {skill_id}")
        if direction == "out":
            return (
                Neighbor(v, data["kind"], data["strength"])
                for _, v, data in self._graph.out_edges(skill_id, data=True)
            )
        if direction == "in":
            return (
                Neighbor(u, data["kind"], data["strength"])
                for u, _, data in self._graph.in_edges(skill_id, data=True)
            )
        raise ValueError(f"direction must be 'out' or 'in', got {direction!r}")


class GraphSnapshot:
    """Holds the current graph and swaps in a new one on refresh.

    Readers take `current` once per run and keep that reference; refresh
    never mutates a graph that a run may be holding.
    """

    def __init__(
        self,
        graph: SkillGraph | None = None,
        cycle_kinds: Iterable[RelationKind] = CYCLE_KINDS,
    ):
        self._graph = graph
        self._cycle_kinds = frozenset(cycle_kinds)
        self._lock = threading.Lock()
        self.version = 0 if graph is None else 1

    @property
    def current(self) -> SkillGraph:
        graph = self._graph
        if graph is None:
            raise RuntimeError("No skill graph loaded yet; call refresh() first")
        return graph

    def refresh(self, skills: Iterable[Skill], relations: Iterable[SkillRelation]) -> SkillGraph:
        graph = SkillGraph.load(skills, relations, cycle_kinds=self._cycle_kinds)
        with self._lock:
            self._graph = graph
            self.version += 1
            version = self.version
        logger.info(
            "skill_graph.refreshed",
            version=version,
            skills=len(graph),
            relations=graph.relation_count,
        )
        return graph
