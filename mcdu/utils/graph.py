"""Minimal labeled directed graph.

Vertices are stored by id in one map, outgoing edges in another as
``(neighbor_id, edge_data)`` pairs. When edge data is a bool it marks whether
the edge points at the vertex's parent, which lets a tree stored here be
walked upwards without a second index:

    g = Graph()
    g.new_vertex(0, "root")
    g.new_vertex(1, "child")
    g.push_edge(0, 1, False)   # parent -> child
    g.push_edge(1, 0, True)    # child -> parent
    g.get_parent(1)            # 0

Lookups of unknown ids return None; nothing here raises on absence. No cycle
detection is performed, callers own the shape of what they build.
"""
from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

VId = TypeVar("VId", bound=Hashable)
V = TypeVar("V")
E = TypeVar("E")


class Graph(Generic[VId, V, E]):
    __slots__ = ("vertices", "adjacency")

    def __init__(self) -> None:
        self.vertices: dict[VId, V] = {}
        self.adjacency: dict[VId, list[tuple[VId, E]]] = {}

    def new_vertex(self, vid: VId, vertex: V) -> None:
        """Insert a vertex, replacing any payload already stored under ``vid``."""
        self.vertices[vid] = vertex

    def push_edge(self, src: VId, dst: VId, edge_data: E) -> None:
        self.adjacency.setdefault(src, []).append((dst, edge_data))

    def get_vertex(self, vid: VId) -> V | None:
        return self.vertices.get(vid)

    def get_vertex_mutable(self, vid: VId) -> V | None:
        # Payloads are returned by reference; the separate name mirrors the
        # read-only accessor so call sites document intent.
        return self.vertices.get(vid)

    def edges(self, vid: VId) -> list[tuple[VId, E]]:
        return list(self.adjacency.get(vid, ()))

    def children(self, vid: VId) -> Iterator[VId]:
        """Ids reached over edges not flagged as parent edges."""
        for neighbor, data in self.adjacency.get(vid, ()):
            if data is not True:
                yield neighbor

    def get_parent(self, vid: VId) -> VId | None:
        for neighbor, is_parent in self.adjacency.get(vid, ()):
            if is_parent is True:
                return neighbor
        return None

    def __contains__(self, vid: object) -> bool:
        return vid in self.vertices

    def __len__(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        edge_count = sum(len(v) for v in self.adjacency.values())
        return f"Graph(vertices={len(self.vertices)}, edges={edge_count})"


__all__ = ["Graph"]
