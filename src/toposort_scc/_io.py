from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, ValidationError, model_validator

from ._errors import InvalidVertexError
from ._graph import IndexGraph
from ._mapped import MappedGraph

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ._result import Cycles, Sorted

logger = logging.getLogger(__name__)


class GraphDocumentError(Exception):
    """Error in a graph document."""


class GraphDocument(BaseModel):
    """A graph as written in a TOML or JSON document.

    Two forms are accepted, and a document must use exactly one of them:

    - Index form: `vertices` (optional, defaults to the length of
      `adjacency`), `adjacency` (one list of targets per vertex) and `edges`
      (extra ``[source, target]`` pairs appended after the adjacency lists).
    - Named form: `successors`, a table of node name to successor names.

    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    vertices: NonNegativeInt | None = None
    adjacency: list[list[NonNegativeInt]] | None = None
    edges: list[tuple[NonNegativeInt, NonNegativeInt]] = Field(default_factory=list)
    successors: dict[str, list[str]] | None = None

    @property
    def is_named(self) -> bool:
        return self.successors is not None

    @model_validator(mode="after")
    def check_form(self) -> Self:
        index_form = self.vertices is not None or self.adjacency is not None or bool(self.edges)
        if self.successors is not None and index_form:
            msg = "'successors' cannot be combined with 'vertices', 'adjacency' or 'edges'"
            raise ValueError(msg)
        if self.successors is None and not index_form:
            msg = "Graph document must define 'vertices', 'adjacency' or 'successors'"
            raise ValueError(msg)
        if self.vertices is not None and self.adjacency is not None and len(self.adjacency) > self.vertices:
            msg = f"'adjacency' lists {len(self.adjacency)} vertices but 'vertices' is {self.vertices}"
            raise ValueError(msg)
        return self

    def build(self) -> IndexGraph | MappedGraph[str]:
        """Build the graph described by this document.

        Raises:
            GraphDocumentError: If an edge refers to a vertex out of range.

        """
        if self.successors is not None:
            return MappedGraph.from_successors(self.successors)

        adjacency = self.adjacency or []
        count = self.vertices if self.vertices is not None else len(adjacency)
        graph = IndexGraph.with_vertices(count)
        try:
            for source, targets in enumerate(adjacency):
                for target in targets:
                    graph.add_edge(source, target)
            for source, target in self.edges:
                graph.add_edge(source, target)
        except InvalidVertexError as e:
            msg = f"Invalid edge in graph document: {e}"
            raise GraphDocumentError(msg) from e
        return graph


def parse_graph_document(data: Mapping[str, Any]) -> GraphDocument:
    """Validate already-decoded document data.

    Raises:
        GraphDocumentError: If the data does not describe a graph.

    """
    try:
        return GraphDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid graph document: {e}"
        raise GraphDocumentError(msg) from e


def load_graph_document(input_path: Path) -> GraphDocument:
    """Load a graph document from a `.toml` or `.json` file.

    Args:
        input_path: Path to the document.

    Returns:
        The validated document.

    Raises:
        GraphDocumentError: If the file cannot be decoded or validated.

    """
    suffix = input_path.suffix.lower()
    try:
        match suffix:
            case ".toml":
                with input_path.open("rb") as f:
                    data = tomllib.load(f)
            case ".json":
                with input_path.open("rb") as f:
                    data = json.load(f)
            case _:
                msg = f"Unsupported graph document format '{suffix}' (expected .toml or .json)"
                raise GraphDocumentError(msg)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Could not decode {input_path}: {e}"
        raise GraphDocumentError(msg) from e
    except OSError as e:
        msg = f"Could not read {input_path}: {e}"
        raise GraphDocumentError(msg) from e

    if not isinstance(data, dict):
        msg = f"Graph document {input_path} must contain a table at the top level"
        raise GraphDocumentError(msg)

    document = parse_graph_document(data)
    logger.debug(f"Loaded graph document from {input_path}")
    return document


def load_graph(input_path: Path) -> IndexGraph | MappedGraph[str]:
    """Load and build the graph stored in a document file."""
    return load_graph_document(input_path).build()


def result_to_dict(result: Sorted[Any] | Cycles[Any]) -> dict[str, Any]:
    """Convert a result to plain data suitable for TOML or JSON."""
    return result.to_dict()


def export_result_to_toml(result: Sorted[Any] | Cycles[Any], output_path: Path) -> None:
    """Write a result to a TOML file.

    Args:
        result: The result of `toposort_or_scc`.
        output_path: Path to the output TOML file.

    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(result_to_dict(result), f)
    logger.debug(f"Exported result to {output_path}")
