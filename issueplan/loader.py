"""Load issue graphs from JSON or YAML documents."""

from typing import Any, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError

from issueplan.exceptions import GraphNotFoundError, GraphParseError, GraphSchemaError
from issueplan.graph import GraphModel
from issueplan.models import DependencyEdge, IssueNode, IssueStatus, Priority
from issueplan.utils.config_loader import load_yaml_with_env
from issueplan.utils.logging import get_logger


class IssueRecord(IssueNode):
    """Issue as written in a graph document.

    Documents must state priority, effort and status explicitly, and unknown
    keys are rejected so a misspelled field cannot fall back to a default.
    """

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    priority: Priority = Field(description="Priority class")
    effort: float = Field(ge=0, description="Estimated effort (e.g. hours)")
    status: IssueStatus = Field(description="Lifecycle state")


class EdgeRecord(DependencyEdge):
    """Edge as written in a graph document; unknown keys are rejected."""

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}


class GraphDocument(BaseModel):
    """Issue and edge records read from a graph document."""

    model_config = {"frozen": True}

    nodes: Tuple[IssueNode, ...] = ()
    edges: Tuple[DependencyEdge, ...] = ()

    def build(self) -> GraphModel:
        return GraphModel.build(self.nodes, self.edges)


def _format_validation_error(kind: str, index: int, error: ValidationError) -> List[str]:
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or kind
        messages.append(f"{kind} at index {index}: {location}: {detail['msg']}")
    return messages


def parse_graph(data: Any, path: Optional[str] = None) -> GraphDocument:
    """Validate raw ``{"nodes": [...], "edges": [...]}`` data.

    Every bad record is reported, not just the first one.

    Raises:
        GraphSchemaError: If the document shape or any record is invalid
    """
    if not isinstance(data, dict):
        raise GraphSchemaError(["Graph must be an object"], path=path)

    errors: List[str] = []
    raw_nodes = data.get("nodes")
    raw_edges = data.get("edges", [])

    if not isinstance(raw_nodes, list):
        errors.append('Missing or invalid "nodes" array')
    if not isinstance(raw_edges, list):
        errors.append('Missing or invalid "edges" array')
    if errors:
        raise GraphSchemaError(errors, path=path)

    nodes: List[IssueNode] = []
    for index, raw in enumerate(raw_nodes):
        try:
            nodes.append(IssueRecord.model_validate(raw))
        except ValidationError as e:
            errors.extend(_format_validation_error("Node", index, e))

    edges: List[DependencyEdge] = []
    for index, raw in enumerate(raw_edges):
        try:
            edges.append(EdgeRecord.model_validate(raw))
        except ValidationError as e:
            errors.extend(_format_validation_error("Edge", index, e))

    if errors:
        raise GraphSchemaError(errors, path=path)

    return GraphDocument(nodes=tuple(nodes), edges=tuple(edges))


def load_graph(path: str) -> GraphDocument:
    """Read a graph document from disk.

    Args:
        path: ``.json``, ``.yaml`` or ``.yml`` file; ``${VAR}`` placeholders
            are substituted from the environment

    Returns:
        GraphDocument ready for ``build()``

    Raises:
        GraphNotFoundError: If the file does not exist
        GraphParseError: If the file cannot be read or is not valid JSON/YAML
        GraphSchemaError: If records are invalid
    """
    logger = get_logger()
    try:
        data = load_yaml_with_env(path)
    except FileNotFoundError as e:
        raise GraphNotFoundError(path) from e
    except (yaml.YAMLError, ValueError) as e:
        raise GraphParseError(path, str(e)) from e
    except OSError as e:
        raise GraphParseError(path, str(e)) from e

    document = parse_graph(data, path=path)
    logger.info(
        "Dependency graph loaded",
        path=path,
        nodes=len(document.nodes),
        edges=len(document.edges),
    )
    return document
