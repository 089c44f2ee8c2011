"""Custom exceptions for issueplan."""

from typing import List, Optional, Sequence


class IssuePlanException(Exception):
    """Base exception for all issueplan errors."""
    pass


class StructuralError(IssuePlanException):
    """Graph input is malformed (dangling edge, duplicate id, self-loop)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        return f"✗ Structural error: {self.message}"


class DanglingEdgeError(StructuralError):
    """An edge endpoint references a node that is not in the graph."""

    def __init__(self, from_id: str, to_id: str, missing_id: str):
        self.from_id = from_id
        self.to_id = to_id
        self.missing_id = missing_id
        super().__init__(
            f"Edge '{from_id}' -> '{to_id}' references unknown issue '{missing_id}'"
        )


class DuplicateNodeError(StructuralError):
    """Two nodes share the same id."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Duplicate issue id '{node_id}'")


class SelfLoopError(StructuralError):
    """An edge points from a node to itself."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Issue '{node_id}' cannot depend on itself")


class CycleError(IssuePlanException):
    """Dependency graph contains a cycle."""

    def __init__(self, cycle: Sequence[str], message: str = "Circular dependency detected"):
        self.message = message
        self.cycle = list(cycle)
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format cycle error."""
        parts = [f"✗ Dependency error: {self.message}"]

        if self.cycle:
            parts.append("\n  Cycle detected: " + " → ".join(self.cycle))

        return "".join(parts)


class IssueNotFoundError(IssuePlanException):
    """Lookup of an issue id that is not in the graph."""

    def __init__(self, issue_id: str, operation: Optional[str] = None):
        self.issue_id = issue_id
        self.operation = operation
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        message = f"✗ Issue not found: {self.issue_id}"
        if self.operation:
            message += f" (during {self.operation})"
        return message


class GraphLoadError(IssuePlanException):
    """Base class for failures while loading a graph document."""
    pass


class GraphNotFoundError(GraphLoadError):
    """Graph document does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"✗ Dependency graph file not found: {path}")


class GraphParseError(GraphLoadError):
    """Graph document could not be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"✗ Failed to parse dependency graph: {path}\n  Reason: {reason}")


class GraphSchemaError(GraphLoadError):
    """Graph document parsed but its records are invalid."""

    def __init__(self, errors: List[str], path: Optional[str] = None):
        self.errors = errors
        self.path = path
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format schema error with one line per failure."""
        parts = ["✗ Invalid dependency graph"]
        if self.path:
            parts.append(f"\n  File: {self.path}")
        parts.append("\n\n  Failures:")
        for error in self.errors:
            parts.append(f"\n    • {error}")
        return "".join(parts)
