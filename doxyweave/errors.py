"""Exception hierarchy for parsing, linking and rendering Doxygen XML."""

from __future__ import annotations


class DoxyweaveError(Exception):
    """Base class for all fatal conversion errors."""


class ParseError(DoxyweaveError):
    """Raised when an XML node does not match the expected schema shape."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        element: str | None = None,
        expected: str | None = None,
        found: str | None = None,
    ) -> None:
        """Build a message naming the file, element and expected-vs-found shape."""
        self.path = path
        self.element = element
        self.expected = expected
        self.found = found
        parts = []
        if path:
            parts.append(path)
        if element:
            parts.append(f"<{element}>")
        parts.append(message)
        text = ": ".join(parts)
        if expected is not None or found is not None:
            text += f" (expected {expected or 'nothing'}, found {found or 'nothing'})"
        super().__init__(text)


class DanglingReferenceError(DoxyweaveError):
    """Raised when a refid listed by a compound does not resolve."""

    def __init__(self, owner_id: str, refid: str, reference: str) -> None:
        """Record the compound holding the reference and the missing target."""
        self.owner_id = owner_id
        self.refid = refid
        self.reference = reference
        super().__init__(
            f"{owner_id}: <{reference}> refers to '{refid}', "
            "which is not a known compound"
        )


class DuplicateParentError(DoxyweaveError):
    """Raised when two compounds both claim the same child."""

    def __init__(self, child_id: str, parent_id: str, new_parent_id: str) -> None:
        """Record the child and both claimed parents."""
        self.child_id = child_id
        self.parent_id = parent_id
        self.new_parent_id = new_parent_id
        super().__init__(
            f"{child_id}: already a child of '{parent_id}', "
            f"cannot also be a child of '{new_parent_id}'"
        )


class HierarchyCycleError(DoxyweaveError):
    """Raised when parent links loop back onto themselves."""

    def __init__(self, ids: list[str]) -> None:
        """Record the ids found on the cycle, in parent order."""
        self.ids = ids
        super().__init__("compound hierarchy contains a cycle: " + " -> ".join(ids))


class PrefixMismatchError(DoxyweaveError):
    """Raised when a child's qualified name is not nested in its parent's name."""

    def __init__(
        self,
        child_id: str,
        child_name: str,
        parent_id: str,
        parent_name: str,
        separator: str,
    ) -> None:
        """Record both compounds and the separator used to join their names."""
        self.child_id = child_id
        self.child_name = child_name
        self.parent_id = parent_id
        self.parent_name = parent_name
        self.separator = separator
        super().__init__(
            f"{child_id}: name '{child_name}' does not start with "
            f"'{parent_name}{separator}' of parent '{parent_id}'"
        )


class DuplicateCompoundError(DoxyweaveError):
    """Raised when the same id is added twice to a collection."""


class CompoundNotFoundError(DoxyweaveError, KeyError):
    """Raised when a collection lookup misses."""

    def __str__(self) -> str:
        """Return the plain message instead of the KeyError repr."""
        return str(self.args[0]) if self.args else ""


class MissingRendererError(DoxyweaveError):
    """Raised when no renderer is registered for a node type."""

    def __init__(self, node_type: type, channel: str) -> None:
        """Record the node type and the channel that was requested."""
        self.node_type = node_type
        self.channel = channel
        super().__init__(f"no {channel} renderer registered for {node_type.__name__}")


class ConfigError(DoxyweaveError):
    """Raised when a configuration value is invalid."""
