"""
WireData - Pure Python data model for breadboard wires.

Wires are ideal, zero-resistance conductors between two terminals. The
pair is unordered: a wire from A to B is the same connection as B to A.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WireData:
    """A wire connecting two terminals."""

    from_terminal_id: str
    to_terminal_id: str

    def get_terminals(self) -> tuple[str, str]:
        """Get both terminal ids for this wire."""
        return (self.from_terminal_id, self.to_terminal_id)

    def connects_terminal(self, terminal_id: str) -> bool:
        """Check if this wire touches the given terminal."""
        return terminal_id in (self.from_terminal_id, self.to_terminal_id)

    def same_connection(self, other: "WireData") -> bool:
        """True if both wires join the same pair of terminals, in any direction."""
        return {self.from_terminal_id, self.to_terminal_id} == {other.from_terminal_id, other.to_terminal_id}

    def to_dict(self) -> dict:
        """Serialize wire to the editor's connection format."""
        return {
            "fromNodeId": self.from_terminal_id,
            "toNodeId": self.to_terminal_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        return cls(
            from_terminal_id=data["fromNodeId"],
            to_terminal_id=data["toNodeId"],
        )

    def __repr__(self) -> str:
        return f"WireData({self.from_terminal_id} -> {self.to_terminal_id})"
