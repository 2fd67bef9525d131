"""
WireData - Pure Python data model for circuit wires.

This module contains no Qt dependencies. A wire joins two distinct
components at named terminal slots; several wires may share a terminal.
"""

from dataclasses import dataclass
from typing import Optional

from .component import Terminal


@dataclass
class WireData:
    """
    Pure Python data class representing a wire connection between two component terminals.
    """

    wire_id: str
    start_component_id: str
    start_terminal: Terminal
    end_component_id: str
    end_terminal: Terminal

    def __post_init__(self):
        self.start_terminal = Terminal(self.start_terminal)
        self.end_terminal = Terminal(self.end_terminal)

    def get_terminals(self) -> list[tuple[str, Terminal]]:
        """
        Get both terminal identifiers for this wire.

        Returns:
            List of two (component_id, terminal) tuples.
        """
        return [(self.start_component_id, self.start_terminal), (self.end_component_id, self.end_terminal)]

    def connects_component(self, component_id: str) -> bool:
        """Check if this wire connects to the given component."""
        return self.start_component_id == component_id or self.end_component_id == component_id

    def connects_terminal(self, component_id: str, terminal) -> bool:
        """Check if this wire connects to the given terminal."""
        terminal = Terminal(terminal)
        return (self.start_component_id == component_id and self.start_terminal == terminal) or (
            self.end_component_id == component_id and self.end_terminal == terminal
        )

    def other_end(self, component_id: str) -> Optional[str]:
        """Return the component on the far side of this wire, or None if not attached."""
        if self.start_component_id == component_id:
            return self.end_component_id
        if self.end_component_id == component_id:
            return self.start_component_id
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.wire_id,
            "start_comp": self.start_component_id,
            "start_term": self.start_terminal.value,
            "end_comp": self.end_component_id,
            "end_term": self.end_terminal.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        return cls(
            wire_id=data["id"],
            start_component_id=data["start_comp"],
            start_terminal=data["start_term"],
            end_component_id=data["end_comp"],
            end_terminal=data["end_term"],
        )

    def __repr__(self) -> str:
        return (
            f"WireData({self.wire_id}: {self.start_component_id}[{self.start_terminal.value}] -> "
            f"{self.end_component_id}[{self.end_terminal.value}])"
        )
