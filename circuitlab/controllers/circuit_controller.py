"""
CircuitController - Turns user actions into circuit mutations.

This module contains no Qt dependencies. It owns the TopologyModel, runs
the wiring state machine, recomputes the whole circuit after every
electrical change, and notifies views of changes through an observer
pattern.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

from GUI.format_utils import parse_value, validate_property_value
from models.component import EDITABLE_FIELDS, ComponentKind, Terminal
from models.errors import InvalidEditError, SelfConnectionError
from models.topology import TopologyModel
from simulation.lumped_solver import CircuitSolution, solve_circuit
from simulation.render_state import RenderAttributes, WireRenderAttributes, project, project_wire

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    IDLE = "idle"
    AWAITING_SECOND_TERMINAL = "awaiting_second_terminal"


class CircuitController:
    """
    Controller for circuit editing and simulation.

    Manages the TopologyModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync and call
    get_render_state() after each circuit_solved event.

    Observer events:
        component_added (ComponentData) - A new component was placed
        component_removed (str) - A component was deleted (by ID)
        component_moved (ComponentData) - A component was moved
        component_edited (ComponentData) - An electrical property changed
        switch_toggled (ComponentData) - A switch opened or closed
        edit_rejected (InvalidEditError) - An edit was refused
        wire_added (WireData) - A new wire was connected
        wire_removed (str) - A wire was removed (by ID)
        wire_pending (tuple[str, Terminal]) - First terminal of a wire chosen
        wire_cancelled (None) - Pending wire abandoned
        wire_rejected (str) - Second terminal was on the same component
        circuit_cleared (None) - The entire circuit was cleared
        model_loaded (None) - Circuit replaced from saved data
        model_saved (None) - Circuit saved to file
        circuit_solved (CircuitSolution) - Currents and voltages recomputed
    """

    def __init__(self, model: Optional[TopologyModel] = None):
        self.model = model or TopologyModel()
        self._observers: list[Callable[[str, Any], None]] = []
        self.state = InteractionState.IDLE
        self.pending_terminal: Optional[tuple[str, Terminal]] = None
        self.last_solution = CircuitSolution()

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    # --- Simulation ---

    def recompute(self) -> CircuitSolution:
        """Run the full pipeline (adjacency, loops, solver) and notify views."""
        self.last_solution = solve_circuit(self.model.components, self.model.wires.values())
        self._notify('circuit_solved', self.last_solution)
        return self.last_solution

    def get_render_state(self, component_id: str) -> RenderAttributes:
        """
        Return the render attributes for a component.

        Raises:
            KeyError: If the component does not exist.
        """
        return project(self.model.components[component_id])

    def get_wire_render_state(self, wire_id: str) -> WireRenderAttributes:
        """
        Return the render attributes for a wire.

        Raises:
            KeyError: If the wire does not exist.
        """
        return project_wire(self.model.wires[wire_id], self.last_solution)

    def render_states(self) -> dict[str, RenderAttributes]:
        return {component_id: project(c) for component_id, c in self.model.components.items()}

    # --- Component operations ---

    def place_component(self, kind, position: tuple[float, float]) -> str:
        """
        Create a component with default properties and recompute.

        Returns:
            The new component's ID (R1, B1, SW1, ...).
        """
        component_id = self.model.add_component(kind, position)
        self._notify('component_added', self.model.components[component_id])
        self.recompute()
        return component_id

    def delete_component(self, component_id: str) -> None:
        """Remove a component and all connected wires. Unknown IDs are ignored."""
        if component_id not in self.model.components:
            return
        if self.pending_terminal and self.pending_terminal[0] == component_id:
            self.cancel_wire()

        for wire_id in self.model.remove_component(component_id):
            self._notify('wire_removed', wire_id)
        self._notify('component_removed', component_id)
        self.recompute()

    def move_component(self, component_id: str, position: tuple[float, float]) -> None:
        """Move a component. Position has no electrical meaning, so nothing is recomputed."""
        component = self.model.update_component(component_id, {"position": position})
        if component is None:
            return
        self._notify('component_moved', component)

    def edit_component(self, component_id: str, field: str, value) -> None:
        """
        Change an electrical property of a component and recompute.

        Accepts numbers or strings with SI prefixes ("4.7k", "9V").

        Raises:
            InvalidEditError: If the value is non-numeric or non-positive, or the
                field does not apply to this kind. The previous value is kept and
                nothing is recomputed.
        """
        component = self.model.get_component(component_id)
        if component is None:
            logger.warning("Ignoring edit of unknown component %s", component_id)
            return

        if component.kind not in EDITABLE_FIELDS.get(field, ()):
            self._reject_edit(InvalidEditError(component_id, field, value, f"not editable on a {component.kind.value}"))

        is_valid, message = validate_property_value(value, field)
        if not is_valid:
            self._reject_edit(InvalidEditError(component_id, field, value, message))

        self.model.update_component(component_id, {field: parse_value(value)})
        logger.info("Set %s.%s = %s", component_id, field, getattr(component, field))
        self._notify('component_edited', component)
        self.recompute()

    def _reject_edit(self, error: InvalidEditError) -> None:
        self._notify('edit_rejected', error)
        raise error

    def toggle_switch(self, component_id: str) -> None:
        """Open a closed switch or close an open one, then recompute."""
        component = self.model.get_component(component_id)
        if component is None or component.kind is not ComponentKind.SWITCH:
            logger.warning("Ignoring toggle of %s: not a switch", component_id)
            return

        self.model.update_component(component_id, {"closed": not component.closed})
        logger.info("Switch %s is now %s", component_id, "closed" if component.closed else "open")
        self._notify('switch_toggled', component)
        self.recompute()

    # --- Wire operations ---

    def begin_or_complete_wire(self, component_id: str, terminal) -> Optional[str]:
        """
        Handle a click on a component terminal.

        The first click remembers the terminal; the second, on a different
        component, connects the two and recomputes.

        Returns:
            The new wire ID when a wire was completed, otherwise None.

        Raises:
            SelfConnectionError: If the second click is on the component the
                wire started from. The pending wire is dropped.
        """
        terminal = Terminal(terminal)
        if component_id not in self.model.components:
            logger.warning("Ignoring terminal click on unknown component %s", component_id)
            return None

        if self.state is InteractionState.IDLE:
            self.pending_terminal = (component_id, terminal)
            self.state = InteractionState.AWAITING_SECOND_TERMINAL
            self._notify('wire_pending', self.pending_terminal)
            return None

        start_id, start_terminal = self.pending_terminal
        self.state = InteractionState.IDLE
        self.pending_terminal = None

        if start_id == component_id:
            self._notify('wire_rejected', component_id)
            raise SelfConnectionError(component_id)

        return self.connect(start_id, start_terminal, component_id, terminal)

    def cancel_wire(self) -> None:
        """Abandon a wire whose first terminal was chosen."""
        if self.state is InteractionState.IDLE:
            return
        self.state = InteractionState.IDLE
        self.pending_terminal = None
        self._notify('wire_cancelled', None)

    def connect(self, comp_a: str, terminal_a, comp_b: str, terminal_b) -> str:
        """Create a wire directly (bypassing the click state machine) and recompute."""
        wire_id = self.model.add_wire(comp_a, terminal_a, comp_b, terminal_b)
        self._notify('wire_added', self.model.wires[wire_id])
        self.recompute()
        return wire_id

    def delete_wire(self, wire_id: str) -> None:
        """Remove a wire by ID. Unknown IDs are ignored."""
        if self.model.remove_wire(wire_id):
            self._notify('wire_removed', wire_id)
            self.recompute()

    # --- Circuit operations ---

    def clear_circuit(self) -> None:
        """Clear the entire circuit."""
        self.cancel_wire()
        self.model.clear()
        self._notify('circuit_cleared', None)
        self.recompute()

    def load_model(self, data: dict) -> None:
        """
        Replace the circuit with saved data, in place, and recompute.

        The model object is kept so views holding a reference stay connected.
        """
        loaded = TopologyModel.from_dict(data)
        self.cancel_wire()
        self.model.clear()
        self.model.components.update(loaded.components)
        self.model.wires.update(loaded.wires)
        self.model.component_counter.update(loaded.component_counter)
        self.model.wire_counter = loaded.wire_counter
        self._notify('model_loaded', None)
        self.recompute()
