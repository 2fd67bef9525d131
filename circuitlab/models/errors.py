"""Exceptions raised by the circuit model and controllers."""


class CircuitError(Exception):
    """Base class for recoverable circuit editing errors."""

    pass


class SelfConnectionError(CircuitError):
    """Raised when a wire would connect a component to itself."""

    def __init__(self, component_id: str):
        self.component_id = component_id
        super().__init__(f"Cannot connect component '{component_id}' to itself.")


class InvalidEditError(CircuitError, ValueError):
    """Raised when an edit value is non-numeric, non-positive, or not applicable to the component."""

    def __init__(self, component_id: str, field: str, value, reason: str = ""):
        self.component_id = component_id
        self.field = field
        self.value = value
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid {field} {value!r} for '{component_id}'{detail}")


class MissingEndpointError(CircuitError, ValueError):
    """Raised when a wire references a component that does not exist."""

    def __init__(self, wire_id: str, component_id: str):
        self.wire_id = wire_id
        self.component_id = component_id
        super().__init__(f"Wire '{wire_id}' references unknown component '{component_id}'.")
