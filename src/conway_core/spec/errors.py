"""
Error types
===========

TopologyError        - an operator emitted inconsistent topology. Fatal.
VertexIndexExhausted - the 32-bit output index space is full. Recoverable.
NotationError        - malformed operator notation. Reported to the caller.

Parameter validation elsewhere raises plain ValueError.
"""


class TopologyError(RuntimeError):
    """Internal inconsistency in the edges an operator fed to a Builder."""


class VertexIndexExhausted(OverflowError):
    """More vertices were registered than the output index type can address."""

    def __init__(self, limit: int):
        super().__init__(f"Vertex index space exhausted: limit is {limit} vertices")
        self.limit = limit


class NotationError(ValueError):
    """Operator notation could not be parsed. Nothing was applied."""

    def __init__(self, message: str, text: str, position: int):
        super().__init__(f"{message} at position {position} in {text!r}")
        self.text = text
        self.position = position
