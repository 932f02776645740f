from typing import Protocol


class Port(Protocol):
    """Marker base for boundary contracts implemented outside the domain."""
