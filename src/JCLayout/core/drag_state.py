from enum import Enum, auto


class DragState(Enum):
    """Whether a drag gesture is currently in progress."""
    IDLE = auto()
    DRAGGING = auto()
