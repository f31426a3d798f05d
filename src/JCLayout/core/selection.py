from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

NULL_MARKER = 'null'


@dataclass(frozen=True)
class Selection:
    """The selected item: its container path, its index, and its property key if any."""
    path: str
    index: int
    property: Optional[str] = None

    def encode(self) -> str:
        return f"{self.path}_{self.index}_{self.property if self.property is not None else NULL_MARKER}"

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional[Selection]:
        """Reads ``path_index_property``. Returns None for empty or malformed text."""
        if not text:
            return None
        parts = text.split('_', 2)
        if len(parts) < 2 or not parts[1].isdigit():
            return None
        prop = parts[2] if len(parts) == 3 and parts[2] != NULL_MARKER else None
        return cls(path=parts[0], index=int(parts[1]), property=prop)
