from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file_path, "line": self.line, "column": self.column}


def location_of(file_path: Optional[str], node: Any) -> SourceLocation:
    """Create a SourceLocation from an ``ast`` node (which carries 0-based columns)."""
    line = getattr(node, "lineno", None)
    col = getattr(node, "col_offset", None)
    return SourceLocation(
        file_path=file_path,
        line=line,
        column=col + 1 if col is not None else None,
    )
