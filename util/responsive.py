from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Column:
    """Table column sized by a fixed length, a share of the width, or the remainder.

    A column with neither ``length`` nor ``percent`` fills what is left.
    """
    name: str
    length: Optional[int] = None
    percent: Optional[int] = None
    align: str = "left"


@dataclass
class ColumnLayout:
    """Responsive table layout definition."""
    columns: List[Column]
    spacing: int = 1
    gutter: int = 0

    @property
    def names(self) -> List[str]:
        return [c.name for c in self.columns]

    def calculate_widths(self, term_width: int) -> Dict[str, int]:
        """Compute column widths that fit into the terminal.

        Fixed and percentage columns are granted first, in order, until the
        width runs out; fill columns split whatever remains.
        """
        separators = self.spacing * max(0, len(self.columns) - 1)
        usable_width = max(0, term_width - self.gutter - separators)
        widths: Dict[str, int] = {}
        remaining = usable_width
        fill_cols: List[str] = []
        for col in self.columns:
            if col.length is not None:
                want = col.length
            elif col.percent is not None:
                want = usable_width * col.percent // 100
            else:
                fill_cols.append(col.name)
                widths[col.name] = 0
                continue
            granted = min(want, remaining)
            widths[col.name] = granted
            remaining -= granted

        if fill_cols:
            share, leftover = divmod(remaining, len(fill_cols))
            for i, name in enumerate(fill_cols):
                widths[name] = share + (1 if i < leftover else 0)
        return widths
