"""Convert grid placements into frames for a rendering surface (pure, no UI)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from widget_grid.grid_packer import Placement


@dataclass(frozen=True)
class Frame:
    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class GridMetrics:
    spacing: float = 10.0
    h_padding: float = 16.0
    base_height: float = 200.0
    max_width: float = 720.0

    @property
    def row_step(self) -> float:
        return self.base_height + self.spacing

    def effective_width(self, container_width: float) -> float:
        return max(0.0, min(float(container_width), self.max_width))

    def column_width(self, container_width: float) -> float:
        inner = max(0.0, self.effective_width(container_width) - self.h_padding * 2)
        return max(0.0, (inner - self.spacing) / 2)

    def span_height(self, span_y: int) -> float:
        return span_y * self.base_height + (span_y - 1) * self.spacing

    def frames(self, placements: Iterable[Placement], container_width: float, *, origin_x: float = 0.0, origin_y: float = 0.0) -> List[Frame]:
        """Lay placements out centred in ``container_width``, one frame per placement."""

        effective = self.effective_width(container_width)
        col_width = self.column_width(container_width)
        left = origin_x + (float(container_width) - effective) / 2 + self.h_padding
        frames: List[Frame] = []
        for item in placements:
            width = col_width * 2 + self.spacing if item.span_x == 2 else col_width
            frames.append(
                Frame(
                    x=left + item.col * (col_width + self.spacing),
                    y=origin_y + item.row * self.row_step,
                    width=width,
                    height=self.span_height(item.span_y),
                )
            )
        return frames

    def content_height(self, placements: Iterable[Placement]) -> float:
        bottom = 0.0
        for item in placements:
            bottom = max(bottom, item.row * self.row_step + self.span_height(item.span_y))
        return bottom
