"""
Board layout: pegs in a triangular grid, sinks in a row near the bottom.

Everything here is a pure function of the canvas size: the same width and
height always give the same pegs and sinks.
"""

import logging
from dataclasses import dataclass
from typing import List

import plinko as P
from plinko.colors import RGB, hex_to_rgb, interpolate, map_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Peg:
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class Sink:
    """Square capture bin. (x, y) is the top-left corner of the drawn square."""
    x: float
    y: float
    width: float
    height: float
    color: RGB

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y


@dataclass(frozen=True)
class Layout:
    width: float
    height: float
    pegs: List[Peg]
    sinks: List[Sink]


def peg_count(rows: int = P.PEG_ROWS, first_row: int = P.PEG_FIRST_ROW) -> int:
    return sum(row + 1 for row in range(first_row, rows))


def build_pegs(width: float, height: float,
               rows: int = P.PEG_ROWS,
               first_row: int = P.PEG_FIRST_ROW,
               spacing: float = P.PEG_SPACING,
               row_spacing: float = P.ROW_SPACING,
               radius: float = P.PEG_RADIUS) -> List[Peg]:
    """Row r (from first_row) holds r + 1 pegs, centered on the canvas."""
    pegs = []
    for row in range(first_row, rows):
        y = row * row_spacing
        for col in range(row + 1):
            x = width / 2 - spacing * (row / 2 - col)
            pegs.append(Peg(x=x, y=y, radius=radius))
    return pegs


def sink_progress(index: int, n_sinks: int) -> float:
    """
    Triangular ramp over the bins: 0 at both edges, 1 at the center.
    Bins i and n_sinks - 1 - i always get the same value.
    """
    rising = map_range(0, n_sinks - 1, 0, 2, index)
    return rising if rising < 1 else 2 - rising


def build_sinks(width: float, height: float,
                peg_radius: float = P.PEG_RADIUS,
                n_sinks: int = P.NUM_SINKS,
                sink_width: float = P.SINK_WIDTH,
                row: float = P.SINK_ROW,
                color_start: str = P.SINK_COLOR_START,
                color_end: str = P.SINK_COLOR_END) -> List[Sink]:
    get_color = interpolate(hex_to_rgb(color_start), hex_to_rgb(color_end))
    gap = peg_radius * 2
    pitch = sink_width + gap
    y = height * row

    sinks = []
    for i in range(n_sinks):
        x = width / 2 - (n_sinks / 2) * pitch + i * pitch + peg_radius
        color = get_color(sink_progress(i, n_sinks))
        sinks.append(Sink(x=x, y=y, width=sink_width, height=sink_width, color=color))
    return sinks


def build_layout(width: float, height: float, **kwargs) -> Layout:
    """
    Fresh pegs + sinks for a canvas. Keyword overrides:
    rows, spacing, row_spacing, peg_radius, n_sinks, sink_width.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas size must be positive, got {width}x{height}")

    peg_radius = kwargs.get('peg_radius', P.PEG_RADIUS)
    pegs = build_pegs(width, height,
                      rows=kwargs.get('rows', P.PEG_ROWS),
                      spacing=kwargs.get('spacing', P.PEG_SPACING),
                      row_spacing=kwargs.get('row_spacing', P.ROW_SPACING),
                      radius=peg_radius)
    sinks = build_sinks(width, height,
                        peg_radius=peg_radius,
                        n_sinks=kwargs.get('n_sinks', P.NUM_SINKS),
                        sink_width=kwargs.get('sink_width', P.SINK_WIDTH))

    logger.debug("Layout %.0fx%.0f: %d pegs, %d sinks",
                 width, height, len(pegs), len(sinks))
    return Layout(width=width, height=height, pegs=pegs, sinks=sinks)


@dataclass(frozen=True)
class CanvasSize:
    """Logical (drawing) size plus the backing pixel size for a pixel ratio."""
    width: float
    height: float
    pixel_ratio: float = 1.0

    @property
    def backing_size(self):
        return (int(round(self.width * self.pixel_ratio)),
                int(round(self.height * self.pixel_ratio)))


def fit_canvas(viewport_width: float, viewport_height: float,
               pixel_ratio: float = 1.0,
               margin: float = P.CANVAS_MARGIN,
               aspect_ratio: float = 1.0) -> CanvasSize:
    """Largest canvas of the given aspect ratio inside the viewport minus margin."""
    if pixel_ratio <= 0:
        raise ValueError(f"pixel_ratio must be positive, got {pixel_ratio}")

    width = viewport_width - margin
    height = viewport_height - margin
    if width <= 0 or height <= 0:
        raise ValueError(
            f"Viewport {viewport_width}x{viewport_height} is smaller than the margin")

    if width / height > aspect_ratio:
        width = height * aspect_ratio
    else:
        height = width / aspect_ratio
    return CanvasSize(width=width, height=height, pixel_ratio=pixel_ratio)
