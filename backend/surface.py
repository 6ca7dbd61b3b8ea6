"""
Isometric rendering of z = sin(r)/r as SVG polygons.

The domain is a fixed CELLS x CELLS grid spanning -XY_RANGE/2..+XY_RANGE/2 on
both axes. Each grid cell becomes one filled quadrilateral, projected onto a
canvas whose size is supplied per call through a ``Canvas`` value.
"""
from dataclasses import dataclass
from typing import IO, Iterator, NamedTuple, Tuple

import numpy as np

DEFAULT_WIDTH, DEFAULT_HEIGHT = 600, 320
CELLS = 100
XY_RANGE = 30.0
ANGLE = np.pi / 6
SIN30, COS30 = float(np.sin(ANGLE)), float(np.cos(ANGLE))

Z_EXAGGERATION = 0.4
COLOR_GAIN = 25

SVG_HEADER = (
    "<svg xmlns='http://www.w3.org/2000/svg' "
    "style='stroke: grey; fill: white; stroke-width: 0.7' "
    "width='{width}' height='{height}'>"
)
SVG_POLYGON = "<polygon fill='{fill}' points='{points}' />\n"
SVG_FOOTER = "</svg>\n"


@dataclass(frozen=True)
class Canvas:
    """Output size in pixels plus the scale factors derived from it."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    @property
    def xy_scale(self) -> float:
        # pixels per x or y unit
        return self.width / 2 / XY_RANGE

    @property
    def z_scale(self) -> float:
        return self.height * Z_EXAGGERATION


class Fill(NamedTuple):
    red: int
    blue: int

    @property
    def css(self) -> str:
        return f"rgb({self.red}, 0, {self.blue})"


class CellPolygon(NamedTuple):
    i: int
    j: int
    points: Tuple[Tuple[float, float], ...]
    fill: Fill


def height_at(x, y):
    """Surface height sin(r)/r. Evaluates to NaN at the origin (0/0)."""
    r = np.hypot(x, y)
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.sin(r) / r


def corner(i, j, canvas: Canvas):
    """
    Project the grid corner (i, j) onto the canvas.

    ``i`` and ``j`` may be ints or integer arrays of the same shape.
    Returns (sx, sy, z) where z is the unscaled surface height.
    """
    x = XY_RANGE * (np.divide(i, CELLS) - 0.5)
    y = XY_RANGE * (np.divide(j, CELLS) - 0.5)

    z = height_at(x, y)

    sx = canvas.width / 2 + (x - y) * COS30 * canvas.xy_scale
    sy = canvas.height / 2 + (x + y) * SIN30 * canvas.xy_scale - z * canvas.z_scale
    return sx, sy, z


def project_lattice(canvas: Canvas):
    """Project every corner of the grid at once; arrays are indexed [i, j]."""
    i, j = np.meshgrid(np.arange(CELLS + 1), np.arange(CELLS + 1), indexing="ij")
    return corner(i, j, canvas)


def has_non_finite(*heights) -> bool:
    return not bool(np.all(np.isfinite(heights)))


def shade(heights, z_scale: float) -> Fill:
    """
    Colour a cell by its highest corner: red above zero, blue below.

    Channel values are not clamped to 255.
    """
    max_z = max(heights) * z_scale
    if max_z > 0:
        return Fill(red=int(max_z * COLOR_GAIN), blue=0)
    if max_z < 0:
        return Fill(red=0, blue=int(abs(max_z) * COLOR_GAIN))
    return Fill(red=0, blue=0)


def iter_cells(canvas: Canvas) -> Iterator[CellPolygon]:
    """Yield one polygon per grid cell in row-major order, skipping cells with a non-finite corner."""
    sx, sy, z = project_lattice(canvas)

    for i in range(CELLS):
        for j in range(CELLS):
            # (i+1, j), (i, j), (i, j+1), (i+1, j+1): fixed winding
            corners = ((i + 1, j), (i, j), (i, j + 1), (i + 1, j + 1))
            heights = [float(z[c]) for c in corners]

            if has_non_finite(*heights):
                continue

            points = tuple((float(sx[c]), float(sy[c])) for c in corners)
            yield CellPolygon(i, j, points, shade(heights, canvas.z_scale))


def format_number(value: float) -> str:
    return np.format_float_positional(value, trim="-")


def polygon_element(polygon: CellPolygon) -> str:
    points = " ".join(f"{format_number(px)},{format_number(py)}" for px, py in polygon.points)
    return SVG_POLYGON.format(fill=polygon.fill.css, points=points)


def render_svg(canvas: Canvas) -> Iterator[str]:
    """
    Lazily serialize the surface as an SVG document.

    The header comes first, then the polygons of each grid row as one chunk,
    then the closing tag.
    """
    yield SVG_HEADER.format(width=canvas.width, height=canvas.height)

    row, row_index = [], 0
    for polygon in iter_cells(canvas):
        if polygon.i != row_index and row:
            yield "".join(row)
            row = []
        row_index = polygon.i
        row.append(polygon_element(polygon))
    if row:
        yield "".join(row)

    yield SVG_FOOTER


def write_svg(out: IO[str], canvas: Canvas) -> None:
    for chunk in render_svg(canvas):
        out.write(chunk)


def svg_document(canvas: Canvas) -> str:
    return "".join(render_svg(canvas))
