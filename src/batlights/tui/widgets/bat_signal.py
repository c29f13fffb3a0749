"""Filled bat silhouette rendered with block characters."""

# Outline in canvas coordinates, tail first, going round the right wing
BAT_OUTLINE = [
    (0.0, 30.0),
    (20.0, 40.0),
    (40.0, 50.0),
    (50.0, 40.0),
    (60.0, 60.0),
    (40.0, 80.0),
    (20.0, 55.0),
    (15.0, 70.0),
    (5.0, 50.0),
    (-5.0, 50.0),
    (-15.0, 70.0),
    (-20.0, 55.0),
    (-40.0, 80.0),
    (-60.0, 60.0),
    (-50.0, 40.0),
    (-40.0, 50.0),
    (-20.0, 40.0),
]

X_BOUNDS = (-80.0, 80.0)
Y_BOUNDS = (20.0, 90.0)

FILL = "█"


def _crossings(points: list[tuple[float, float]], y: float) -> list[float]:
    """X positions where the horizontal line at y crosses the polygon's edges."""
    xs = []
    for i, (x1, y1) in enumerate(points):
        x2, y2 = points[(i + 1) % len(points)]
        if (y1 <= y < y2) or (y2 <= y < y1):
            xs.append(x1 + (y - y1) / (y2 - y1) * (x2 - x1))
    return sorted(xs)


def rasterize(
    points: list[tuple[float, float]],
    cols: int,
    rows: int,
    x_bounds: tuple[float, float] = X_BOUNDS,
    y_bounds: tuple[float, float] = Y_BOUNDS,
) -> list[str]:
    """
    Scanline-fill a polygon into a grid of text rows.

    Each cell is sampled at its center; row 0 is the top of y_bounds.

    Returns:
        `rows` strings of `cols` characters, FILL inside the polygon and
        spaces outside
    """
    if cols <= 0 or rows <= 0 or len(points) < 3:
        return [" " * max(cols, 0) for _ in range(max(rows, 0))]

    x_min, x_max = x_bounds
    y_min, y_max = y_bounds
    cell_w = (x_max - x_min) / cols
    cell_h = (y_max - y_min) / rows

    lines = []
    for row in range(rows):
        y = y_max - (row + 0.5) * cell_h
        spans = _crossings(points, y)
        cells = []
        for col in range(cols):
            x = x_min + (col + 0.5) * cell_w
            inside = any(spans[i] <= x <= spans[i + 1] for i in range(0, len(spans) - 1, 2))
            cells.append(FILL if inside else " ")
        lines.append("".join(cells))
    return lines
