"""Fixed local triangulation shared by every tile.

Sample points of a tile face lie on a lattice of 33 columns by 65 rows
covering the bounding box of the hexagon. A template index ``i`` addresses
column ``i % 33`` and row ``i // 33``. Column 0 is the left edge of the
hexagon (x = -W/2), row 0 its bottom vertex (z = -0.5).

Each of the six edge regions of a face uses the same 35 local slots, ordered
in rows of 5, 6, 7, 8 and 9 points from the face interior out to the hexagon
boundary. :data:`EDGE_POINTS` maps those slots to template indices for each
direction, so every tile and every neighbour agree on where the seam points
are.
"""

from __future__ import annotations

import numpy as np

from hexterrain.hexgrid.coordinate import HEX_WIDTH, Direction

TEMPLATE_COLUMNS = 33
TEMPLATE_ROWS = 65

EDGE_POINTS: dict[Direction, tuple[int, ...]] = {
    Direction.TOP_RIGHT: (
        1600, 1536, 1472, 1408, 1344,
        1732, 1668, 1604, 1540, 1476, 1412,
        1864, 1800, 1736, 1672, 1608, 1544, 1480,
        1996, 1932, 1868, 1804, 1740, 1676, 1612, 1548,
        2128, 2064, 2000, 1936, 1872, 1808, 1744, 1680, 1616,
    ),
    Direction.RIGHT: (
        1344, 1212, 1080, 948, 816,
        1412, 1280, 1148, 1016, 884, 752,
        1480, 1348, 1216, 1084, 952, 820, 688,
        1548, 1416, 1284, 1152, 1020, 888, 756, 624,
        1616, 1484, 1352, 1220, 1088, 956, 824, 692, 560,
    ),
    Direction.BOTTOM_RIGHT: (
        816, 748, 680, 612, 544,
        752, 684, 616, 548, 480, 412,
        688, 620, 552, 484, 416, 348, 280,
        624, 556, 488, 420, 352, 284, 216, 148,
        560, 492, 424, 356, 288, 220, 152, 84, 16,
    ),
    Direction.BOTTOM_LEFT: (
        544, 608, 672, 736, 800,
        412, 476, 540, 604, 668, 732,
        280, 344, 408, 472, 536, 600, 664,
        148, 212, 276, 340, 404, 468, 532, 596,
        16, 80, 144, 208, 272, 336, 400, 464, 528,
    ),
    Direction.LEFT: (
        800, 932, 1064, 1196, 1328,
        732, 864, 996, 1128, 1260, 1392,
        664, 796, 928, 1060, 1192, 1324, 1456,
        596, 728, 860, 992, 1124, 1256, 1388, 1520,
        528, 660, 792, 924, 1056, 1188, 1320, 1452, 1584,
    ),
    Direction.TOP_LEFT: (
        1328, 1396, 1464, 1532, 1600,
        1392, 1460, 1528, 1596, 1664, 1732,
        1456, 1524, 1592, 1660, 1728, 1796, 1864,
        1520, 1588, 1656, 1724, 1792, 1860, 1928, 1996,
        1584, 1652, 1720, 1788, 1856, 1924, 1992, 2060, 2128,
    ),
}

# Corners of the hexagon.
BOTTOM_CORNER = 16
LOWER_LEFT_CORNER = 528
LOWER_RIGHT_CORNER = 560
UPPER_LEFT_CORNER = 1584
UPPER_RIGHT_CORNER = 1616
TOP_CORNER = 2128

# Flat hexagon face as a fan of four triangles.
FACE_TRIANGLES: tuple[tuple[int, int, int], ...] = (
    (BOTTOM_CORNER, LOWER_LEFT_CORNER, LOWER_RIGHT_CORNER),
    (LOWER_LEFT_CORNER, TOP_CORNER, LOWER_RIGHT_CORNER),
    (LOWER_LEFT_CORNER, UPPER_LEFT_CORNER, TOP_CORNER),
    (TOP_CORNER, UPPER_RIGHT_CORNER, LOWER_RIGHT_CORNER),
)


def template_offset(index: int) -> tuple[float, float]:
    """Planar (dx, dz) offset of a template point from the tile centre."""
    row, col = divmod(index, TEMPLATE_COLUMNS)
    return (-HEX_WIDTH / 2.0 + HEX_WIDTH / 32.0 * col, -0.5 + row / 64.0)


def _build_offsets() -> np.ndarray:
    index = np.arange(TEMPLATE_COLUMNS * TEMPLATE_ROWS)
    row, col = np.divmod(index, TEMPLATE_COLUMNS)
    offsets = np.column_stack(
        (-HEX_WIDTH / 2.0 + HEX_WIDTH / 32.0 * col, -0.5 + row / 64.0)
    )
    offsets.setflags(write=False)
    return offsets


# Planar offset of every template point, shape (2145, 2).
TEMPLATE_OFFSETS = _build_offsets()


def _build_center_triangles() -> tuple[tuple[int, int, int], ...]:
    # Two mirrored halves of the flat centre hexagon, grown row by row from
    # the lower and upper inner corners.
    triangles = []
    for row in range(4):
        for col in range(row + 5):
            offset = col * 68 + row * 64
            triangles.append((544 + offset, 608 + offset, 676 + offset))
            triangles.append((1600 - offset, 1536 - offset, 1468 - offset))
            if col < row + 4:
                triangles.append((544 + offset, 676 + offset, 612 + offset))
                triangles.append((1600 - offset, 1468 - offset, 1532 - offset))
    return tuple(triangles)


CENTER_TRIANGLES = _build_center_triangles()
