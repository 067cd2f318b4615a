"""Stroke width lookup.

Each equity band owns an ordered table of (max_ratio, width) pairs. The
first entry whose max_ratio is >= the stroke ratio (stroke_factor * equity)
gives the width. Breakpoints are hand-tuned and kept exactly as designed;
the odd spikes (4.05 -> 10, 5.01 -> 30) are intentional.
"""

import math

STROKE_WIDTHS = frozenset({1, 2, 4, 6, 10, 30, 50})

# --- (max_equity, [(max_ratio, width), ...]) ---
STROKE_TABLES = (
    (2, ((1.5, 2), (math.inf, 4))),
    (4, ((1.5, 2), (2.75, 4), (3, 10), (3.5, 1), (math.inf, 2))),
    (5, ((1.75, 2), (2.75, 4), (3.5, 1), (4, 6), (4.05, 10), (5, 1))),
    (
        7,
        (
            (1.75, 2),
            (2.75, 4),
            (3.5, 1),
            (4, 6),
            (4.1, 10),
            (5, 2),
            (5.01, 30),
            (6.2, 2),
            (6.3, 10),
            (7.1, 1),
        ),
    ),
    (9, ((0.01, 50), (0.1, 10), (1, 6), (3, 2), (math.inf, 1))),
    (10, ((0.004, 50), (0.09, 10), (math.inf, 1))),
)


def band_for(equity):
    """Return the ratio table for an equity value (clamped to the top band)."""
    for max_equity, table in STROKE_TABLES:
        if equity <= max_equity:
            return table
    return STROKE_TABLES[-1][1]


def stroke_width(equity, ratio):
    table = band_for(equity)
    for max_ratio, width in table:
        if ratio <= max_ratio:
            return width
    # Ratio past the band's last breakpoint; only reachable with a stroke
    # factor above 1.
    return table[-1][1]
