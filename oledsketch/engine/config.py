"""Recovery configuration — detector thresholds and search bounds."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RecoveryConfig:
    """Controls how aggressively shape recovery claims pixels."""

    # Circle outlines: radius range is [min_radius, min(W, H) / 2).
    circle_min_radius: int = 3
    circle_min_samples: int = 24
    circle_samples_per_radius: int = 6
    circle_on_ratio: float = 0.75  # strictly above
    circle_min_on: int = 12

    # Filled circles: radius range is [min_radius, min(W, H) / 3).
    filled_circle_min_radius: int = 3
    ring_min_samples: int = 8
    ring_samples_per_radius: int = 4
    ring_spacing_divisor: int = 5
    # A disc surrounded by more than this fraction of on pixels is part of a
    # larger solid region, not a circle.
    filled_circle_max_halo: float = 0.25

    # Triangles
    triangle_min_area: float = 9.0
    triangle_min_side: float = 5.0
    triangle_edge_coverage: float = 0.7  # strictly above
    triangle_fill_ratio: float = 0.8  # strictly above
    triangle_max_neighbours: int = 4
    # Slivers cut from a solid region: the shortest altitude must reach this
    # far and the band just outside every edge must be mostly off.
    triangle_min_altitude: float = 3.0
    triangle_halo_offset: float = 2.0
    triangle_max_halo: float = 0.25
    # Solid bounding boxes belong to the rectangle passes.
    triangle_max_bbox_fill: float = 0.9
    # Combinations grow cubically; above this many vertex candidates the
    # triangle pass is skipped.
    max_triangle_candidates: int = 150

    # Rounded rectangles
    rounded_rect_min_size: int = 7
    rounded_rect_min_radius: int = 2
    max_corner_radius: int = 6
    rounded_rect_max_square_corners: int = 1

    # Rectangles
    rect_min_size: int = 3

    # Runs
    min_run_length: int = 2
    detect_diagonal_runs: bool = True
