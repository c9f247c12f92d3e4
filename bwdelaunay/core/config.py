"""Configuration objects for the point store and plotting."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from .constants import PICK_RADIUS_SQ


@dataclass
class PointStoreConfig:
    """Preferences for an owned, editable point collection.

    - pick_radius_sq: squared distance below which remove_nearest() picks a point.
    - scalar: numpy floating type points are cast to when added.
    """
    pick_radius_sq: float = PICK_RADIUS_SQ
    scalar: Any = np.float64


@dataclass
class PlotConfig:
    figsize: Tuple[float, float] = (6.0, 6.0)
    dpi: int = 150
    point_size: float = 12.0
    point_color: str = 'black'
    edge_color: Tuple[float, float, float] = (0.1, 0.3, 0.8)
    edge_width: float = 0.8
    show_circumcircles: bool = False
    circle_color: Tuple[float, float, float] = (0.85, 0.2, 0.2)
    circle_width: float = 0.5
    title: str = ''


__all__ = ['PointStoreConfig', 'PlotConfig']
