"""Fixed region coordinate tables.

Coverage is intentionally partial: regions that are missing here are left out
of map views.
"""

from __future__ import annotations

from typing import Dict, Tuple

CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "Dubai": (25.276987, 55.296249),
    "Sharjah": (25.3463, 55.4209),
    "Abu Dhabi": (24.4539, 54.3773),
    "Riyadh": (24.7136, 46.6753),
    "Jeddah": (21.4858, 39.1925),
    "Dammam": (26.4207, 50.0888),
    "Cairo": (30.0444, 31.2357),
    "Alexandria": (31.2001, 29.9187),
    "Istanbul": (41.0082, 28.9784),
    "Ankara": (39.9334, 32.8597),
}

# Positions on a 1000x500 world map plane.
MAP_POSITIONS: Dict[str, Tuple[float, float]] = {
    "Dubai": (653, 226),
    "Sharjah": (654, 225),
    "Abu Dhabi": (651, 228),
    "Riyadh": (630, 227),
    "Jeddah": (609, 239),
    "Dammam": (639, 223),
    "Cairo": (586, 209),
    "Alexandria": (583, 206),
    "Istanbul": (580, 177),
    "Ankara": (589, 181),
}

