from __future__ import annotations

import numpy as np


class Camera:
    """Follow camera mapping world units to window pixels.

    ``ppm`` is pixels per world unit, bounded to ``[min_ppm, max_ppm]``.
    The followed position sits at the window center; world y points up,
    screen y points down.
    """

    def __init__(
        self,
        size: tuple[int, int],
        ppm: float,
        *,
        min_ppm: float,
        max_ppm: float,
    ) -> None:
        self._size = size
        self._bounds = (min_ppm, max_ppm)
        self._ppm = min_ppm
        self._center = np.zeros(2, dtype=float)
        self.set_zoom(ppm)

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def ppm(self) -> float:
        return self._ppm

    @property
    def center(self) -> np.ndarray:
        return self._center

    def follow(self, position: np.ndarray) -> None:
        self._center[:] = position

    def set_zoom(self, ppm: float) -> None:
        lo, hi = self._bounds
        self._ppm = float(min(hi, max(lo, ppm)))

    def zoom_by_factor(self, factor: float) -> None:
        self.set_zoom(self._ppm * factor)

    def scale_length(self, length: float) -> int:
        return int(round(length * self._ppm))

    def world_to_screen_many(self, points: np.ndarray) -> list[tuple[int, int]]:
        """Project an ``(n, 2)`` array of world points to pixel tuples."""

        width, height = self._size
        pixels = np.rint((np.asarray(points, dtype=float) - self._center) * self._ppm).astype(int)
        sx = width // 2 + pixels[:, 0]
        sy = height // 2 - pixels[:, 1]
        return list(zip(sx.tolist(), sy.tolist()))

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        return self.world_to_screen_many(np.array([[x, y]]))[0]

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        width, height = self._size
        x = self._center[0] + (sx - width / 2.0) / self._ppm
        y = self._center[1] + (height / 2.0 - sy) / self._ppm
        return x, y

    def view_rect(self) -> tuple[float, float, float, float]:
        """World-space ``(x0, y0, x1, y1)`` currently inside the window."""

        width, height = self._size
        x0, y1 = self.screen_to_world(0, 0)
        x1, y0 = self.screen_to_world(width, height)
        return x0, y0, x1, y1


__all__ = ["Camera"]
