"""Lorenz system equations and a fourth-order Runge-Kutta integrator."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

Point = tuple[float, float, float]

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
DEFAULT_START: Point = (0.1, 0.0, 0.0)
DEFAULT_STEP = 0.01
DEFAULT_SCALE = 10.0


@dataclass
class LorenzParams:
    """The three parameters of the Lorenz system."""

    sigma: float = 10.0
    rho: float = 28.0
    beta: float = 8.0 / 3.0


def derivatives(params: LorenzParams, x: float, y: float, z: float) -> Point:
    """Return (dx/dt, dy/dt, dz/dt) at the given point."""
    return (
        params.sigma * (y - x),
        x * (params.rho - z) - y,
        x * y - params.beta * z,
    )


def rk4_step(params: LorenzParams, x: float, y: float, z: float, h: float) -> Point:
    """Advance the point by one classic Runge-Kutta step of size ``h``."""
    k1 = tuple(h * d for d in derivatives(params, x, y, z))
    k2 = tuple(
        h * d
        for d in derivatives(params, x + k1[0] / 2, y + k1[1] / 2, z + k1[2] / 2)
    )
    k3 = tuple(
        h * d
        for d in derivatives(params, x + k2[0] / 2, y + k2[1] / 2, z + k2[2] / 2)
    )
    k4 = tuple(h * d for d in derivatives(params, x + k3[0], y + k3[1], z + k3[2]))
    return tuple(
        value + (a + 2 * b + 2 * c + d) / 6.0
        for value, a, b, c, d in zip((x, y, z), k1, k2, k3, k4)
    )  # type: ignore[return-value]


class LorenzSystem:
    """A point moving along the Lorenz flow."""

    def __init__(
        self,
        params: LorenzParams | None = None,
        start: Point = DEFAULT_START,
        h: float = DEFAULT_STEP,
    ) -> None:
        self.params = params if params is not None else LorenzParams()
        self.start: Point = tuple(float(v) for v in start)  # type: ignore[assignment]
        if len(self.start) != 3:
            raise ValueError("start must have three coordinates")
        self.h = h
        self.state: Point = self.start

    def reset(self) -> Point:
        """Return the point to its starting position."""
        self.state = self.start
        return self.state

    def step(self) -> Point:
        """Advance one step and return the new position."""
        self.state = rk4_step(self.params, *self.state, self.h)
        return self.state

    def trajectory(self, steps: int) -> Iterator[Point]:
        """Yield the positions of the next ``steps`` steps."""
        if steps < 0:
            raise ValueError("steps must not be negative")
        for _ in range(steps):
            yield self.step()


def to_screen(
    x: float,
    z: float,
    width: int = SCREEN_WIDTH,
    height: int = SCREEN_HEIGHT,
    scale: float = DEFAULT_SCALE,
) -> tuple[float, float]:
    """Project the x-z plane onto screen pixels, z growing upwards from the bottom."""
    return x * scale + width / 2, -z * scale + height