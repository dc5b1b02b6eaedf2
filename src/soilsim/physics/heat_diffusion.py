"""
One-dimensional soil temperature profile by explicit finite differences.

Solves the Fourier heat conduction equation

    ∂T/∂t = D × ∂²T/∂z²

on the internal nodes of a vertical profile with constant (Dirichlet)
surface and bottom temperatures, using forward-time centred-space (FTCS)
stepping:

    T_new[i] = T[i] + α × (T[i+1] - 2T[i] + T[i-1]),   α = D × Δt / Δz²

The scheme is stable for α ≤ 0.5 (von Neumann). Larger values are not
rejected; the result is returned with a stability advisory so the caller
decides whether to discard it.

References:
- Hillel, D. (1998). Environmental Soil Physics. Academic Press.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

import numpy as np

from soilsim.core.config import DiffusionConfig, get_config
from soilsim.core.constants import DIFFUSION_STABILITY_LIMIT
from soilsim.core.types import Advisory, TemperatureArray
from soilsim.core.validation import (
    as_positive_int,
    as_positive_scalar,
    as_scalar,
    as_series,
)

logger = logging.getLogger(__name__)

COMPONENT = "heat_diffusion"


def stability_coefficient(diffusivity: float, dt: float, dz: float) -> float:
    """α = D × Δt / Δz²"""
    return diffusivity * dt / dz ** 2


def max_stable_timestep(
    diffusivity: float,
    dz: float,
    limit: float = DIFFUSION_STABILITY_LIMIT
) -> float:
    """
    Largest time step keeping α at or below the stability limit.

    Args:
        diffusivity: Thermal diffusivity (m²/s)
        dz: Node spacing (m)
        limit: Stability limit for α

    Returns:
        Time step (s)
    """
    diffusivity = as_positive_scalar(diffusivity, "diffusivity", COMPONENT, "max_stable_timestep")
    dz = as_positive_scalar(dz, "dz", COMPONENT, "max_stable_timestep")
    limit = as_positive_scalar(limit, "limit", COMPONENT, "max_stable_timestep")
    return limit * dz ** 2 / diffusivity


@dataclass
class DiffusionResult:
    """Final temperature profile and diagnostics of one solve call"""
    profile: TemperatureArray  # Internal-node temperatures after all steps
    alpha: float  # Stability coefficient used for every step
    steps: int
    advisories: List[Advisory] = field(default_factory=list)

    @property
    def is_stable(self) -> bool:
        """False when the stability criterion was not met"""
        return Advisory.STABILITY_CRITERION_EXCEEDED not in self.advisories


class DiffusionProfileSolver:
    """
    Explicit FTCS solver for a 1-D temperature profile.

    Node 0 is the shallowest internal node; its upper neighbour is the
    surface temperature. The deepest node's lower neighbour is the bottom
    temperature. Boundary values are not part of the profile array.
    """

    def __init__(self, config: Optional[DiffusionConfig] = None):
        self.config = config or get_config().diffusion
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def advance(
        self,
        profile: Union[Sequence[float], np.ndarray],
        surface_temp: float,
        bottom_temp: float,
        diffusivity: float,
        dt: float,
        dz: float,
        steps: int
    ) -> DiffusionResult:
        """
        Advance the profile by a fixed number of time steps.

        Args:
            profile: Initial internal-node temperatures (°C), shallow to deep
            surface_temp: Surface boundary temperature (°C)
            bottom_temp: Bottom boundary temperature (°C)
            diffusivity: Thermal diffusivity (m²/s)
            dt: Time step (s)
            dz: Node spacing (m)
            steps: Number of time steps (>= 1)

        Returns:
            DiffusionResult with the final profile; the input is not modified
        """
        operation = "advance"
        T = as_series(profile, "profile", COMPONENT, operation, allow_empty=False)
        surface_temp = as_scalar(surface_temp, "surface_temp", COMPONENT, operation)
        bottom_temp = as_scalar(bottom_temp, "bottom_temp", COMPONENT, operation)
        diffusivity = as_positive_scalar(diffusivity, "diffusivity", COMPONENT, operation)
        dt = as_positive_scalar(dt, "dt", COMPONENT, operation)
        dz = as_positive_scalar(dz, "dz", COMPONENT, operation)
        steps = as_positive_int(steps, "steps", COMPONENT, operation)

        alpha = stability_coefficient(diffusivity, dt, dz)
        advisories = []
        if alpha > self.config.stability_limit:
            advisories.append(Advisory.STABILITY_CRITERION_EXCEEDED)
            self.logger.warning(
                f"Stability criterion (D*dt/dz^2 <= {self.config.stability_limit}) is not met. "
                f"Result may be unstable. alpha={alpha:.4f}"
            )

        self.logger.debug(
            f"Advancing {T.size} nodes for {steps} steps (alpha={alpha:.4f})"
        )

        T_new = np.empty_like(T)
        for _ in range(steps):
            self._step(T, T_new, surface_temp, bottom_temp, alpha)
            T, T_new = T_new, T

        return DiffusionResult(profile=T, alpha=alpha, steps=steps, advisories=advisories)

    @staticmethod
    def _step(
        T: np.ndarray,
        T_new: np.ndarray,
        surface_temp: float,
        bottom_temp: float,
        alpha: float
    ):
        """One synchronous update: reads only T, writes only T_new"""
        last = T.size - 1
        for i in range(T.size):
            upper = surface_temp if i == 0 else T[i - 1]
            lower = bottom_temp if i == last else T[i + 1]
            T_new[i] = T[i] + alpha * (lower - 2 * T[i] + upper)


def soil_temperature_profile(
    profile: Union[Sequence[float], np.ndarray],
    surface_temp: float,
    bottom_temp: float,
    diffusivity: float,
    dt: float,
    dz: float,
    steps: int
) -> np.ndarray:
    """Final profile after `steps` explicit steps (see DiffusionProfileSolver.advance)"""
    return DiffusionProfileSolver().advance(
        profile, surface_temp, bottom_temp, diffusivity, dt, dz, steps
    ).profile
