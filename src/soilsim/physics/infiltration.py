"""
Green-Ampt cumulative infiltration under ponded conditions.

The Green-Ampt equation is implicit in the cumulative infiltration F:
    F - C × ln(1 + F / C) = K_s × t,        C = ψ_f × Δθ

It is inverted independently at every requested time with Newton-Raphson
iteration, starting from Philip's two-term approximation.

Infiltration rate:
    f = K_s × [1 + C / F]

Units are whatever the caller supplies consistently (the defaults in the
examples and scripts are m and s).

References:
- Green, W.H. and Ampt, G.A. (1911). Studies on soil physics: I. Flow of air
  and water through soils. Journal of Agricultural Science, 4:1-24.
- Philip, J.R. (1957). The theory of infiltration: 4. Sorptivity and
  algebraic infiltration equations. Soil Science, 84(3):257-264.
- Rawls, W.J. et al. (1983). Green-Ampt infiltration parameters from soils
  data. Journal of Hydraulic Engineering, 109(1):62-70.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from soilsim.core.config import InfiltrationConfig, get_config
from soilsim.core.constants import RAWLS_GREEN_AMPT_PARAMETERS, UNIT_CONVERSIONS
from soilsim.core.exceptions import ConvergenceError, ErrorContext, ParameterError
from soilsim.core.types import TimeArray
from soilsim.core.validation import as_open_fraction, as_positive_scalar, as_series

logger = logging.getLogger(__name__)

COMPONENT = "infiltration"


@dataclass
class GreenAmptParameters:
    """
    Green-Ampt infiltration model parameters.

    Parameters:
        ks: Saturated hydraulic conductivity (m/s)
        psi: Wetting front suction head (m, positive value)
        delta_theta: Moisture deficit θ_s - θ_i (m³/m³)
    """
    ks: float
    psi: float
    delta_theta: float

    def __post_init__(self):
        self.ks = as_positive_scalar(self.ks, "ks", COMPONENT, "GreenAmptParameters")
        self.psi = as_positive_scalar(self.psi, "psi", COMPONENT, "GreenAmptParameters")
        self.delta_theta = as_open_fraction(
            self.delta_theta, "delta_theta", COMPONENT, "GreenAmptParameters"
        )

    @property
    def sorptivity_parameter(self) -> float:
        """ψ_f × Δθ term (m)"""
        return self.psi * self.delta_theta

    @classmethod
    def from_texture_class(
        cls,
        texture_class: str,
        delta_theta: float
    ) -> "GreenAmptParameters":
        """
        Get Green-Ampt parameters for USDA texture class.

        Values from Rawls et al. (1983), converted to SI.

        Args:
            texture_class: USDA texture class, e.g. "silt loam"
            delta_theta: Moisture deficit (m³/m³)

        Returns:
            GreenAmptParameters
        """
        texture_key = texture_class.lower().replace(' ', '_')

        if texture_key not in RAWLS_GREEN_AMPT_PARAMETERS:
            raise ParameterError(
                f"Unknown texture class '{texture_class}'. "
                f"Expected one of: {sorted(RAWLS_GREEN_AMPT_PARAMETERS)}",
                ErrorContext(component=COMPONENT, operation="from_texture_class",
                             parameter="texture_class"),
            )

        K_s_cm_h, psi_f_cm, _, _ = RAWLS_GREEN_AMPT_PARAMETERS[texture_key]

        return cls(
            ks=K_s_cm_h * UNIT_CONVERSIONS["cm_h_to_m_s"],
            psi=psi_f_cm * UNIT_CONVERSIONS["cm_to_m"],
            delta_theta=delta_theta,
        )


def green_ampt_infiltration_rate(
    cumulative_infiltration: Union[float, np.ndarray],
    ks: float,
    sorptivity_parameter: float
) -> Union[float, np.ndarray]:
    """
    Infiltration rate from cumulative infiltration.

    f = K_s × [1 + (ψ_f × Δθ) / F]

    Args:
        cumulative_infiltration: Cumulative infiltration F
        ks: Saturated hydraulic conductivity
        sorptivity_parameter: ψ_f × Δθ

    Returns:
        Infiltration rate, inf where F is zero
    """
    F = np.asarray(cumulative_infiltration, dtype=float)
    with np.errstate(divide="ignore"):
        rate = np.where(F > 0, ks * (1 + sorptivity_parameter / F), np.inf)
    if rate.ndim == 0:
        return float(rate)
    return rate


@dataclass
class InfiltrationResult:
    """Cumulative infiltration per requested time, with solver diagnostics"""
    times: TimeArray
    cumulative_infiltration: np.ndarray
    iterations: np.ndarray  # Newton iterations used per time point
    converged: np.ndarray  # True where |g(F)| < tolerance was reached
    residuals: np.ndarray  # |g(F)| at the returned F
    ks: float
    sorptivity_parameter: float

    @property
    def infiltration_rate(self) -> np.ndarray:
        """f = K_s × (1 + C/F) at each time point"""
        return green_ampt_infiltration_rate(
            self.cumulative_infiltration, self.ks, self.sorptivity_parameter
        )

    @property
    def all_converged(self) -> bool:
        return bool(np.all(self.converged))

    def raise_if_unconverged(self):
        """Escalate budget-exhausted or stalled points to ConvergenceError"""
        if self.all_converged:
            return
        bad = np.flatnonzero(~self.converged)
        raise ConvergenceError(
            f"Green-Ampt iteration did not converge at {bad.size} time point(s); "
            f"max residual {float(np.max(self.residuals[bad])):.3e}",
            ErrorContext(component=COMPONENT, operation="solve",
                         details={"times": self.times[bad].tolist()}),
        )


class InfiltrationSolver:
    """
    Newton-Raphson solver for the implicit Green-Ampt equation.

    Every time point is solved on its own from a fresh initial guess;
    unconverged points are returned as their last iterate and flagged.
    """

    def __init__(self, config: Optional[InfiltrationConfig] = None):
        self.config = config or get_config().infiltration
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def solve(
        self,
        ks: float,
        psi: float,
        delta_theta: float,
        times: Union[float, Sequence[float], np.ndarray]
    ) -> InfiltrationResult:
        """
        Cumulative infiltration at each requested time.

        Args:
            ks: Saturated hydraulic conductivity (m/s)
            psi: Wetting front suction head (m, positive)
            delta_theta: Moisture deficit, between 0 and 1
            times: Non-negative time offsets (s), any order

        Returns:
            InfiltrationResult aligned with `times`
        """
        operation = "solve"
        ks = as_positive_scalar(ks, "ks", COMPONENT, operation)
        psi = as_positive_scalar(psi, "psi", COMPONENT, operation)
        delta_theta = as_open_fraction(delta_theta, "delta_theta", COMPONENT, operation)
        if np.ndim(times) == 0:
            times = [times]
        t_values = as_series(times, "times", COMPONENT, operation, min_value=0.0)

        C = psi * delta_theta
        n = t_values.size
        F = np.zeros(n)
        iterations = np.zeros(n, dtype=int)
        converged = np.ones(n, dtype=bool)
        residuals = np.zeros(n)

        for i, t in enumerate(t_values):
            if t == 0:
                continue
            F[i], iterations[i], converged[i], residuals[i] = self._solve_point(ks, C, t)

        if not converged.all():
            self.logger.debug(
                f"{int(np.sum(~converged))} of {n} time points did not reach "
                f"tolerance {self.config.tolerance:g}"
            )

        return InfiltrationResult(
            times=t_values,
            cumulative_infiltration=F,
            iterations=iterations,
            converged=converged,
            residuals=residuals,
            ks=ks,
            sorptivity_parameter=C,
        )

    def solve_parameters(
        self,
        params: GreenAmptParameters,
        times: Union[float, Sequence[float], np.ndarray]
    ) -> InfiltrationResult:
        """Solve using a GreenAmptParameters bundle"""
        return self.solve(params.ks, params.psi, params.delta_theta, times)

    def _solve_point(self, ks: float, C: float, t: float) -> Tuple[float, int, bool, float]:
        """Newton iteration for a single t > 0"""
        tolerance = self.config.tolerance
        target = ks * t

        # Philip's two-term approximation; the linear guess K_s*t is poor near t=0
        F_n = target + np.sqrt(2 * C * target)

        g_F = F_n - C * np.log(1 + F_n / C) - target
        for iteration in range(1, self.config.max_iterations + 1):
            if abs(g_F) < tolerance:
                return F_n, iteration - 1, True, abs(g_F)

            g_prime_F = F_n / (F_n + C)
            if abs(g_prime_F) < self.config.min_derivative:
                return F_n, iteration - 1, False, abs(g_F)

            F_n = F_n - g_F / g_prime_F

            # Cumulative infiltration is non-negative
            if F_n < 0:
                F_n = tolerance

            g_F = F_n - C * np.log(1 + F_n / C) - target

        return F_n, self.config.max_iterations, abs(g_F) < tolerance, abs(g_F)


def green_ampt_cumulative_infiltration(
    ks: float,
    psi: float,
    delta_theta: float,
    times: Union[float, Sequence[float], np.ndarray]
) -> np.ndarray:
    """Cumulative infiltration at each time (see InfiltrationSolver.solve)"""
    return InfiltrationSolver().solve(ks, psi, delta_theta, times).cumulative_infiltration
