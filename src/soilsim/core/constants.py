"""
Numerical defaults and system-wide constants.
"""
from typing import Dict, Final, Tuple

# Explicit finite-difference scheme
DIFFUSION_STABILITY_LIMIT: Final[float] = 0.5  # max alpha = D*dt/dz² for FTCS

# Green-Ampt Newton iteration
NEWTON_TOLERANCE: Final[float] = 1e-6  # absolute residual (length units)
NEWTON_MAX_ITERATIONS: Final[int] = 100
NEWTON_MIN_DERIVATIVE: Final[float] = 1e-9

# Green-Ampt parameters by USDA texture class, Rawls et al. (1983) Table 1
# Format: (K_s [cm/h], psi_f [cm], porosity, effective_porosity)
RAWLS_GREEN_AMPT_PARAMETERS: Final[Dict[str, Tuple[float, float, float, float]]] = {
    'sand': (11.78, 4.95, 0.437, 0.417),
    'loamy_sand': (2.99, 6.13, 0.437, 0.401),
    'sandy_loam': (1.09, 11.01, 0.453, 0.412),
    'loam': (0.34, 8.89, 0.463, 0.434),
    'silt_loam': (0.65, 16.68, 0.501, 0.486),
    'sandy_clay_loam': (0.15, 21.85, 0.398, 0.330),
    'clay_loam': (0.10, 20.88, 0.464, 0.390),
    'silty_clay_loam': (0.10, 27.30, 0.471, 0.432),
    'sandy_clay': (0.06, 23.90, 0.430, 0.321),
    'silty_clay': (0.05, 29.22, 0.479, 0.423),
    'clay': (0.03, 31.63, 0.475, 0.385),
}

# Unit conversion factors
UNIT_CONVERSIONS: Final[Dict[str, float]] = {
    "m_to_mm": 1000.0,
    "cm_to_m": 0.01,
    "cm_h_to_m_s": 0.01 / 3600.0,
    "seconds_per_hour": 3600.0,
}
