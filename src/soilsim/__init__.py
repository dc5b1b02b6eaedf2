"""Step-wise soil physics solvers: heat diffusion, Green-Ampt infiltration, daily water balance."""
from soilsim.core.exceptions import (
    ConvergenceError,
    ParameterError,
    PhysicsModelError,
    SoilSimError,
)
from soilsim.core.types import Advisory
from soilsim.physics import (
    DiffusionProfileSolver,
    InfiltrationSolver,
    WaterBalanceTracker,
)

__version__ = "0.1.0"

__all__ = [
    "Advisory",
    "ConvergenceError",
    "DiffusionProfileSolver",
    "InfiltrationSolver",
    "ParameterError",
    "PhysicsModelError",
    "SoilSimError",
    "WaterBalanceTracker",
]
