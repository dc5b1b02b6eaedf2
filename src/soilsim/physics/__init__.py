"""Physics solvers for soil temperature, infiltration and water balance."""
from soilsim.physics.heat_diffusion import (
    DiffusionProfileSolver,
    DiffusionResult,
    max_stable_timestep,
    soil_temperature_profile,
    stability_coefficient,
)
from soilsim.physics.infiltration import (
    GreenAmptParameters,
    InfiltrationResult,
    InfiltrationSolver,
    green_ampt_cumulative_infiltration,
    green_ampt_infiltration_rate,
)
from soilsim.physics.water_balance import (
    WaterBalanceResult,
    WaterBalanceTracker,
    soil_moisture_balance,
)

__all__ = [
    # Heat diffusion
    "DiffusionProfileSolver",
    "DiffusionResult",
    "max_stable_timestep",
    "soil_temperature_profile",
    "stability_coefficient",
    # Infiltration
    "GreenAmptParameters",
    "InfiltrationResult",
    "InfiltrationSolver",
    "green_ampt_cumulative_infiltration",
    "green_ampt_infiltration_rate",
    # Water balance
    "WaterBalanceResult",
    "WaterBalanceTracker",
    "soil_moisture_balance",
]
