"""
Type definitions and type aliases for the soilsim solvers.
"""
from enum import Enum
from typing_extensions import TypeAlias
import numpy as np


# Type aliases for clarity
StorageMm: TypeAlias = float

# Array types for static typing with numpy
TemperatureArray: TypeAlias = np.ndarray  # Shape: (n_layers,)
TimeArray: TypeAlias = np.ndarray  # Shape: (n_times,)
DailySeries: TypeAlias = np.ndarray  # Shape: (n_days,)


class Advisory(str, Enum):
    """Non-fatal conditions reported alongside a valid result"""
    STABILITY_CRITERION_EXCEEDED = "stability_criterion_exceeded"
    INITIAL_STORAGE_ABOVE_FIELD_CAPACITY = "initial_storage_above_field_capacity"
    INITIAL_STORAGE_BELOW_WILTING_POINT = "initial_storage_below_wilting_point"

    @property
    def description(self) -> str:
        descriptions = {
            Advisory.STABILITY_CRITERION_EXCEEDED:
                "Explicit scheme stability criterion not met; result may be unstable",
            Advisory.INITIAL_STORAGE_ABOVE_FIELD_CAPACITY:
                "Initial moisture storage is above field capacity",
            Advisory.INITIAL_STORAGE_BELOW_WILTING_POINT:
                "Initial moisture storage is below wilting point",
        }
        return descriptions[self]
