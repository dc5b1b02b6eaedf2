"""
Daily root-zone water balance (single bucket, FAO-56 style).
Storage is bounded by wilting point and field capacity at the end of every day.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from soilsim.core.exceptions import ErrorContext, ParameterError
from soilsim.core.types import Advisory, DailySeries, StorageMm
from soilsim.core.validation import (
    as_open_fraction,
    as_positive_scalar,
    as_scalar,
    as_series,
)

logger = logging.getLogger(__name__)

COMPONENT = "water_balance"


@dataclass
class WaterBalanceResult:
    """Daily storage and fluxes of one run (all in mm)"""
    storage: DailySeries  # End-of-day root-zone storage
    percolation: DailySeries  # Water above field capacity lost each day
    actual_et: DailySeries  # Water actually extracted by ET each day
    storage_fc: StorageMm
    storage_wp: StorageMm
    root_zone_depth: float  # mm
    advisories: List[Advisory] = field(default_factory=list)

    @property
    def water_content(self) -> np.ndarray:
        """Volumetric water content (m³/m³)"""
        return self.storage / self.root_zone_depth

    @property
    def available_water(self) -> np.ndarray:
        """Plant available water in mm"""
        return self.storage - self.storage_wp

    @property
    def total_percolation(self) -> float:
        return float(np.sum(self.percolation))

    def to_dataframe(self, dates: Optional[Sequence] = None) -> pd.DataFrame:
        """One row per day; indexed by `dates` when given"""
        df = pd.DataFrame({
            'storage_mm': self.storage,
            'percolation_mm': self.percolation,
            'actual_et_mm': self.actual_et,
            'water_content': self.water_content,
            'available_water_mm': self.available_water,
        })
        if dates is not None:
            if len(dates) != len(df):
                raise ParameterError(
                    f"Got {len(dates)} dates for {len(df)} days",
                    ErrorContext(component=COMPONENT, operation="to_dataframe", parameter="dates"),
                )
            df.index = pd.Index(dates)
        return df


class WaterBalanceTracker:
    """
    Sequential daily bucket model for the root zone.

    Each day:
    1. Precipitation is added to storage
    2. Storage above field capacity leaves as percolation
    3. Reference ET is extracted, limited so storage stops at wilting point
    4. Storage is floored at wilting point
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def run(
        self,
        precipitation_mm: Union[Sequence[float], np.ndarray],
        et0_mm: Union[Sequence[float], np.ndarray],
        field_capacity: float,
        wilting_point: float,
        root_zone_depth_mm: float,
        initial_storage_mm: float
    ) -> WaterBalanceResult:
        """
        Run the balance over a daily forcing series.

        Args:
            precipitation_mm: Daily precipitation (mm)
            et0_mm: Daily reference evapotranspiration (mm), same length
            field_capacity: Field capacity (m³/m³)
            wilting_point: Wilting point (m³/m³), below field capacity
            root_zone_depth_mm: Root zone depth (mm)
            initial_storage_mm: Root-zone storage before day 1 (mm)

        Returns:
            WaterBalanceResult
        """
        operation = "run"
        precip = as_series(precipitation_mm, "precipitation_mm", COMPONENT, operation, min_value=0.0)
        et0 = as_series(et0_mm, "et0_mm", COMPONENT, operation, min_value=0.0)
        if precip.size != et0.size:
            raise ParameterError(
                f"Precipitation and ET0 series must be the same length "
                f"({precip.size} != {et0.size})",
                ErrorContext(component=COMPONENT, operation=operation, parameter="et0_mm"),
            )
        field_capacity = as_open_fraction(field_capacity, "field_capacity", COMPONENT, operation)
        wilting_point = as_open_fraction(wilting_point, "wilting_point", COMPONENT, operation)
        if wilting_point >= field_capacity:
            raise ParameterError(
                f"Wilting point ({wilting_point}) must be less than field capacity ({field_capacity})",
                ErrorContext(component=COMPONENT, operation=operation, parameter="wilting_point"),
            )
        root_zone_depth_mm = as_positive_scalar(root_zone_depth_mm, "root_zone_depth_mm", COMPONENT, operation)
        initial_storage_mm = as_scalar(initial_storage_mm, "initial_storage_mm", COMPONENT, operation)
        if initial_storage_mm < 0:
            raise ParameterError(
                f"initial_storage_mm must be non-negative, got {initial_storage_mm}",
                ErrorContext(component=COMPONENT, operation=operation, parameter="initial_storage_mm"),
            )

        storage_fc = field_capacity * root_zone_depth_mm
        storage_wp = wilting_point * root_zone_depth_mm

        advisories = []
        if initial_storage_mm > storage_fc:
            advisories.append(Advisory.INITIAL_STORAGE_ABOVE_FIELD_CAPACITY)
            self.logger.warning(
                f"Initial storage {initial_storage_mm:.2f}mm is above field capacity ({storage_fc:.2f}mm)"
            )
        elif initial_storage_mm < storage_wp:
            advisories.append(Advisory.INITIAL_STORAGE_BELOW_WILTING_POINT)
            self.logger.warning(
                f"Initial storage {initial_storage_mm:.2f}mm is below wilting point ({storage_wp:.2f}mm)"
            )

        n_days = precip.size
        storage = np.zeros(n_days)
        percolation = np.zeros(n_days)
        actual_et = np.zeros(n_days)

        current = initial_storage_mm
        for day in range(n_days):
            current, percolation[day], actual_et[day] = self._step(
                current, precip[day], et0[day], storage_fc, storage_wp
            )
            storage[day] = current

        self.logger.info(
            f"Water balance run complete: {n_days} days, "
            f"total percolation {float(percolation.sum()):.2f}mm"
        )

        return WaterBalanceResult(
            storage=storage,
            percolation=percolation,
            actual_et=actual_et,
            storage_fc=storage_fc,
            storage_wp=storage_wp,
            root_zone_depth=root_zone_depth_mm,
            advisories=advisories,
        )

    @staticmethod
    def _step(
        current: float,
        precipitation: float,
        et0: float,
        storage_fc: float,
        storage_wp: float
    ) -> Tuple[float, float, float]:
        """Advance one day; returns (storage, percolation, actual ET)"""
        current = current + precipitation

        if current > storage_fc:
            percolation = current - storage_fc
            current = storage_fc
        else:
            percolation = 0.0

        # ET at the reference rate until wilting point
        extraction = et0
        if current - extraction < storage_wp:
            extraction = current - storage_wp
        current = current - extraction

        # Floating-point drift, or a start below wilting point
        if current < storage_wp:
            current = storage_wp

        return current, percolation, max(extraction, 0.0)

    def run_frame(
        self,
        forcings: pd.DataFrame,
        field_capacity: float,
        wilting_point: float,
        root_zone_depth_mm: float,
        initial_storage_mm: float
    ) -> pd.DataFrame:
        """
        Run from a forcing DataFrame.

        Args:
            forcings: DataFrame with columns precipitation_mm and et0_mm
            field_capacity: Field capacity (m³/m³)
            wilting_point: Wilting point (m³/m³)
            root_zone_depth_mm: Root zone depth (mm)
            initial_storage_mm: Root-zone storage before the first row (mm)

        Returns:
            Daily results indexed like `forcings`
        """
        required_columns = ['precipitation_mm', 'et0_mm']
        for col in required_columns:
            if col not in forcings.columns:
                raise ParameterError(
                    f"Missing required column: {col}",
                    ErrorContext(component=COMPONENT, operation="run_frame", parameter="forcings"),
                )

        result = self.run(
            forcings['precipitation_mm'].to_numpy(),
            forcings['et0_mm'].to_numpy(),
            field_capacity,
            wilting_point,
            root_zone_depth_mm,
            initial_storage_mm,
        )
        return result.to_dataframe(dates=forcings.index)


def soil_moisture_balance(
    precipitation_mm: Union[Sequence[float], np.ndarray],
    et0_mm: Union[Sequence[float], np.ndarray],
    field_capacity: float,
    wilting_point: float,
    root_zone_depth_mm: float,
    initial_storage_mm: float
) -> Tuple[np.ndarray, np.ndarray]:
    """Daily (storage, percolation) series (see WaterBalanceTracker.run)"""
    result = WaterBalanceTracker().run(
        precipitation_mm, et0_mm, field_capacity, wilting_point,
        root_zone_depth_mm, initial_storage_mm
    )
    return result.storage, result.percolation
