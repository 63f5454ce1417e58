from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from . import canon


class RowLayout(BaseModel):
    """Positions of the fields read from a tokenised observation row."""

    timestamp: int = Field(default=canon.TIMESTAMP_FIELD, ge=0)
    wind_speed: int = Field(default=canon.WIND_SPEED_FIELD, ge=0)
    solar_radiation: int = Field(default=canon.SOLAR_RADIATION_FIELD, ge=0)
    temperature: int = Field(default=canon.TEMPERATURE_FIELD, ge=0)
    min_fields: int = Field(default=canon.MIN_FIELDS, ge=1)

    @model_validator(mode="after")
    def _min_fields_covers_indices(self) -> "RowLayout":
        highest = max(self.timestamp, self.wind_speed, self.solar_radiation, self.temperature)
        if self.min_fields <= highest:
            raise ValueError(
                f"min_fields={self.min_fields} does not cover field index {highest}"
            )
        return self


class SeriesCell(BaseModel):
    mean: float
    stdev: float
    mad: float

    def render(self) -> str:
        return f"{self.mean:g}({self.stdev:g},{self.mad:g})"


class MonthlySummary(BaseModel):
    """One row of the yearly monthly-stats report."""

    year: int
    month: int = Field(ge=1, le=12)
    count: int = 0
    wind: Optional[SeriesCell] = None
    temperature: Optional[SeriesCell] = None
    total_solar: Optional[float] = None

    @property
    def month_name(self) -> str:
        return canon.month_name(self.month)

    @property
    def has_data(self) -> bool:
        return self.count > 0

    def cells(self) -> list[str]:
        if not self.has_data or self.wind is None or self.temperature is None:
            return [self.month_name, canon.NO_DATA, "", ""]
        return [
            self.month_name,
            self.wind.render(),
            self.temperature.render(),
            f"{self.total_solar or 0.0:g}",
        ]
