from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .utils import monthly_rate


class SimulationInputs(BaseModel):
    """
    Form inputs for one simulation run.

    Non-finite numbers are rejected at construction; see
    data_prep.validators.validate_inputs for the InvalidInput translation.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    debt_principal: float = Field(gt=0, description="Outstanding debt balance")
    annual_rate_percent: float = Field(ge=0, description="APR in percent, e.g. 20 for 20%")
    monthly_payment: float = Field(gt=0, description="Cash available each month")
    start_price: float = Field(gt=0, description="Current asset price")

    @property
    def monthly_rate(self) -> float:
        return monthly_rate(self.annual_rate_percent)

    @property
    def interest_only_payment(self) -> float:
        return self.debt_principal * self.monthly_rate
