"""Group schemas."""

from pydantic import BaseModel, Field, model_validator

from src.models.enums import BudgetApproach


class BudgetConfig(BaseModel):
    """Budget configuration for a group. Amounts are in cents."""

    budget_approach: BudgetApproach | None = None
    budget_amount: int | None = Field(None, gt=0)

    @model_validator(mode="after")
    def validate_amount_matches_approach(self) -> "BudgetConfig":
        """An approach needs an amount, and an amount needs an approach."""
        if self.budget_approach is not None and self.budget_amount is None:
            raise ValueError("budget_amount is required when budget_approach is set")
        if self.budget_approach is None and self.budget_amount is not None:
            raise ValueError("budget_amount requires a budget_approach")
        return self


class GroupCreate(BaseModel):
    """Create a new group."""

    name: str = Field(..., min_length=1, max_length=255)
    budget: BudgetConfig = Field(default_factory=BudgetConfig)
