from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MONEY_PATTERN = r"^\d{1,15}(\.\d{1,2})?$"
DECIMAL_PATTERN = r"^\d+(\.\d+)?$"


class SimulationInputDTO(BaseModel):
    """Request payload for calculating a credit simulation."""

    vehicle_price: str = Field(
        description="On-the-road vehicle price as decimal string",
        examples=["150000000"],
        pattern=MONEY_PATTERN,
    )
    down_payment_percent: str = Field(
        default="20",
        description="Down payment as a percentage of the price (0-99), decimal string",
        examples=["20"],
        pattern=DECIMAL_PATTERN,
    )
    tenor_months: int = Field(description="Loan duration in months", examples=[12], ge=1)
    category: Literal["PASSENGER", "COMMERCIAL"] = Field(examples=["PASSENGER"])
    sub_category: Literal["PASSENGER", "TRUCK", "BUS"] = Field(
        default="PASSENGER",
        description="Commercial sub-category; ignored for PASSENGER",
    )
    is_loading_unit: bool = False
    payment_type: Literal["ADDB", "ADDM"] = Field(
        description="ADDM collects the first installment at signing",
        examples=["ADDB"],
    )
    admin_fee: str = Field(default="3000000", pattern=MONEY_PATTERN, examples=["3000000"])
    insurance_label: str | None = Field(
        default=None,
        description="Chosen insurance option; the lowest-rate option is used when omitted",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "vehicle_price": "150000000",
                "down_payment_percent": "20",
                "tenor_months": 12,
                "category": "PASSENGER",
                "payment_type": "ADDB",
                "admin_fee": "3000000",
            }
        }
    )


class SolveBudgetRequestDTO(BaseModel):
    """Request payload for finding the down payment that meets a budget."""

    target_kind: Literal["TOTAL_FIRST_PAYMENT", "MONTHLY_INSTALLMENT"] = Field(
        examples=["TOTAL_FIRST_PAYMENT"]
    )
    target_value: str = Field(
        description="Target amount as decimal string",
        examples=["33050000"],
        pattern=MONEY_PATTERN,
    )
    simulation: SimulationInputDTO = Field(
        description="Simulation input; down_payment_percent is chosen by the solver",
    )


class CalculationResultDTO(BaseModel):
    """Full credit breakdown. Money and rates are decimal strings."""

    star_level: int
    interest_rate: str = Field(description="Annual flat rate as fraction (e.g. '0.06')")
    insurance_rate: str = Field(description="Fraction of the vehicle price")
    vehicle_price: str
    down_payment_amount: str
    down_payment_percent: str
    pure_loan_principal: str
    insurance_amount: str
    policy_fee: str
    total_financed_amount: str = Field(description="AR: principal + insurance + policy fee")
    total_interest: str
    total_loan_amount: str
    installment_divisor: int
    monthly_installment: str
    admin_fee: str
    policy_fee_at_first_payment: str
    first_installment_due_now: str
    total_first_payment: str = Field(description="TDP: cash due at signing")
    residual_asset_value: str = Field(description="Vehicle price minus TDP")
    is_special_scenario: bool
    interest_rate_fallback: bool = Field(
        description="True when no interest rate matched and the configured fallback was used"
    )
    tenor_months: int
    insurance_label: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "star_level": 5,
                "interest_rate": "0.06",
                "insurance_rate": "0.02",
                "vehicle_price": "150000000",
                "down_payment_amount": "30000000",
                "down_payment_percent": "20",
                "pure_loan_principal": "120000000",
                "insurance_amount": "3000000",
                "policy_fee": "100000",
                "total_financed_amount": "123100000",
                "total_interest": "7386000",
                "total_loan_amount": "130486000",
                "installment_divisor": 12,
                "monthly_installment": "10880000",
                "admin_fee": "3000000",
                "policy_fee_at_first_payment": "50000",
                "first_installment_due_now": "0",
                "total_first_payment": "33050000",
                "residual_asset_value": "116950000",
                "is_special_scenario": False,
                "interest_rate_fallback": False,
                "tenor_months": 12,
                "insurance_label": "ALL RISK",
            }
        }
    )
