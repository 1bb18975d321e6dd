"""REST API error response models, used in route `responses=` documentation."""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One field-level problem inside a validation error."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "simulation.vehicle_price",
                "message": "Must be a valid decimal: abc",
                "code": "INVALID_DECIMAL",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Body of every non-2xx response.

    `code` is stable and machine-readable; `errors` is present only when
    specific fields can be blamed.
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Simulation with identifier '42' not found", "code": "NOT_FOUND"},
                {
                    "detail": "No insurance rate available for this vehicle and tenor",
                    "code": "VALIDATION_ERROR",
                },
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "insurance_label",
                            "message": "Must be one of ['ALL RISK', 'TLO']",
                            "code": "UNKNOWN_INSURANCE_LABEL",
                        }
                    ],
                },
            ]
        }
    )
