"""Schemas for the address autocomplete endpoint."""

from pydantic import BaseModel, Field


class Suggestion(BaseModel):
    """One normalized tax-lot address offered to the autocomplete widget."""

    bbl: str = Field(..., description="10-digit Borough-Block-Lot identifier, zero-padded.")
    address: str = Field(..., description="Address as recorded in PLUTO, e.g. '350 5 AVENUE'.")
    borough: str = Field("", description="Borough name, e.g. Manhattan.")
    zipcode: str = Field("", description="5-digit zip code, empty when unknown.")
    neighborhood: str = Field("", description="Neighborhood derived from the zip code, empty when unknown.")
    units: int = Field(0, ge=0, description="Residential units on the lot.")


class AutocompleteResponse(BaseModel):
    """Response for GET /api/autocomplete. suggestions is always present, possibly empty."""

    suggestions: list[Suggestion] = Field(default_factory=list, description="At most 8 suggestions.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "suggestions": [
                        {
                            "bbl": "1008350041",
                            "address": "350 5 AVENUE",
                            "borough": "Manhattan",
                            "zipcode": "10118",
                            "neighborhood": "",
                            "units": 0,
                        }
                    ]
                }
            ]
        }
    }
