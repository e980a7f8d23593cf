from typing import Optional
from pydantic import BaseModel, Field


class PropertyIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str
    address: str = Field(..., min_length=1, max_length=255)
    rent_fee: int = Field(..., ge=0)
    availability: bool = False
    image: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Two bedroom flat",
                "description": "Bright flat close to the station",
                "address": "12 Harbour Road",
                "rent_fee": 1500,
                "availability": False,
                "image": "https://example.com/flat.jpg",
            }
        }


class PropertyOut(BaseModel):
    id: int
    landlord_id: int
    title: str
    description: str
    address: str
    rent_fee: int
    availability: bool
    image: Optional[str] = None

    class Config:
        from_attributes = True


class PropertyMutationResponse(BaseModel):
    message: str
    property_id: int
