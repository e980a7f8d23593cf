from pydantic import BaseModel


class ApproveRequest(BaseModel):
    tenant_id: int


class _PropertySummary(BaseModel):
    id: int
    tenant_id: int
    property_id: int
    property_title: str
    property_description: str
    property_address: str
    property_rent_fee: int
    property_availability: bool


class TenantApprovedProperty(_PropertySummary):
    landlord_first_name: str
    landlord_last_name: str


class LandlordTenancyRow(_PropertySummary):
    """Used for both pending requests and approved tenancies on a landlord's properties."""

    tenant_first_name: str
    tenant_last_name: str
