from .base import Base
from .landlord import Landlord
from .tenant import Tenant
from .property import Property
from .tenancy import PropertyRequest, Tenancy

__all__ = [
    "Base",
    "Landlord",
    "Tenant",
    "Property",
    "PropertyRequest",
    "Tenancy",
]
