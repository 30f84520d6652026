"""Restaurant read model interface."""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel

from dinedesk.services.pricing.models import Addon, OpeningHoursPerDay


class MenuItem(BaseModel):
    """Menu item model."""

    name: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    category: Optional[str] = None
    addons: List[Addon] = []  # Priced modifiers offered with the item


class Menu(BaseModel):
    """Menu model."""

    items: List[MenuItem]
    categories: List[str] = []


class OrderTypeSettings(BaseModel):
    """Which order types a tenant accepts."""

    delivery_enabled: bool = True
    collection_enabled: bool = True
    advance_order_enabled: bool = True


class RestaurantSettings(BaseModel):
    """Per-tenant settings read by checkout."""

    name: str
    currency: str = "GBP"
    tax_rate: Optional[Decimal] = None  # Fraction, e.g. 0.2 for 20%
    order_prefix: str = "ORD"
    advance_order_prefix: str = "ADV"
    time_slot_interval: int = 15  # minutes
    opening_hours: Dict[str, OpeningHoursPerDay] = {}
    order_types: OrderTypeSettings = OrderTypeSettings()


class TenantNotFoundError(LookupError):
    """Raised when a tenant slug has no restaurant configured."""

    def __init__(self, tenant: str):
        super().__init__(f"Restaurant '{tenant}' not found")
        self.tenant = tenant


class RestaurantProvider(ABC):
    """Abstract base class for restaurant data providers."""

    @abstractmethod
    async def list_tenants(self) -> List[str]:
        """Get all configured tenant slugs."""
        pass

    @abstractmethod
    async def get_settings(self, tenant: str) -> Optional[RestaurantSettings]:
        """Get a tenant's settings."""
        pass

    @abstractmethod
    async def get_menu(self, tenant: str) -> Optional[Menu]:
        """Get a tenant's menu."""
        pass
