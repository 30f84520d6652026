"""Restaurant repository."""
from decimal import Decimal
from typing import List, Optional

from dinedesk.core.config import settings as app_settings
from dinedesk.services.restaurant.base import (
    Menu,
    MenuItem,
    RestaurantProvider,
    RestaurantSettings,
    TenantNotFoundError,
)


class RestaurantRepository:
    """Repository for restaurant read-model operations."""

    def __init__(self, provider: RestaurantProvider):
        self.provider = provider

    async def list_tenants(self) -> List[str]:
        """Get all tenant slugs."""
        return await self.provider.list_tenants()

    async def get_settings(self, tenant: str) -> Optional[RestaurantSettings]:
        """Get tenant settings."""
        return await self.provider.get_settings(tenant)

    async def require_settings(self, tenant: str) -> RestaurantSettings:
        """Get tenant settings or raise TenantNotFoundError."""
        restaurant = await self.provider.get_settings(tenant)
        if restaurant is None:
            raise TenantNotFoundError(tenant)
        return restaurant

    async def get_menu(self, tenant: str) -> Menu:
        """Get tenant menu or raise TenantNotFoundError."""
        menu = await self.provider.get_menu(tenant)
        if menu is None:
            raise TenantNotFoundError(tenant)
        return menu

    async def get_menu_item(self, tenant: str, item_name: str) -> Optional[MenuItem]:
        """Get a menu item by name (case-insensitive)."""
        menu = await self.get_menu(tenant)
        item_name_lower = item_name.lower().strip()
        for item in menu.items:
            if item.name.lower() == item_name_lower:
                return item
        return None

    @staticmethod
    def tax_rate(restaurant: RestaurantSettings) -> Decimal:
        """Tenant tax rate, falling back to the configured default."""
        if restaurant.tax_rate is None:
            return app_settings.default_tax_rate
        return restaurant.tax_rate
