"""In-memory restaurant provider."""
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from dinedesk.services.restaurant.base import (
    Menu,
    MenuItem,
    RestaurantProvider,
    RestaurantSettings,
)


class InMemoryRestaurantProvider(RestaurantProvider):
    """In-memory restaurant provider using YAML configuration."""

    def __init__(self, restaurants_file: Optional[str] = None):
        """Initialize with optional restaurants file path."""
        if restaurants_file is None:
            restaurants_file = Path(__file__).parent / "data" / "restaurants.yaml"
        self.restaurants_file = Path(restaurants_file)
        self._tenants: Optional[Dict[str, Dict[str, Any]]] = None

    async def _load(self) -> Dict[str, Dict[str, Any]]:
        """Load tenants from YAML file."""
        if self._tenants is None:
            if not self.restaurants_file.exists():
                # Demo tenant if file doesn't exist
                self._tenants = {
                    "demo": {
                        "settings": {
                            "name": "Demo Bistro",
                            "tax_rate": "0.2",
                            "opening_hours": {
                                day: {"time_mode": "single", "open_time": "09:00", "close_time": "22:00"}
                                for day in (
                                    "monday",
                                    "tuesday",
                                    "wednesday",
                                    "thursday",
                                    "friday",
                                    "saturday",
                                    "sunday",
                                )
                            },
                        },
                        "menu": {
                            "items": [
                                {
                                    "name": "margherita",
                                    "description": "Tomato, mozzarella, basil",
                                    "price": "9.50",
                                    "category": "pizza",
                                    "addons": [{"name": "extra cheese", "price": "1.00"}],
                                },
                                {
                                    "name": "garlic bread",
                                    "description": "Toasted with garlic butter",
                                    "price": "4.00",
                                    "category": "sides",
                                },
                            ],
                            "categories": ["pizza", "sides"],
                        },
                    }
                }
            else:
                with open(self.restaurants_file, "r") as f:
                    data = yaml.safe_load(f) or {}
                self._tenants = data.get("tenants", {}) or {}
        return self._tenants

    async def list_tenants(self) -> List[str]:
        """Get all configured tenant slugs."""
        return list((await self._load()).keys())

    async def get_settings(self, tenant: str) -> Optional[RestaurantSettings]:
        """Get a tenant's settings."""
        entry = (await self._load()).get(tenant)
        if entry is None:
            return None
        return RestaurantSettings(**(entry.get("settings") or {"name": tenant}))

    async def get_menu(self, tenant: str) -> Optional[Menu]:
        """Get a tenant's menu."""
        entry = (await self._load()).get(tenant)
        if entry is None:
            return None
        menu_data = entry.get("menu") or {}
        items = [MenuItem(**item) for item in menu_data.get("items", [])]
        categories = menu_data.get("categories") or sorted(
            {item.category for item in items if item.category}
        )
        return Menu(items=items, categories=categories)
