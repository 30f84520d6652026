"""Unit tests for persistence services (vouchers, zones and orders)."""
import pytest
from decimal import Decimal

from dinedesk.services.persistence.orders import OrderPersistenceService, to_money
from dinedesk.services.persistence.vouchers import VoucherStore
from dinedesk.services.persistence.zones import DeliveryZoneStore
from dinedesk.services.pricing.models import (
    Addon,
    DeliveryZone,
    OrderItem,
    Voucher,
    VoucherType,
)


def _voucher(code="save10", **overrides):
    data = {
        "code": code,
        "type": VoucherType.PERCENTAGE,
        "value": Decimal("10"),
        "min_order": Decimal("20"),
    }
    data.update(overrides)
    return Voucher(**data)


class TestVoucherStore:
    """Test voucher persistence."""

    @pytest.mark.asyncio
    async def test_create_voucher(self, test_db):
        """Test creating a voucher stores the code upper-cased."""
        store = VoucherStore(test_db)

        voucher = await store.create_voucher("testbistro", _voucher())

        assert voucher.id is not None
        assert voucher.code == "SAVE10"
        assert voucher.type == VoucherType.PERCENTAGE
        assert voucher.value == Decimal("10")
        assert voucher.used_count == 0
        assert voucher.active is True

    @pytest.mark.asyncio
    async def test_duplicate_code_rejected(self, test_db):
        """Test codes are unique per tenant regardless of case."""
        store = VoucherStore(test_db)
        await store.create_voucher("testbistro", _voucher("SAVE10"))

        with pytest.raises(ValueError, match="already exists"):
            await store.create_voucher("testbistro", _voucher("save10"))

    @pytest.mark.asyncio
    async def test_same_code_other_tenant(self, test_db):
        """Test another tenant may reuse a code."""
        store = VoucherStore(test_db)
        await store.create_voucher("testbistro", _voucher())

        other = await store.create_voucher("collectiononly", _voucher())

        assert other.code == "SAVE10"

    @pytest.mark.asyncio
    async def test_list_vouchers_scoped_to_tenant(self, test_db):
        """Test listing only returns the tenant's own vouchers."""
        store = VoucherStore(test_db)
        await store.create_voucher("testbistro", _voucher("A"))
        await store.create_voucher("testbistro", _voucher("B", active=False))
        await store.create_voucher("collectiononly", _voucher("C"))

        all_codes = [v.code for v in await store.list_vouchers("testbistro")]
        active_codes = [v.code for v in await store.list_vouchers("testbistro", active_only=True)]

        assert all_codes == ["A", "B"]
        assert active_codes == ["A"]

    @pytest.mark.asyncio
    async def test_set_active(self, test_db):
        """Test toggling a voucher."""
        store = VoucherStore(test_db)
        voucher = await store.create_voucher("testbistro", _voucher())

        updated = await store.set_active("testbistro", voucher.id, False)

        assert updated.active is False
        assert await store.set_active("collectiononly", voucher.id, True) is None

    @pytest.mark.asyncio
    async def test_increment_usage(self, test_db):
        """Test redemptions are counted."""
        store = VoucherStore(test_db)
        voucher = await store.create_voucher("testbistro", _voucher(usage_limit=5))

        await store.increment_usage("testbistro", voucher.id)
        await store.increment_usage("testbistro", voucher.id)

        [stored] = await store.list_vouchers("testbistro")
        assert stored.used_count == 2

    @pytest.mark.asyncio
    async def test_delete_voucher(self, test_db):
        """Test deleting a voucher."""
        store = VoucherStore(test_db)
        voucher = await store.create_voucher("testbistro", _voucher())

        assert await store.delete_voucher("collectiononly", voucher.id) is False
        assert await store.delete_voucher("testbistro", voucher.id) is True
        assert await store.list_vouchers("testbistro") == []

    @pytest.mark.asyncio
    async def test_increment_usage_stops_at_limit(self, test_db):
        """Test the increment refuses to go past usage_limit."""
        store = VoucherStore(test_db)
        voucher = await store.create_voucher("testbistro", _voucher(usage_limit=1))

        assert await store.increment_usage("testbistro", voucher.id) is True
        assert await store.increment_usage("testbistro", voucher.id) is False

        [stored] = await store.list_vouchers("testbistro")
        assert stored.used_count == 1

    @pytest.mark.asyncio
    async def test_increment_usage_unlimited(self, test_db):
        """Test vouchers without a limit keep counting."""
        store = VoucherStore(test_db)
        voucher = await store.create_voucher("testbistro", _voucher())

        for _ in range(3):
            assert await store.increment_usage("testbistro", voucher.id) is True

        [stored] = await store.list_vouchers("testbistro")
        assert stored.used_count == 3

    @pytest.mark.asyncio
    async def test_update_voucher(self, test_db):
        """Test editing keeps the id and the redemption count."""
        store = VoucherStore(test_db)
        voucher = await store.create_voucher("testbistro", _voucher(usage_limit=5))
        await store.increment_usage("testbistro", voucher.id)

        updated = await store.update_voucher(
            "testbistro",
            voucher.id,
            _voucher("summer", type=VoucherType.AMOUNT, value=Decimal("4"), usage_limit=10),
        )

        assert updated.id == voucher.id
        assert updated.code == "SUMMER"
        assert updated.type == VoucherType.AMOUNT
        assert updated.value == Decimal("4")
        assert updated.usage_limit == 10
        assert updated.used_count == 1

    @pytest.mark.asyncio
    async def test_update_voucher_code_clash(self, test_db):
        """Test renaming onto another voucher's code is rejected."""
        store = VoucherStore(test_db)
        await store.create_voucher("testbistro", _voucher("A"))
        other = await store.create_voucher("testbistro", _voucher("B"))

        with pytest.raises(ValueError, match="already exists"):
            await store.update_voucher("testbistro", other.id, _voucher("a"))

    @pytest.mark.asyncio
    async def test_update_voucher_missing(self, test_db):
        store = VoucherStore(test_db)

        assert await store.update_voucher("testbistro", 999, _voucher()) is None


class TestDeliveryZoneStore:
    """Test delivery zone persistence."""

    @pytest.mark.asyncio
    async def test_create_zone_normalizes_prefixes(self, test_db):
        """Test prefixes are trimmed, upper-cased and blanks dropped."""
        store = DeliveryZoneStore(test_db)

        zone = await store.create_zone(
            "testbistro",
            DeliveryZone(name="Central", postcodes=[" sw1a ", "", "ec1"], delivery_fee=Decimal("3.50")),
        )

        assert zone.id is not None
        assert zone.postcodes == ["SW1A", "EC1"]
        assert zone.delivery_fee == Decimal("3.50")

    @pytest.mark.asyncio
    async def test_list_zones_in_creation_order(self, test_db):
        """Test zones come back oldest first for first-match resolution."""
        store = DeliveryZoneStore(test_db)
        await store.create_zone("testbistro", DeliveryZone(name="First", postcodes=["SW1A"], delivery_fee=Decimal("2")))
        await store.create_zone("testbistro", DeliveryZone(name="Second", postcodes=["SW"], delivery_fee=Decimal("4")))
        await store.create_zone("collectiononly", DeliveryZone(name="Other", postcodes=["N1"], delivery_fee=Decimal("1")))

        zones = await store.list_zones("testbistro")

        assert [zone.name for zone in zones] == ["First", "Second"]

    @pytest.mark.asyncio
    async def test_delete_zone(self, test_db):
        """Test deleting a zone."""
        store = DeliveryZoneStore(test_db)
        zone = await store.create_zone("testbistro", DeliveryZone(name="Central", postcodes=["SW1A"], delivery_fee=Decimal("2")))

        assert await store.delete_zone("testbistro", zone.id + 1) is False
        assert await store.delete_zone("testbistro", zone.id) is True
        assert await store.list_zones("testbistro") == []

    @pytest.mark.asyncio
    async def test_update_zone_keeps_resolution_order(self, test_db):
        """Test editing a zone leaves it where it was in first-match order."""
        store = DeliveryZoneStore(test_db)
        first = await store.create_zone("testbistro", DeliveryZone(name="First", postcodes=["SW1A"], delivery_fee=Decimal("2")))
        await store.create_zone("testbistro", DeliveryZone(name="Second", postcodes=["SW"], delivery_fee=Decimal("4")))

        updated = await store.update_zone(
            "testbistro",
            first.id,
            DeliveryZone(name="First", postcodes=["sw1a", "sw1p"], delivery_fee=Decimal("2.75"), delivery_time=20),
        )

        assert updated.id == first.id
        assert updated.postcodes == ["SW1A", "SW1P"]
        zones = await store.list_zones("testbistro")
        assert [zone.name for zone in zones] == ["First", "Second"]
        assert zones[0].delivery_fee == Decimal("2.75")
        assert zones[0].delivery_time == 20

    @pytest.mark.asyncio
    async def test_update_zone_other_tenant(self, test_db):
        store = DeliveryZoneStore(test_db)
        zone = await store.create_zone("testbistro", DeliveryZone(name="Central", postcodes=["SW1A"], delivery_fee=Decimal("2")))

        assert await store.update_zone("collectiononly", zone.id, DeliveryZone(name="X")) is None


class TestOrderPersistence:
    """Test order persistence service."""

    @pytest.mark.asyncio
    async def test_create_order(self, test_db):
        """Test creating an order with items and a prefixed order number."""
        service = OrderPersistenceService(test_db)
        items = [
            OrderItem(
                name="burger",
                price=Decimal("10.00"),
                quantity=2,
                selected_addons=[Addon(name="extra cheese", price=Decimal("1"))],
                special_instructions="no onions",
            ),
        ]

        order = await service.create_order(
            "testbistro",
            {
                "order_type": "delivery",
                "fulfilment_type": "delivery",
                "subtotal": Decimal("22"),
                "tax": Decimal("4.4"),
                "delivery_fee": Decimal("2.5"),
                "discount": Decimal("0"),
                "total": Decimal("28.9"),
            },
            items,
            order_prefix="TST",
        )

        assert order.id is not None
        assert order.order_number == f"TST-{order.id:04d}"
        assert order.status == "pending"
        assert order.total == Decimal("28.90")
        assert len(order.items) == 1
        assert order.items[0].addons == [{"name": "extra cheese", "price": "1.00"}]
        assert order.items[0].special_instructions == "no onions"

    @pytest.mark.asyncio
    async def test_get_order_by_id(self, test_db):
        """Test retrieving an order with items, scoped to its tenant."""
        service = OrderPersistenceService(test_db)
        order = await service.create_order(
            "testbistro",
            {"order_type": "collection", "fulfilment_type": "collection", "total": Decimal("3.5")},
            [OrderItem(name="fries", price=Decimal("3.50"))],
        )

        retrieved = await service.get_order_by_id("testbistro", order.id)

        assert retrieved is not None
        assert retrieved.order_number == f"ORD-{order.id:04d}"
        assert [item.item_name for item in retrieved.items] == ["fries"]
        assert await service.get_order_by_id("collectiononly", order.id) is None

    @pytest.mark.asyncio
    async def test_list_orders(self, test_db):
        """Test listing returns newest first and respects the limit."""
        service = OrderPersistenceService(test_db)
        for _ in range(3):
            await service.create_order(
                "testbistro",
                {"order_type": "collection", "fulfilment_type": "collection"},
                [OrderItem(name="soda", price=Decimal("2"))],
            )

        orders = await service.list_orders("testbistro", limit=2)

        assert len(orders) == 2
        assert orders[0].id > orders[1].id
        assert await service.list_orders("collectiononly") == []


def test_to_money_rounds_half_up():
    assert to_money(Decimal("1.005")) == Decimal("1.01")
    assert to_money(Decimal("4.4")) == Decimal("4.40")
    assert to_money(None) == Decimal("0.00")
