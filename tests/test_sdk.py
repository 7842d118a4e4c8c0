# tests/test_sdk.py
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from inventory.errors import NotFoundError, ValidationError
from inventory.main import create_app
from inventory.models import Product
from sdk.inventory_client import InventoryClient


@pytest.fixture
def sdk(store):
    session = TestClient(create_app(store))
    return InventoryClient(base_url="http://testserver", session=session)


def test_sdk_crud_round_trip(sdk):
    widget = sdk.add_product(Product(name="Widget", quantity=5, price=Decimal("9.99")))
    gadget = sdk.add_product(Product(name="Gadget", description="pocket", quantity=2, price=Decimal("3.50")))
    assert (widget.id, gadget.id) == (1, 2)

    assert sdk.delete_product(widget.id) is True
    assert [p.name for p in sdk.get_all_products()] == ["Gadget"]

    gadget.quantity = 10
    updated = sdk.update_product(gadget)
    assert updated.quantity == 10
    assert updated.last_updated > gadget.last_updated
    assert sdk.get_product(2).price == Decimal("3.50")


def test_sdk_search_and_filters(sdk):
    sdk.add_product(Product(name="Widget", quantity=0, category="parts"))
    sdk.add_product(Product(name="Gadget", description="widget holder", quantity=1, category="misc"))

    assert [p.name for p in sdk.search_products("WIDGET")] == ["Widget", "Gadget"]
    assert [p.name for p in sdk.list_products(category="parts")] == ["Widget"]
    assert [p.name for p in sdk.list_products(available_only=True)] == ["Gadget"]


def test_sdk_maps_errors(sdk):
    with pytest.raises(ValidationError):
        sdk.add_product(Product(name="", quantity=1))
    with pytest.raises(NotFoundError):
        sdk.get_product(7)
    with pytest.raises(NotFoundError):
        sdk.update_product(Product(id=7, name="Ghost"))


def test_sdk_update_without_id_is_not_found(sdk):
    sdk.add_product(Product(name="Widget", quantity=1))
    with pytest.raises(NotFoundError):
        sdk.update_product(Product(name="Widget", quantity=2))
    assert sdk.get_product(1).quantity == 1
