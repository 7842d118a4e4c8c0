#!/usr/bin/env python
from decimal import Decimal

from inventory.config import get_settings
from inventory.models import Product
from sdk.inventory_client import InventoryClient


def main():
    settings = get_settings()
    c = InventoryClient(base_url=f"http://{settings.api_host}:{settings.api_port}")

    # -----------------------------
    # Add products
    # -----------------------------
    print("Adding products...")
    widget = c.add_product(Product(name="Widget", quantity=5, price=Decimal("9.99"), category="parts"))
    gadget = c.add_product(Product(name="Gadget", description="Pocket gadget", quantity=2,
                                   price=Decimal("3.50"), category="gadgets"))
    print(widget)
    print(gadget)

    # -----------------------------
    # List and search
    # -----------------------------
    print("\nListing products...")
    for p in c.get_all_products():
        print(p.id, p)

    print("\nSearching for 'pocket'...")
    print(c.search_products("pocket"))

    # -----------------------------
    # Update and delete
    # -----------------------------
    print("\nRestocking the gadget...")
    gadget.quantity = 10
    print(c.update_product(gadget))

    print("\nDeleting the widget...")
    print(c.delete_product(widget.id))

    print("\nFinal inventory:")
    for p in c.get_all_products():
        print(p.id, p, p.price, p.last_updated.isoformat())


if __name__ == "__main__":
    main()
