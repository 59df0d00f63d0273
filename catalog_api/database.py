from typing import Tuple

from .models import Product

# The seed catalog every read is answered from. It is a tuple of frozen
# models: writes are echoed back to the caller and never stored here.

PRODUCTS: Tuple[Product, ...] = (
    Product(id=1, name="Mobiles", description="Latest smartphones", price=699, category="Electronics", inStock=True),
    Product(id=2, name="Laptops", description="High performance laptops", price=1299, category="Electronics", inStock=True),
    Product(id=3, name="Headphones", description="Noise-cancelling headphones", price=199, category="Electronics", inStock=True),
    Product(id=4, name="Smartwatch", description="Fitness tracking smartwatch", price=249, category="Electronics", inStock=True),
    Product(id=5, name="Tablets", description="Portable tablets for work and play", price=499, category="Electronics", inStock=False),
    Product(id=6, name="Cameras", description="Digital cameras for photography enthusiasts", price=899, category="Electronics", inStock=False),
)


def get_catalog() -> Tuple[Product, ...]:
    return PRODUCTS
