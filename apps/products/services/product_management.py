"""Product CRUD operations service."""

from django.db import transaction
from uuid import UUID
from typing import Dict, Any

from ..models import Product
from .exceptions import ProductNotFoundError
from .pricing import derive_price_per_kg, to_decimal


@transaction.atomic
def create_product(
    *,
    product_name: str,
    price_per_pack,
    kgs_per_pack,
) -> Product:
    """
    Create a new product with server-derived price_per_kg.

    Raises:
        InvalidProductError: If kgs_per_pack <= 0 or price_per_pack < 0
    """
    price_per_kg = derive_price_per_kg(price_per_pack, kgs_per_pack)

    return Product.objects.create(
        product_name=product_name.strip(),
        price_per_pack=to_decimal(price_per_pack, 'pricePerPack'),
        kgs_per_pack=to_decimal(kgs_per_pack, 'kgsPerPack'),
        price_per_kg=price_per_kg,
    )


@transaction.atomic
def update_product(
    *,
    product_id: UUID,
    data: Dict[str, Any]
) -> Product:
    """
    Update a product and re-derive price_per_kg.

    Sales already recorded keep their frozen name and price.

    Raises:
        ProductNotFoundError: If product doesn't exist
        InvalidProductError: If the resulting pricing is invalid
    """
    try:
        product = (
            Product.objects
            .select_for_update()
            .get(id=product_id)
        )
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")

    if 'product_name' in data:
        product.product_name = data['product_name'].strip()
    if 'price_per_pack' in data:
        product.price_per_pack = to_decimal(data['price_per_pack'], 'pricePerPack')
    if 'kgs_per_pack' in data:
        product.kgs_per_pack = to_decimal(data['kgs_per_pack'], 'kgsPerPack')

    product.price_per_kg = derive_price_per_kg(product.price_per_pack, product.kgs_per_pack)
    product.save()

    return product


def get_product(*, product_id: UUID) -> Product:
    """
    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    try:
        return Product.objects.get(id=product_id)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")


@transaction.atomic
def delete_product(*, product_id: UUID) -> None:
    """
    Delete a product. Sale line items keep their frozen copy.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    deleted, _ = Product.objects.filter(id=product_id).delete()
    if not deleted:
        raise ProductNotFoundError(f"Product {product_id} not found")
