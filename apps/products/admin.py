from django.contrib import admin
from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for the product catalogue."""

    list_display = [
        'product_name',
        'price_per_pack',
        'kgs_per_pack',
        'price_per_kg',
        'updated_at',
    ]
    search_fields = ['product_name']
    ordering = ['product_name']
    readonly_fields = ['price_per_kg', 'created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        """Keep price_per_kg derived when edited through the admin."""
        from .services import derive_price_per_kg

        obj.price_per_kg = derive_price_per_kg(obj.price_per_pack, obj.kgs_per_pack)
        super().save_model(request, obj, form, change)
