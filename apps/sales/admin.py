from django.contrib import admin
from django.utils.html import format_html
from .models import Sale, SaleLineItem, PaymentMethod


class SaleLineItemInline(admin.TabularInline):
    """Read-only line items within a sale."""
    model = SaleLineItem
    extra = 0
    fields = ['position', 'product_name', 'quantity', 'price', 'product']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    """
    Admin interface for sales.

    Sales are recorded through the API only, since the customer's credit,
    recency and history must change in the same transaction. The admin is
    a read-only audit view.
    """

    list_display = [
        'date',
        'customer',
        'sale_type',
        'total_price',
        'amount_received',
        'payment_badge',
    ]
    list_filter = ['payment_method', 'sale_type', 'date']
    search_fields = ['customer__name', 'idempotency_key']
    date_hierarchy = 'date'
    ordering = ['-date']
    list_select_related = ['customer']
    inlines = [SaleLineItemInline]
    readonly_fields = [
        'id',
        'customer',
        'sale_type',
        'total_price',
        'payment_method',
        'amount_received',
        'date',
        'idempotency_key',
        'created_at',
    ]

    def payment_badge(self, obj):
        """Display payment method as colored badge."""
        colors = {
            PaymentMethod.CASH: ('#6B8E5E', 'white'),
            PaymentMethod.ONLINE: ('#A47449', 'white'),
            PaymentMethod.CREDIT: ('#E5C49A', '#2C1810'),
        }
        bg, fg = colors.get(obj.payment_method, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_payment_method_display()
        )
    payment_badge.short_description = 'Payment'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
