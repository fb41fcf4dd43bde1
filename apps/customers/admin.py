from django.contrib import admin
from django.utils.html import format_html
from .models import Customer, CustomerSaleEntry


class CustomerSaleEntryInline(admin.TabularInline):
    """Read-only view of the embedded sales history."""
    model = CustomerSaleEntry
    extra = 0
    fields = [
        'date',
        'sale_type',
        'total_price',
        'payment_method',
        'amount_received',
        'sale_id',
    ]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """History entries are written by the ledger service only."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """
    Admin interface for customers.

    Credit, recency and history are read-only here: they change only
    through recorded sales, credit adjustments or history rebuilds.
    """

    list_display = [
        'name',
        'contact',
        'credit_badge',
        'last_purchase',
        'join_date',
    ]
    list_filter = ['join_date', 'last_purchase']
    search_fields = ['name', 'contact']
    ordering = ['name']
    readonly_fields = ['credit', 'last_purchase', 'created_at', 'updated_at']
    inlines = [CustomerSaleEntryInline]
    actions = ['rebuild_history']

    def credit_badge(self, obj):
        """Display credit colored by who owes whom."""
        if obj.credit > 0:
            bg, fg = '#E5C49A', '#2C1810'
        elif obj.credit < 0:
            bg, fg = '#6B8E5E', 'white'
        else:
            bg, fg = '#ccc', '#666'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.credit
        )
    credit_badge.short_description = 'Credit'
    credit_badge.admin_order_field = 'credit'

    @admin.action(description='Rebuild sales history from recorded sales')
    def rebuild_history(self, request, queryset):
        """Rebuild embedded history for the selected customers."""
        from apps.sales.services import rebuild_sales_history

        count = 0
        for customer in queryset:
            rebuild_sales_history(customer_id=customer.id)
            count += 1
        self.message_user(request, f'Rebuilt history for {count} customer(s).')
