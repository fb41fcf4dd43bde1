# Generated manually for sales app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('customers', '0001_initial'),
        ('products', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Sale',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('sale_type', models.CharField(choices=[('kg', 'Per kg'), ('pack', 'Per pack')], max_length=10)),
                ('total_price', models.DecimalField(decimal_places=2, max_digits=14, validators=[MinValueValidator(Decimal('0.00'))])),
                ('payment_method', models.CharField(choices=[('cash', 'Cash'), ('online', 'Online'), ('credit', 'Credit')], max_length=10)),
                ('amount_received', models.DecimalField(decimal_places=2, max_digits=14, validators=[MinValueValidator(Decimal('0.00'))])),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('idempotency_key', models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sale_records', to='customers.customer')),
            ],
            options={
                'db_table': 'sales',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['customer', 'date'], name='sales_customer_date_idx'),
                    models.Index(fields=['date'], name='sales_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SaleLineItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('product_ref', models.UUIDField()),
                ('product_name', models.CharField(max_length=200)),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, validators=[MinValueValidator(Decimal('0.000'))])),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('position', models.PositiveIntegerField(default=0)),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sale_line_items', to='products.product')),
                ('sale', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='line_items', to='sales.sale')),
            ],
            options={
                'db_table': 'sale_line_items',
                'ordering': ['position'],
            },
        ),
    ]
