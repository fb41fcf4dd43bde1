# Generated manually for customers app

import uuid
from decimal import Decimal
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('contact', models.CharField(max_length=100)),
                ('credit', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('join_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('last_purchase', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'customers',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['name'], name='customers_name_idx'),
                    models.Index(fields=['last_purchase'], name='customers_last_purchase_idx'),
                    models.Index(fields=['credit'], name='customers_credit_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CustomerSaleEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sale_id', models.UUIDField(unique=True)),
                ('sale_type', models.CharField(max_length=10)),
                ('products', models.JSONField(default=list)),
                ('total_price', models.DecimalField(decimal_places=2, max_digits=14)),
                ('payment_method', models.CharField(max_length=10)),
                ('amount_received', models.DecimalField(decimal_places=2, max_digits=14)),
                ('date', models.DateTimeField()),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sales', to='customers.customer')),
            ],
            options={
                'db_table': 'customer_sale_entries',
                'ordering': ['id'],
            },
        ),
    ]
