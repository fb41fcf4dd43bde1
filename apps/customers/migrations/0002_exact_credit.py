# Generated manually to carry exact sale totals into credit
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('customers', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='customer',
            name='credit',
            field=models.DecimalField(decimal_places=5, default=Decimal('0.00'), max_digits=19),
        ),
        migrations.AlterField(
            model_name='customersaleentry',
            name='total_price',
            field=models.DecimalField(decimal_places=5, max_digits=19),
        ),
    ]
