# Generated manually to store sale totals without rounding
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('sales', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='sale',
            name='total_price',
            field=models.DecimalField(decimal_places=5, max_digits=19, validators=[MinValueValidator(Decimal('0.00'))]),
        ),
    ]
