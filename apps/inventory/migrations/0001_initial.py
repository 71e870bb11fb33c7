# Generated manually for the inventory app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('shops', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Ingredient',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('quantity', models.FloatField(default=0, validators=[MinValueValidator(0), MaxValueValidator(1000000)])),
                ('unit_value', models.FloatField(default=1, validators=[MinValueValidator(0)])),
                ('unit', models.CharField(choices=[('g', 'Gram'), ('kg', 'Kilogram'), ('ml', 'Milliliter'), ('l', 'Liter'), ('piece', 'Piece')], default='g', max_length=10)),
                ('used', models.FloatField(default=0, validators=[MinValueValidator(0)])),
                ('min_quantity', models.FloatField(default=0, validators=[MinValueValidator(0)])),
                ('cost_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('10000000'))])),
                ('expiry_date', models.DateField(blank=True, null=True)),
                ('version', models.PositiveIntegerField(default=0, editable=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('shop', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ingredients', to='shops.shop')),
            ],
            options={
                'db_table': 'ingredients',
                'ordering': ['name'],
            },
        ),
        migrations.AddIndex(
            model_name='ingredient',
            index=models.Index(fields=['shop', 'name'], name='ingredients_shop_name_idx'),
        ),
    ]
