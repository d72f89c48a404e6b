# Generated manually for the marketplace purchases app

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('resources', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Purchase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('batch_id', models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ('quantity', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('requested_quantity', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('comment', models.TextField(blank=True)),
                ('purchase_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('is_returned', models.BooleanField(default=False)),
                ('needs_return', models.BooleanField(default=False)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resource', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='resources.resource')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='purchases', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'purchases',
                'ordering': ['-purchase_date', '-id'],
                'indexes': [
                    models.Index(fields=['team', 'resource', 'status'], name='purchases_team_res_st_idx'),
                    models.Index(fields=['status', 'purchase_date'], name='purchases_status_date_idx'),
                    models.Index(fields=['needs_return', 'is_returned'], name='purchases_returns_idx'),
                ],
            },
        ),
    ]
