# Generated manually for the resource catalog

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Resource',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('cost', models.PositiveIntegerField(help_text='Price in credits per unit')),
                ('quantity', models.PositiveIntegerField(help_text='Units currently in stock')),
                ('max_per_team', models.PositiveIntegerField(help_text='Cap on units a single team may hold')),
                ('resource_type', models.CharField(choices=[('service', 'Service'), ('equipment', 'Equipment'), ('perk', 'Perk')], default='equipment', max_length=20)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('is_active', models.BooleanField(default=True)),
                ('is_non_returnable', models.BooleanField(default=False, help_text='Consumables and services are never handed back')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'resources',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['is_active', 'resource_type'], name='resources_active_type_idx')],
            },
        ),
    ]
