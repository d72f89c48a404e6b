# Generated manually for team compositions

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='TeamComposition',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150, unique=True)),
                ('dev_total', models.PositiveIntegerField(default=0)),
                ('infra_total', models.PositiveIntegerField(default=0)),
                ('data_total', models.PositiveIntegerField(default=0)),
                ('iot_total', models.PositiveIntegerField(default=0)),
                ('sysemb_total', models.PositiveIntegerField(default=0)),
                ('dev_filled', models.PositiveIntegerField(default=0)),
                ('infra_filled', models.PositiveIntegerField(default=0)),
                ('data_filled', models.PositiveIntegerField(default=0)),
                ('iot_filled', models.PositiveIntegerField(default=0)),
                ('sysemb_filled', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'team_compositions',
                'ordering': ['name'],
            },
        ),
    ]
