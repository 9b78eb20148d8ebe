# Generated manually for beneficiaries app

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Beneficiary',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(blank=True, max_length=100)),
                ('last_name', models.CharField(blank=True, max_length=100)),
                ('email', models.EmailField(blank=True, db_index=True, max_length=255)),
                ('phone', models.CharField(blank=True, max_length=50)),
                ('document_id', models.CharField(blank=True, max_length=50)),
                ('available_points', models.IntegerField(default=0)),
                ('registration_date', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'beneficiaries',
                'ordering': ['last_name', 'first_name'],
                'verbose_name_plural': 'beneficiaries',
            },
        ),
    ]
