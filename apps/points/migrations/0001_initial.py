# Generated manually for points app

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('organizations', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PointsRule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('rule_type', models.CharField(choices=[('fixed_amount', 'Points per currency unit'), ('percentage', 'Percentage of amount'), ('fixed_per_item', 'Points per item'), ('tiered', 'Tiered')], max_length=20)),
                ('config', models.JSONField(default=dict)),
                ('is_active', models.BooleanField(default=True)),
                ('is_default', models.BooleanField(default=False)),
                ('priority', models.IntegerField(default=0)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('valid_from', models.DateTimeField(blank=True, null=True)),
                ('valid_until', models.DateTimeField(blank=True, null=True)),
                ('days_of_week', models.JSONField(blank=True, null=True)),
                ('time_start', models.TimeField(blank=True, null=True)),
                ('time_end', models.TimeField(blank=True, null=True)),
                ('display_name', models.CharField(blank=True, max_length=200)),
                ('display_icon', models.CharField(blank=True, max_length=50)),
                ('display_color', models.CharField(blank=True, max_length=20)),
                ('show_in_app', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('branch', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='points_rules', to='organizations.branch')),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='points_rules', to='organizations.category')),
                ('organization', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='points_rules', to='organizations.organization')),
            ],
            options={
                'db_table': 'points_rules',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['is_active', 'organization'], name='points_rule_active_org_idx'),
                    models.Index(fields=['priority'], name='points_rule_priority_idx'),
                ],
            },
        ),
    ]
