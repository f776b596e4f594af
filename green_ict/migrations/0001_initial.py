import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AuditRunLock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period_month', models.DateField(unique=True)),
                ('last_started_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('run_count', models.PositiveIntegerField(default=0)),
            ],
            options={
                'verbose_name': 'Audit Run Lock',
                'verbose_name_plural': 'Audit Run Locks',
            },
        ),
        migrations.CreateModel(
            name='MonthlyReport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period_month', models.DateField(help_text='First day of the reporting month', unique=True)),
                ('methodology_version', models.CharField(max_length=80)),
                ('scope1_kg', models.DecimalField(decimal_places=4, max_digits=18)),
                ('scope2_location_kg', models.DecimalField(decimal_places=4, max_digits=18)),
                ('scope2_market_kg', models.DecimalField(decimal_places=4, max_digits=18)),
                ('gross_location_kg', models.DecimalField(decimal_places=4, max_digits=18)),
                ('gross_market_kg', models.DecimalField(decimal_places=4, max_digits=18)),
                ('offsets_kg', models.DecimalField(decimal_places=4, max_digits=18)),
                ('residual_location_kg', models.DecimalField(decimal_places=4, max_digits=18)),
                ('residual_market_kg', models.DecimalField(decimal_places=4, max_digits=18)),
                ('assumptions', models.JSONField(blank=True, default=dict, help_text='Factors, estimate split and month window used')),
                ('metrics', models.JSONField(blank=True, default=dict, help_text='Operational counters and estimated kWh breakdown')),
                ('archive_markdown', models.TextField()),
                ('archive_sha256', models.CharField(max_length=64)),
                ('generated_at', models.DateTimeField()),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('PENDING_REVIEW', 'Pending review'), ('PUBLISHED', 'Published')], db_index=True, default='DRAFT', max_length=20)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('trigger', models.CharField(choices=[('cron', 'Scheduler'), ('admin', 'Administrator'), ('command', 'Management command')], default='command', max_length=20)),
            ],
            options={
                'verbose_name': 'Monthly Emissions Report',
                'verbose_name_plural': 'Monthly Emissions Reports',
                'ordering': ['-period_month'],
            },
        ),
        migrations.CreateModel(
            name='OffsetRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period_month', models.DateField(db_index=True, help_text='First day of the reporting month')),
                ('provider', models.CharField(max_length=120)),
                ('project_name', models.CharField(max_length=200)),
                ('registry_name', models.CharField(blank=True, default='', max_length=120)),
                ('credit_type', models.CharField(default='carbon_credit', max_length=80)),
                ('quantity_kg', models.DecimalField(decimal_places=4, max_digits=18, validators=[django.core.validators.MinValueValidator(0)])),
                ('vintage_year', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1990), django.core.validators.MaxValueValidator(2100)])),
                ('retirement_reference', models.CharField(blank=True, default='', max_length=180)),
                ('certificate_url', models.URLField(blank=True, default='', max_length=500)),
                ('status', models.CharField(choices=[('planned', 'Planned'), ('purchased', 'Purchased'), ('retired', 'Retired')], db_index=True, default='planned', max_length=20)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='emission_offsets', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Carbon Offset',
                'verbose_name_plural': 'Carbon Offsets',
                'ordering': ['-period_month', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ActivityLogEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period_month', models.DateField(db_index=True, help_text='First day of the reporting month')),
                ('scope', models.PositiveSmallIntegerField(choices=[(1, 'Scope 1 (direct)'), (2, 'Scope 2 (electricity)')], db_index=True)),
                ('source_type', models.CharField(help_text='Activity category (e.g., electricity_ch, diesel_liters)', max_length=100)),
                ('source_name', models.CharField(help_text='Discriminator within a source type (e.g., measured_input)', max_length=120)),
                ('activity_value', models.DecimalField(decimal_places=4, max_digits=18, validators=[django.core.validators.MinValueValidator(0)])),
                ('activity_unit', models.CharField(help_text='Unit of the activity value (e.g., kWh, liters)', max_length=40)),
                ('emission_factor_location', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('emission_factor_market', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('data_quality', models.CharField(choices=[('measured', 'Measured'), ('estimated', 'Estimated'), ('assumed', 'Assumed')], default='measured', max_length=20)),
                ('entry_origin', models.CharField(choices=[('operator', 'Operator entry'), ('system_estimate', 'System estimate')], default='operator', max_length=20)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='emission_activity_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Emission Activity Log Entry',
                'verbose_name_plural': 'Emission Activity Log Entries',
                'ordering': ['-period_month', 'scope', 'source_type', 'source_name'],
                'unique_together': {('period_month', 'scope', 'source_type', 'source_name')},
            },
        ),
    ]
