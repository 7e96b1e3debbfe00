import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Client/business name', max_length=200, unique=True)),
                ('slug', models.SlugField(help_text='URL-friendly name (auto-generated)', max_length=200, unique=True)),
                ('type', models.CharField(choices=[('ECOMMERCE', 'E-commerce'), ('SAAS', 'SaaS (Staffluent)'), ('FOOD_DELIVERY', 'Food delivery'), ('RETAIL', 'Retail'), ('SERVICES', 'Services'), ('OTHER', 'Other'), ('BOOKING', 'Booking (MetroSuites)'), ('PIXELBREEZE', 'PixelBreeze'), ('VENUEBOOST', 'VenueBoost'), ('QYTETARET', 'Qytetaret'), ('STUDIO', 'Studio')], db_index=True, default='ECOMMERCE', help_text='Vertical: selects dashboard and navigation', max_length=20)),
                ('industry', models.CharField(blank=True, help_text='e.g. Hospitality, SAAS, Retail', max_length=100)),
                ('website', models.URLField(blank=True, help_text='Client website', validators=[django.core.validators.URLValidator()])),
                ('description', models.TextField(blank=True, help_text='Brief description about the client')),
                ('logo', models.ImageField(blank=True, help_text='Client logo', null=True, upload_to='clients/logos/')),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('INACTIVE', 'Inactive'), ('SUSPENDED', 'Suspended')], db_index=True, default='ACTIVE', max_length=20)),
                ('omni_gateway_id', models.CharField(blank=True, help_text='Client id on the OmniStack gateway', max_length=100)),
                ('omni_gateway_api_key', models.CharField(blank=True, help_text='API key sent to the OmniStack gateway', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Client',
                'verbose_name_plural': 'Clients',
                'ordering': ['name'],
            },
        ),
    ]
