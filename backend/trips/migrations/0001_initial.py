# Generated migration for initial trips app setup

import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('user', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Trip',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='User defined name for the trip', max_length=255)),
                ('summary', models.TextField(help_text='Short story of the trip shown on cards and used by search')),
                ('start_date', models.DateTimeField(help_text='The day the trip started')),
                ('end_date', models.DateTimeField(help_text='The day the trip ended')),
                ('is_public', models.BooleanField(default=True)),
                ('cover_image', models.URLField(blank=True, help_text='Cover photo URL', max_length=1000, null=True)),
                ('categories', models.JSONField(blank=True, default=list, help_text="Ordered list of tags such as 'Hiking' or 'Food & Wine'")),
                ('view_count', models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('like_count', models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(help_text='Reference to the author of the trip', on_delete=django.db.models.deletion.CASCADE, related_name='trips', to='user.userprofile')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Pin',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('latitude', models.DecimalField(decimal_places=6, max_digits=9, validators=[django.core.validators.MinValueValidator(Decimal('-90')), django.core.validators.MaxValueValidator(Decimal('90'))])),
                ('longitude', models.DecimalField(decimal_places=6, max_digits=9, validators=[django.core.validators.MinValueValidator(Decimal('-180')), django.core.validators.MaxValueValidator(Decimal('180'))])),
                ('geohash', models.CharField(blank=True, default='', editable=False, help_text='Geohash (precision 6) of the coordinates, used as a map cluster key', max_length=12)),
                ('date', models.DateTimeField(help_text='When this place was visited')),
                ('order', models.IntegerField(help_text='The sequence number in the trip timeline')),
                ('activities', models.JSONField(blank=True, default=list)),
                ('photos', models.JSONField(blank=True, default=list)),
                ('trip', models.ForeignKey(help_text='Reference to the parent trip', on_delete=django.db.models.deletion.CASCADE, related_name='pins', to='trips.trip')),
            ],
            options={
                'ordering': ['trip', 'order'],
            },
        ),
        migrations.AddIndex(
            model_name='trip',
            index=models.Index(fields=['user', '-created_at'], name='trips_trip_user_id_8d3b1e_idx'),
        ),
        migrations.AddIndex(
            model_name='trip',
            index=models.Index(fields=['-view_count'], name='trips_trip_view_co_4f2a7c_idx'),
        ),
        migrations.AddIndex(
            model_name='pin',
            index=models.Index(fields=['trip', 'order'], name='trips_pin_trip_id_5c9e02_idx'),
        ),
    ]
