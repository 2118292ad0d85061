import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('hostels', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AdditionalCollectionType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='name')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('default_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='default amount')),
                ('is_active', models.BooleanField(default=True, verbose_name='is active')),
            ],
            options={
                'verbose_name': 'Additional Collection Type',
                'verbose_name_plural': 'Additional Collection Types',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='AdditionalCollection',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))], verbose_name='amount')),
                ('reason', models.TextField(blank=True, verbose_name='reason')),
                ('collection_date', models.DateTimeField(default=django.utils.timezone.now, verbose_name='collection date')),
                ('collected_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='collections_made', to=settings.AUTH_USER_MODEL, verbose_name='collected by')),
                ('collection_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='collections', to='finance.additionalcollectiontype', verbose_name='collection type')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='additional_collections', to=settings.AUTH_USER_MODEL, verbose_name='student')),
            ],
            options={
                'verbose_name': 'Additional Collection',
                'verbose_name_plural': 'Additional Collections',
                'ordering': ['-collection_date'],
            },
        ),
        migrations.CreateModel(
            name='MessBill',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('month', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name='month')),
                ('year', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(2000)], verbose_name='year')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='amount')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('paid', 'Paid'), ('overdue', 'Overdue')], db_index=True, default='pending', max_length=10, verbose_name='status')),
                ('due_date', models.DateField(verbose_name='due date')),
                ('paid_date', models.DateTimeField(blank=True, null=True, verbose_name='paid date')),
                ('generated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='mess_bills_generated', to=settings.AUTH_USER_MODEL, verbose_name='generated by')),
                ('hostel', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='mess_bills', to='hostels.hostel', verbose_name='hostel')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='mess_bills', to=settings.AUTH_USER_MODEL, verbose_name='student')),
            ],
            options={
                'verbose_name': 'Mess Bill',
                'verbose_name_plural': 'Mess Bills',
                'ordering': ['-year', '-month', 'student__username'],
                'indexes': [models.Index(fields=['hostel', 'year', 'month'], name='messbill_hostel_period_idx')],
                'unique_together': {('student', 'month', 'year')},
            },
        ),
        migrations.CreateModel(
            name='MessMenu',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('day_of_week', models.PositiveSmallIntegerField(choices=[(0, 'Monday'), (1, 'Tuesday'), (2, 'Wednesday'), (3, 'Thursday'), (4, 'Friday'), (5, 'Saturday'), (6, 'Sunday')], verbose_name='day of week')),
                ('meal_type', models.CharField(choices=[('breakfast', 'Breakfast'), ('lunch', 'Lunch'), ('snacks', 'Snacks'), ('dinner', 'Dinner')], max_length=20, verbose_name='meal type')),
                ('items', models.TextField(verbose_name='items')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='mess_menus_created', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('hostel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='mess_menus', to='hostels.hostel', verbose_name='hostel')),
            ],
            options={
                'verbose_name': 'Mess Menu',
                'verbose_name_plural': 'Mess Menus',
                'ordering': ['day_of_week', 'meal_type'],
                'unique_together': {('hostel', 'day_of_week', 'meal_type')},
            },
        ),
    ]
