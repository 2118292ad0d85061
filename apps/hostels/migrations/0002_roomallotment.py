import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('hostels', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='RoomAllotment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('allotment_date', models.DateTimeField(default=django.utils.timezone.now, verbose_name='allotment date')),
                ('vacated_date', models.DateTimeField(blank=True, null=True, verbose_name='vacated date')),
                ('is_active', models.BooleanField(default=True, verbose_name='is active')),
                ('remarks', models.TextField(blank=True, verbose_name='remarks')),
                ('allotted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='allotments_made', to=settings.AUTH_USER_MODEL, verbose_name='allotted by')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='allotments', to='hostels.room', verbose_name='room')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='room_allotments', to=settings.AUTH_USER_MODEL, verbose_name='student')),
            ],
            options={
                'verbose_name': 'Room Allotment',
                'verbose_name_plural': 'Room Allotments',
                'ordering': ['-allotment_date'],
                'indexes': [
                    models.Index(fields=['student', 'is_active'], name='allotment_student_active_idx'),
                    models.Index(fields=['room', 'is_active'], name='allotment_room_active_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('is_active', True)), fields=('room',), name='unique_active_allotment_per_room'),
                    models.UniqueConstraint(condition=models.Q(('is_active', True)), fields=('student',), name='unique_active_allotment_per_student'),
                ],
            },
        ),
    ]
