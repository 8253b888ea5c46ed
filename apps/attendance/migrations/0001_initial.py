# Generated manually for the initial attendance schema

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('students', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='QRToken',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('token', models.CharField(db_index=True, max_length=100, unique=True)),
                ('valid_from', models.DateTimeField()),
                ('valid_until', models.DateTimeField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='generated_qr_tokens', to=settings.AUTH_USER_MODEL)),
                ('dance_class', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='qr_tokens', to='students.danceclass')),
            ],
            options={
                'db_table': 'qr_tokens',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['dance_class', 'valid_until'], name='qr_tokens_dance_c_8a6e5a_idx')],
            },
        ),
        migrations.CreateModel(
            name='Attendance',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('attendance_date', models.DateField()),
                ('marked_at', models.DateTimeField(auto_now_add=True)),
                ('notes', models.TextField(blank=True)),
                ('dance_class', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendances', to='students.danceclass')),
                ('marked_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='marked_attendances', to=settings.AUTH_USER_MODEL)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendances', to='students.student')),
            ],
            options={
                'db_table': 'attendances',
                'ordering': ['-attendance_date', '-marked_at'],
                'indexes': [
                    models.Index(fields=['dance_class', 'attendance_date'], name='attendances_dance_c_e8aea0_idx'),
                    models.Index(fields=['student', 'attendance_date'], name='attendances_student_5974af_idx'),
                ],
                'unique_together': {('student', 'dance_class', 'attendance_date')},
            },
        ),
    ]
