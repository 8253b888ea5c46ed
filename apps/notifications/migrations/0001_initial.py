# Generated manually for the initial notifications schema

import uuid
import django.utils.timezone
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
            name='NotificationLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('notification_type', models.CharField(choices=[('repeated_absence', 'Repeated absence'), ('late_payment', 'Late payment'), ('absence', 'Absence'), ('general', 'General')], max_length=30)),
                ('message', models.TextField()),
                ('sent_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('status', models.CharField(choices=[('sent', 'Sent'), ('failed', 'Failed')], default='sent', max_length=10)),
                ('student', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to='students.student')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'notifications_log',
                'ordering': ['-sent_at'],
                'indexes': [models.Index(fields=['user', 'student', 'notification_type', 'sent_at'], name='notificatio_user_id_e44137_idx')],
            },
        ),
        migrations.CreateModel(
            name='WhatsAppMessage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('phone', models.CharField(max_length=20)),
                ('message', models.TextField()),
                ('type', models.CharField(choices=[('class_reminder', 'Class reminder'), ('payment_reminder', 'Payment reminder'), ('general', 'General')], max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('sent', 'Sent'), ('failed', 'Failed')], default='pending', max_length=10)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('sent_at', models.DateTimeField(blank=True, null=True)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='whatsapp_messages', to='students.student')),
            ],
            options={
                'db_table': 'whatsapp_messages',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['student', 'created_at'], name='whatsapp_me_student_bdfd40_idx'),
                    models.Index(fields=['status'], name='whatsapp_me_status_63922d_idx'),
                ],
            },
        ),
    ]
