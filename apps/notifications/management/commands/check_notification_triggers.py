"""
Scan schools for repeated absences and late payments.

Meant for a daily cron entry.

Usage:
    python manage.py check_notification_triggers
"""

from django.core.management.base import BaseCommand

from apps.notifications.services import check_notification_triggers


class Command(BaseCommand):
    help = 'Create admin alerts for repeated absences and late payments'

    def handle(self, *args, **options):
        created = check_notification_triggers()
        self.stdout.write(
            self.style.SUCCESS(f'Processamento concluído. {created} notificações enviadas.')
        )
