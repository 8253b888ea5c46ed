"""
Queue WhatsApp reminders for classes starting in one hour.

Run every minute from cron; only schedules starting exactly one hour
from now match, so each class is reminded once.

Usage:
    python manage.py send_class_reminders
"""

from django.core.management.base import BaseCommand

from apps.notifications.services import send_class_reminders


class Command(BaseCommand):
    help = 'Queue WhatsApp reminders for classes starting in one hour'

    def handle(self, *args, **options):
        sent = send_class_reminders()
        self.stdout.write(self.style.SUCCESS(f'Total reminders sent: {sent}'))
