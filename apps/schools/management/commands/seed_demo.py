"""
Management command to seed a demo school.

Usage:
    python manage.py seed_demo
    python manage.py seed_demo --clear

This creates:
- demo admin (demo@xpacecontrol.com / demo123456) and a teacher
- the Start/Pro plans and a trial subscription on the Start plan
- 10 students, 3 classes with weekly schedules, enrollments
- 20 attendances over the last 30 days
- 5 payments (3 paid, 2 pending)
- 2 achievements, an event with tickets and 3 store products

Running it again reuses the demo accounts and school and replaces the
school's students, classes and their history.
"""

import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.schools.models import School, SchoolMembership, SchoolRole, Plan, Subscription, SubscriptionStatus
from apps.schools.services import create_school
from apps.students.models import Student, DanceClass, ClassSchedule, Enrollment
from apps.attendance.models import Attendance
from apps.payments.models import Payment, PaymentStatus, PaymentMethod
from apps.events.models import Event, Ticket, TicketStatus
from apps.store.models import Product
from apps.gamification.models import Achievement

DEMO_EMAIL = 'demo@xpacecontrol.com'
DEMO_PASSWORD = 'demo123456'
TEACHER_EMAIL = 'professor@xpacecontrol.com'
SCHOOL_NAME = 'Academia de Dança Demo'

STUDENT_NAMES = [
    'Ana Silva', 'Bruno Costa', 'Carla Santos', 'Daniel Oliveira', 'Elena Ferreira',
    'Felipe Lima', 'Gabriela Alves', 'Henrique Souza', 'Isabela Rocha', 'João Martins',
]

# name, schedule label, time, weekly slots (0 = Sunday)
CLASSES = [
    ('Ballet Iniciante', 'Segunda/Quarta', '18:00', [1, 3]),
    ('Jazz Intermediário', 'Terça/Quinta', '19:00', [2, 4]),
    ('Hip Hop Avançado', 'Sexta', '20:00', [5]),
]


class Command(BaseCommand):
    help = 'Seed a demo dance school with students, classes and history'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete the demo school and accounts before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing demo data...')
            self.clear_data()

        self.stdout.write('Seeding demo data...')

        admin, teacher = self.create_users()
        school = self.create_school(admin, teacher)
        self.reset_school_data(school)

        students = self.create_students(school)
        classes = self.create_classes(school, teacher)
        self.create_enrollments(students, classes)
        self.create_attendances(students, classes, admin)
        self.create_payments(students)
        self.create_extras(school, students)

        self.stdout.write(self.style.SUCCESS('Demo data seeded successfully!'))
        self.stdout.write('')
        self.stdout.write(f'School: {school.name} ({school.id})')
        self.stdout.write(f'  {DEMO_EMAIL} / {DEMO_PASSWORD} (admin)')
        self.stdout.write(f'  {TEACHER_EMAIL} / {DEMO_PASSWORD} (teacher)')

    def clear_data(self):
        School.objects.filter(admin__email=DEMO_EMAIL).delete()
        User.objects.filter(email__in=[DEMO_EMAIL, TEACHER_EMAIL]).delete()

    def create_users(self):
        admin, created = User.objects.get_or_create(
            email=DEMO_EMAIL,
            defaults={'display_name': 'Escola Demo', 'phone': '+5511999999999', 'email_verified': True},
        )
        if created:
            admin.set_password(DEMO_PASSWORD)
            admin.save()
            self.stdout.write(f'  Created user: {admin.email}')

        teacher, created = User.objects.get_or_create(
            email=TEACHER_EMAIL,
            defaults={'display_name': 'Professora Demo', 'email_verified': True},
        )
        if created:
            teacher.set_password(DEMO_PASSWORD)
            teacher.save()
            self.stdout.write(f'  Created user: {teacher.email}')

        return admin, teacher

    def create_school(self, admin, teacher):
        start, _ = Plan.objects.get_or_create(
            name='Start',
            defaults={'monthly_price': Decimal('97.00'), 'student_limit': 50, 'features': ['qr_attendance']},
        )
        Plan.objects.get_or_create(
            name='Pro',
            defaults={'monthly_price': Decimal('197.00'), 'student_limit': None,
                      'features': ['qr_attendance', 'ai_insights', 'store', 'events']},
        )

        school = School.objects.filter(admin=admin).first()
        if school is None:
            school = create_school(
                name=SCHOOL_NAME,
                admin=admin,
                city='São Paulo',
                contact_email=DEMO_EMAIL,
                contact_phone='+5511999999999',
            )
            self.stdout.write(f'  Created school: {school.name}')

        Subscription.objects.update_or_create(
            school=school,
            defaults={
                'plan': start,
                'status': SubscriptionStatus.TRIAL,
                'renew_at': timezone.now() + timedelta(days=15),
            },
        )
        SchoolMembership.objects.update_or_create(
            user=teacher,
            school=school,
            defaults={'role': SchoolRole.TEACHER},
        )
        return school

    def reset_school_data(self, school):
        school.students.all().delete()
        school.classes.all().delete()
        school.events.all().delete()
        school.orders.all().delete()
        school.products.all().delete()
        school.achievements.all().delete()

    def create_students(self, school):
        students = []
        for i, name in enumerate(STUDENT_NAMES):
            students.append(Student.objects.create(
                school=school,
                full_name=name,
                email=f'aluno{i + 1}@demo.com',
                phone=f'+551199{i:07d}',
                birth_date=timezone.localdate().replace(year=2010 + i, month=i % 12 + 1, day=1),
                active=True,
            ))
        self.stdout.write(f'  Created {len(students)} students')
        return students

    def create_classes(self, school, teacher):
        classes = []
        for name, day, start_time, weekdays in CLASSES:
            dance_class = DanceClass.objects.create(
                school=school,
                teacher=teacher,
                name=name,
                description=f'Turma de {name} - Modo Demo',
                schedule_day=day,
                schedule_time=start_time,
                duration_minutes=60,
                max_students=15,
            )
            hour, minute = start_time.split(':')
            end_time = f'{int(hour) + 1:02d}:{minute}'
            for weekday in weekdays:
                ClassSchedule.objects.create(
                    dance_class=dance_class,
                    day_of_week=weekday,
                    start_time=start_time,
                    end_time=end_time,
                )
            classes.append(dance_class)
        self.stdout.write(f'  Created {len(classes)} classes')
        return classes

    def create_enrollments(self, students, classes):
        start = timezone.localdate() - timedelta(days=60)
        for student in students:
            Enrollment.objects.create(
                student=student,
                dance_class=random.choice(classes),
                start_date=start,
            )

    def create_attendances(self, students, classes, marked_by):
        today = timezone.localdate()
        created = 0
        for _ in range(20):
            _, was_created = Attendance.objects.get_or_create(
                student=random.choice(students),
                dance_class=random.choice(classes),
                attendance_date=today - timedelta(days=random.randint(0, 29)),
                defaults={'marked_by': marked_by},
            )
            created += was_created
        self.stdout.write(f'  Created {created} attendances')

    def create_payments(self, students):
        today = timezone.localdate()
        due_date = today.replace(day=10)
        for i, student in enumerate(students[:5]):
            is_paid = i < 3
            Payment.objects.create(
                student=student,
                amount=Decimal('150.00'),
                due_date=due_date,
                reference_month=due_date.strftime('%Y-%m'),
                status=PaymentStatus.PAID if is_paid else PaymentStatus.PENDING,
                paid_date=due_date - timedelta(days=2) if is_paid else None,
                payment_method=PaymentMethod.PIX if is_paid else '',
            )
        self.stdout.write('  Created 5 payments')

    def create_extras(self, school, students):
        Achievement.objects.create(
            school=school, name='Primeiros Passos', icon='👟',
            description='Primeiras presenças registradas', points_required=50,
        )
        Achievement.objects.create(
            school=school, name='Dançarino Dedicado', icon='🏆',
            description='Frequência exemplar', points_required=200,
        )

        event = Event.objects.create(
            school=school,
            title='Espetáculo de Fim de Ano',
            description='Apresentação de todas as turmas',
            event_date=timezone.now() + timedelta(days=45),
            location='Teatro Municipal',
            ticket_price=Decimal('40.00'),
        )
        for student, ticket_status in zip(students[:3], [TicketStatus.PAID, TicketStatus.PAID, TicketStatus.RESERVED]):
            Ticket.objects.create(
                event=event,
                student=student,
                buyer_name=f'Família {student.full_name.split()[-1]}',
                amount=event.ticket_price,
                status=ticket_status,
            )

        for name, price, stock in [
            ('Sapatilha de Ballet', Decimal('89.90'), 20),
            ('Camiseta da Escola', Decimal('49.90'), 35),
            ('Garrafa Térmica', Decimal('39.90'), 0),
        ]:
            Product.objects.create(school=school, name=name, price=price, stock=stock)

        self.stdout.write('  Created achievements, an event with tickets and store products')
