import os
import random
from datetime import datetime, time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import DatabaseError, transaction
from django.utils import timezone

from syncro.appointments.models import Appointment
from syncro.appointments.recurrence import WEEKLY
from syncro.appointments.services import book_appointments
from syncro.catalog.models import Service
from syncro.customers.models import Customer
from syncro.payments.models import Payment
from syncro.professionals.models import Professional
from syncro.resources.models import Room


class Command(BaseCommand):
    help = "Seed Syncro demo data (rooms, services, professionals, customers, appointments, payments)."

    def add_arguments(self, parser):
        parser.add_argument("--with-users", action="store_true",
                            help="Create a demo admin user.")
        parser.add_argument("--days", type=int, default=2,
                            help="How many days to populate appointments for (default: 2 = today+tomorrow).")

    @transaction.atomic
    def handle(self, *args, **opts):
        self.stdout.write(self.style.MIGRATE_HEADING("Seeding Syncro demo data..."))

        if opts["with_users"]:
            self._seed_users()

        rooms = self._seed_rooms()
        services = self._seed_services()
        professionals = self._seed_professionals()
        customers = self._seed_customers()

        self._seed_appointments(customers, services, professionals, rooms, days=opts["days"])
        self._seed_series(customers[0], services[0], professionals[0], rooms[0])
        self._seed_payments(customers, services, professionals)

        self.stdout.write(self.style.SUCCESS("Done!"))

    # ---------- helpers ----------

    def _seed_users(self):
        User = get_user_model()
        admin_email = os.getenv("SEED_ADMIN_EMAIL", "admin@syncro.local")
        admin_pass = os.getenv("SEED_ADMIN_PASSWORD", "Admin123!")

        admin, created = User.objects.get_or_create(
            email=admin_email,
            defaults={"name": "Admin", "is_staff": True, "is_superuser": True},
        )
        if created:
            admin.set_password(admin_pass)
            admin.save()

        self.stdout.write(self.style.SUCCESS(f"User ready. Admin: {admin_email}/{admin_pass}"))

    def _seed_rooms(self):
        rooms = [Room.objects.get_or_create(display_name=f"Room {i}")[0] for i in range(1, 4)]
        self.stdout.write(self.style.SUCCESS(f"{len(rooms)} rooms created."))
        return rooms

    def _seed_services(self):
        names = ["Facial cleansing", "Lymphatic drainage", "Manicure", "Eyebrow design"]
        services = [Service.objects.get_or_create(display_name=name)[0] for name in names]
        self.stdout.write(self.style.SUCCESS(f"{len(services)} services created."))
        return services

    def _seed_professionals(self):
        names = ["Ana Souza", "Beatriz Lima"]
        professionals = []
        for name in names:
            professional = Professional.objects.filter(display_name=name).first()
            if professional is None:
                professional = Professional.objects.create(display_name=name)
            professionals.append(professional)
        self.stdout.write(self.style.SUCCESS(f"{len(professionals)} professionals created."))
        return professionals

    def _seed_customers(self):
        data = [
            ("52998224725", "Maria", "Oliveira", "Mari", "11900000001"),
            ("11144477735", "Joana", "Pereira", "", "11900000002"),
            ("39053344705", "Carla", "Santos", "Carlinha", "11900000003"),
        ]
        customers = []
        for cpf, name, surname, nickname, phone in data:
            customer, _ = Customer.objects.get_or_create(
                cpf=cpf,
                defaults={
                    "name": name,
                    "surname": surname,
                    "nickname": nickname,
                    "phone": phone,
                    "email": f"{name.lower()}@example.com",
                },
            )
            customers.append(customer)

        self.stdout.write(self.style.SUCCESS(f"{len(customers)} customers created."))
        return customers

    def _seed_appointments(self, customers, services, professionals, rooms, days):
        created = 0
        today = timezone.localdate()

        # Each professional keeps to a room of their own so the demo agenda has no conflicts
        for d in range(days):
            day = today + timedelta(days=d)
            for room, professional in zip(rooms, professionals):
                for hour in (9, 11, 14, 16):
                    scheduled_at = timezone.make_aware(
                        datetime.combine(day, time(hour=hour))
                    )
                    try:
                        with transaction.atomic():
                            Appointment.objects.create(
                                customer=random.choice(customers),
                                service=random.choice(services),
                                professional=professional,
                                room=room,
                                scheduled_at=scheduled_at,
                                status=Appointment.COMPLETED if scheduled_at < timezone.now() else Appointment.PENDING,
                            )
                        created += 1
                    except DatabaseError as e:
                        self.stdout.write(self.style.WARNING(f"Skip appt @ {scheduled_at}: {e}"))
                        continue

        self.stdout.write(self.style.SUCCESS(f"Created {created} appointments over {days} day(s)."))

    def _seed_series(self, customer, service, professional, room):
        start = timezone.localdate() + timedelta(days=7)
        series = book_appointments(
            customer=customer,
            service=service,
            professional=professional,
            room=room,
            appointment_date=start,
            appointment_time=time(hour=18),
            cadence=WEEKLY,
            occurrences=4,
        )
        self.stdout.write(self.style.SUCCESS(f"Weekly series of {len(series)} appointments created."))

    def _seed_payments(self, customers, services, professionals):
        payment_types = ["pix", "credit card", "cash"]
        made = 0
        for days_ago in range(0, 20, 3):
            Payment.objects.create(
                customer=random.choice(customers),
                paid_at=timezone.now() - timedelta(days=days_ago),
                amount=Decimal(random.choice(["80.00", "120.00", "150.00", "200.00"])),
                payment_type=random.choice(payment_types),
                professional=random.choice(professionals),
                service=random.choice(services),
                notes="Demo payment",
            )
            made += 1

        self.stdout.write(self.style.SUCCESS(f"Created {made} payment(s)."))
