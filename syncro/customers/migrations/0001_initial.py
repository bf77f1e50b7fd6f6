from django.db import migrations, models

import syncro.customers.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("name", models.CharField(max_length=100, verbose_name="Name")),
                ("surname", models.CharField(max_length=100, verbose_name="Surname")),
                ("nickname", models.CharField(blank=True, max_length=50, verbose_name="Nickname")),
                ("cpf", models.CharField(max_length=11, unique=True, verbose_name="CPF")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="Email")),
                ("phone", models.CharField(db_index=True, max_length=20, verbose_name="Phone")),
                ("address", models.CharField(blank=True, max_length=200, verbose_name="Address")),
                ("emergency_name", models.CharField(blank=True, max_length=100, verbose_name="Emergency contact")),
                ("emergency_phone", models.CharField(blank=True, max_length=20, verbose_name="Emergency phone")),
                ("emergency_relationship", models.CharField(blank=True, max_length=50, verbose_name="Relationship")),
                ("birth_date", models.DateField(blank=True, null=True, verbose_name="Birth date")),
                (
                    "photo",
                    models.ImageField(blank=True, upload_to=syncro.customers.models.customer_photo_path, verbose_name="Photo"),
                ),
            ],
            options={
                "verbose_name": "Customer",
                "verbose_name_plural": "Customers",
                "ordering": ["name", "surname"],
            },
        ),
    ]
