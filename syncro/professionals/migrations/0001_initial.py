from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Professional",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("display_name", models.CharField(max_length=120, verbose_name="Name")),
            ],
            options={
                "verbose_name": "Professional",
                "verbose_name_plural": "Professionals",
                "ordering": ["display_name"],
            },
        ),
    ]
