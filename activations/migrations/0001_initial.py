from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ActivationRecord",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "deployment_id",
                    models.CharField(
                        help_text="Fixed deployment identifier", max_length=100, unique=True
                    ),
                ),
                (
                    "activation_date",
                    models.DateTimeField(help_text="First accepted submission"),
                ),
                ("years", models.PositiveIntegerField(default=1)),
                (
                    "hashes",
                    models.JSONField(
                        default=list,
                        help_text="SHA-256 hex digests of credited keys (set semantics)",
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "activation_records",
                "ordering": ["deployment_id"],
            },
        ),
    ]
