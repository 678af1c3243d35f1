import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tailors", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OrderAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "order_source",
                    models.CharField(
                        choices=[("CustomOrder", "CustomOrder"), ("ClothCustomizer", "ClothCustomizer")],
                        max_length=20,
                    ),
                ),
                ("order_id", models.PositiveBigIntegerField(db_index=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("unassigned", "unassigned"),
                            ("assigned", "assigned"),
                            ("accepted", "accepted"),
                            ("in_progress", "in_progress"),
                            ("completed", "completed"),
                            ("rejected", "rejected"),
                        ],
                        db_index=True,
                        default="assigned",
                        max_length=20,
                    ),
                ),
                ("assigned_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tailor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="assignments",
                        to="tailors.tailor",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.AddConstraint(
            model_name="orderassignment",
            constraint=models.UniqueConstraint(
                fields=("order_source", "order_id"), name="uniq_assignment_per_order"
            ),
        ),
    ]
