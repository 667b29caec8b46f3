import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Ingredient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                (
                    "category",
                    models.CharField(
                        help_text="Grouping used by the builder, e.g. 'base', 'protein', 'vegetable'.",
                        max_length=50,
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["category"], name="ingredient_category_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        django.db.models.functions.text.Lower("name"),
                        models.F("category"),
                        name="uniq_ingredient_name_category_ci",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Recipe",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("type", models.CharField(default="complete", max_length=32)),
                ("cuisine", models.CharField(default="any", max_length=100)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("ingredients", models.JSONField(blank=True, default=list)),
                ("instructions", models.JSONField(default=list)),
                ("nutrition", models.JSONField(blank=True, default=dict)),
                ("prep_time", models.PositiveIntegerField(default=15, help_text="Minutes.")),
                ("cook_time", models.PositiveIntegerField(default=30, help_text="Minutes.")),
                ("servings", models.PositiveIntegerField(default=4)),
                (
                    "difficulty",
                    models.CharField(
                        choices=[("easy", "Easy"), ("medium", "Medium"), ("hard", "Hard")],
                        default="medium",
                        max_length=10,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["name"], name="recipe_name_idx"),
                    models.Index(fields=["cuisine"], name="recipe_cuisine_idx"),
                ],
            },
        ),
    ]
