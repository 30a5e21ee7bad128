from django.db import migrations, models

import contentkit.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Document",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("title", models.CharField(blank=True, max_length=200)),
                (
                    "blocks",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Parsed content: a list of blocks with offset-addressed markup.",
                        validators=[contentkit.validators.validate_blocks],
                    ),
                ),
                (
                    "content_html_cached",
                    models.TextField(blank=True, help_text="Cache of the HTML rendered from blocks."),
                ),
            ],
            options={
                "ordering": ["-updated_at"],
            },
        ),
    ]
