import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Owner",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("full_name", models.CharField(blank=True, max_length=150)),
                ("is_active", models.BooleanField(default=False)),
                ("is_profile_complete", models.BooleanField(default=False)),
                ("email_verify_version", models.PositiveIntegerField(default=0)),
            ],
            options={
                "ordering": ("-created_at",),
            },
        ),
        migrations.CreateModel(
            name="OwnerProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "phone",
                    models.CharField(
                        help_text="Verified phone, digits only with country code",
                        max_length=15,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^\\d{7,15}$",
                                message="Phone must be digits only, including the country code (e.g., 919876543210)",
                            )
                        ],
                    ),
                ),
                (
                    "country_code",
                    models.CharField(
                        default="91",
                        max_length=4,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^\\d{1,4}$", message="Use a numeric country calling code (e.g., 91)"
                            )
                        ],
                    ),
                ),
                ("photo_url", models.URLField(max_length=500)),
                (
                    "preferred_language",
                    models.CharField(
                        choices=[("EN", "English"), ("HI", "Hindi"), ("TE", "Telugu")], default="EN", max_length=2
                    ),
                ),
                ("short_bio", models.TextField(blank=True, null=True)),
                (
                    "gst_number",
                    models.CharField(
                        blank=True,
                        max_length=15,
                        null=True,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^\\d{2}[A-Z]{5}\\d{4}[A-Z][1-9A-Z]Z[0-9A-Z]$",
                                message="Use a valid 15-character GSTIN (e.g., 27AAPFU0939F1ZV)",
                            )
                        ],
                    ),
                ),
                ("business_name", models.CharField(blank=True, max_length=200, null=True)),
                ("billing_address", models.TextField(blank=True, null=True)),
                (
                    "owner",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE, related_name="profile", to="owner.owner"
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
    ]
