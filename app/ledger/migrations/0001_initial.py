import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Posting",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "kind",
                    models.CharField(
                        choices=[("credit", "Credit"), ("debit", "Debit")],
                        help_text="Whether this posting credits or debits the account",
                        max_length=10,
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=4,
                        help_text="Positive amount; the sign comes from kind",
                        max_digits=20,
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        blank=True,
                        help_text="Optional note supplied with the posting",
                        null=True,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this posting was recorded",
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        help_text="Account this posting belongs to",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="postings",
                        to="accounts.account",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["account", "created_at"],
                        name="ledger_posting_account_time",
                    ),
                    models.Index(
                        fields=["account", "kind"],
                        name="ledger_posting_account_kind",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gt", 0)),
                        name="ledger_posting_amount_positive",
                    )
                ],
            },
        ),
    ]
