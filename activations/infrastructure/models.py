"""
Activation record Django ORM model.

This is the infrastructure layer model for the activation ledger.
Domain entities are in activations.domain.activation.
"""
from django.db import models


class ActivationRecord(models.Model):
    """
    Accumulated activation state of one deployment.

    Stores only SHA-256 hex digests of credited keys, never the keys.
    """

    deployment_id = models.CharField(
        max_length=100, unique=True, help_text="Fixed deployment identifier"
    )
    activation_date = models.DateTimeField(help_text="First accepted submission")
    years = models.PositiveIntegerField(default=1)
    hashes = models.JSONField(
        default=list,
        help_text="SHA-256 hex digests of credited keys (set semantics)",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "activation_records"
        ordering = ["deployment_id"]

    def clean(self):
        """Validate activation record fields."""
        from django.core.exceptions import ValidationError

        if not self.deployment_id or len(self.deployment_id.strip()) == 0:
            raise ValidationError("Deployment identifier cannot be empty")
        if self.years < 1:
            raise ValidationError("Years must be at least 1")
        if len(set(self.hashes)) != len(self.hashes):
            raise ValidationError("Key hashes must be unique")

    def save(self, *args, **kwargs):
        """Save activation record with validation."""
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.deployment_id} ({self.years} year(s))"
