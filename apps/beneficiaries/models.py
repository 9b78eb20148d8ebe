from django.db import models


class Beneficiary(models.Model):
    """End customer enrolled in the loyalty program."""

    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(max_length=255, blank=True, db_index=True)
    phone = models.CharField(max_length=50, blank=True)
    document_id = models.CharField(max_length=50, blank=True)

    # Maintained by the purchase post_save receiver, never by the API
    available_points = models.IntegerField(default=0)

    registration_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'beneficiaries'
        ordering = ['last_name', 'first_name']
        verbose_name_plural = 'beneficiaries'

    def __str__(self):
        return self.get_full_name()

    def get_full_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email or f"Beneficiary #{self.pk}"
