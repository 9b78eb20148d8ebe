from django.conf import settings
from django.db import models, transaction, IntegrityError
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import secrets


# Attempts at a free purchase number before the insert error is raised
PURCHASE_NUMBER_ATTEMPTS = 5


class Purchase(models.Model):
    """
    One checkout event at a branch.

    Created once by the purchase workflow and never updated afterwards.
    ``total_amount`` equals the sum of its items' subtotals.
    """

    beneficiary = models.ForeignKey(
        'beneficiaries.Beneficiary',
        on_delete=models.PROTECT,
        related_name='purchases'
    )
    cashier = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='purchases_recorded'
    )
    branch = models.ForeignKey(
        'organizations.Branch',
        on_delete=models.PROTECT,
        related_name='purchases'
    )

    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    points_earned = models.PositiveIntegerField(default=0)
    notes = models.TextField(blank=True)

    # Public-facing number, assigned on first save
    purchase_number = models.CharField(
        max_length=32,
        unique=True,
        editable=False
    )
    purchase_date = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'purchases'
        indexes = [
            models.Index(fields=['beneficiary', 'purchase_date'], name='purchase_beneficiary_date_idx'),
            models.Index(fields=['branch', 'purchase_date'], name='purchase_branch_date_idx'),
            models.Index(fields=['purchase_date'], name='purchase_date_idx'),
        ]
        ordering = ['-purchase_date']

    def __str__(self):
        return f"{self.purchase_number} - {self.total_amount} ({self.points_earned} pts)"

    def save(self, *args, **kwargs):
        """Generate purchase number if not set, retrying on a collision."""
        if self.purchase_number:
            return super().save(*args, **kwargs)

        for attempt in range(PURCHASE_NUMBER_ATTEMPTS):
            self.purchase_number = self._generate_purchase_number()
            try:
                with transaction.atomic():
                    return super().save(*args, **kwargs)
            except IntegrityError:
                last_attempt = attempt == PURCHASE_NUMBER_ATTEMPTS - 1
                if last_attempt or not self._purchase_number_taken():
                    raise

    def _purchase_number_taken(self):
        return Purchase.objects.filter(purchase_number=self.purchase_number).exists()

    def _generate_purchase_number(self):
        # Format: P<YYYYMMDD>-<6 hex chars>
        stamp = (self.purchase_date or timezone.now()).strftime('%Y%m%d')
        return f"P{stamp}-{secrets.token_hex(3).upper()}"


class PurchaseItem(models.Model):
    """One priced line of a purchase. Item names are free text."""

    purchase = models.ForeignKey(
        Purchase,
        on_delete=models.CASCADE,
        related_name='items'
    )
    item_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    points_earned = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'purchase_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.item_name} @ {self.unit_price}"
