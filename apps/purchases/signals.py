"""
Balance crediting.

The beneficiary balance is maintained next to the data, not by the purchase
workflow: inserting a purchase row credits its points with an atomic F()
update. The workflow only reads the resulting balance back.
"""

from django.db.models import F
from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.beneficiaries.models import Beneficiary

from .models import Purchase


@receiver(post_save, sender=Purchase, dispatch_uid='purchases.credit_beneficiary_points')
def credit_beneficiary_points(sender, instance, created, raw=False, **kwargs):
    """Add a new purchase's points to its beneficiary's balance."""
    if not created or raw or not instance.points_earned:
        return

    Beneficiary.objects.filter(pk=instance.beneficiary_id).update(
        available_points=F('available_points') + instance.points_earned
    )
