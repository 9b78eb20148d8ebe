"""
Beneficiary lookup for the cashier's counter.

Before recording a purchase the cashier confirms who the customer is by
email. The result follows the purchases services convention:
``{'success': True, 'data': Beneficiary}`` or
``{'success': False, 'error': str, 'error_code': str}``.
"""

import logging

from django.db import DatabaseError

from .models import Beneficiary


logger = logging.getLogger(__name__)


def verify_beneficiary(email):
    """
    Find the beneficiary registered under ``email`` (exact match).

    An email shared by several beneficiaries does not identify anyone and
    is reported as not found.
    """
    try:
        beneficiary = Beneficiary.objects.get(email=email)
    except (Beneficiary.DoesNotExist, Beneficiary.MultipleObjectsReturned):
        return {
            'success': False,
            'error': 'Beneficiary not found',
            'error_code': 'not_found',
        }
    except DatabaseError as e:
        logger.error("beneficiary_verify_failed", extra={'email': email, 'error': str(e)})
        return {
            'success': False,
            'error': 'An unexpected error occurred',
            'error_code': 'unexpected_error',
        }

    return {'success': True, 'data': beneficiary}
