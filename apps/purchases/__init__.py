"""
Purchases App - Purchase-to-Points Workflow

Records a cashier's cart as a purchase, awards its points through the
configured points evaluator, apportions them across the line items and
reports the beneficiary's new balance.

Architecture:
- Models: Purchase, PurchaseItem
- Services: create_purchase, get_beneficiary_purchases, get_all_purchases,
  get_purchase_by_id
- Signals: beneficiary balance credit on purchase insert
- Cache: versioned listing keys, bumped after each purchase
- Views: ViewSet with list/create/retrieve (no update or delete)
"""

__version__ = '1.0.0'
