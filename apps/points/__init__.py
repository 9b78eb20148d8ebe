"""
Points App - Point-Earning Rules

Rules (fixed rate, percentage, per item, tiered) with optional organization,
branch and category scope and date/weekday/time-of-day gating, plus the
pluggable evaluator the purchase workflow calls.
"""
