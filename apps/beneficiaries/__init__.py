"""
Beneficiaries App - Loyalty Program Customers

Beneficiaries earn points on purchases. Their balance is credited when a
purchase row is inserted; this app only exposes read views over them and
their purchase history.
"""
