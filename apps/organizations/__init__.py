"""
Organizations App - Reference Data

Organizations, their branches and product categories, plus the
request-scoped "active organization" the dashboard is working on.
"""
