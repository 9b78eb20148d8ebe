"""
Management command to create demo data for the dashboard.

Usage:
    python manage.py seed_demo_data [--clear]

This creates:
- 2 organizations with 2 branches each
- 2 categories
- 3 staff users (admin, and one cashier per organization)
- 4 beneficiaries
- A default points rule and a weekend bonus rule
- A few purchases recorded through the purchase workflow
"""

from datetime import time

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from decimal import Decimal

from apps.accounts.models import User
from apps.beneficiaries.models import Beneficiary
from apps.organizations.models import Organization, Branch, Category
from apps.points.models import PointsRule, RuleType
from apps.purchases.models import Purchase, PurchaseItem
from apps.purchases.services import create_purchase


class Command(BaseCommand):
    help = 'Create demo data for the loyalty dashboard'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new demo data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating demo data...')

        organizations = self.create_organizations()
        self.create_categories()
        users = self.create_users(organizations)
        beneficiaries = self.create_beneficiaries()
        self.create_points_rules(organizations)
        self.create_purchases(users, organizations, beneficiaries)

        self.stdout.write(self.style.SUCCESS('Demo data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Staff accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  cashier.north@example.com / password123')
        self.stdout.write('  cashier.south@example.com / password123')

    def clear_data(self):
        """Clear all data from the database."""
        PurchaseItem.objects.all().delete()
        Purchase.objects.all().delete()
        PointsRule.objects.all().delete()
        Beneficiary.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()
        Branch.objects.all().delete()
        Category.objects.all().delete()
        Organization.objects.all().delete()

    def create_organizations(self):
        """Create organizations with their branches."""
        self.stdout.write('  Creating organizations...')

        organizations = {}
        for key, name, branches in [
            ('north', 'North Market', [('Central', 'N-01'), ('Harbor', 'N-02')]),
            ('south', 'South Grocers', [('Plaza', 'S-01'), ('Station', 'S-02')]),
        ]:
            organization, _ = Organization.objects.get_or_create(
                name=name,
                defaults={'business_name': f'{name} Ltd.'}
            )
            for branch_name, code in branches:
                Branch.objects.get_or_create(
                    organization=organization,
                    code=code,
                    defaults={'name': branch_name}
                )
            organizations[key] = organization

        return organizations

    def create_categories(self):
        self.stdout.write('  Creating categories...')
        for name in ['Groceries', 'Beverages']:
            Category.objects.get_or_create(name=name)

    def create_users(self, organizations):
        """Create staff users."""
        self.stdout.write('  Creating staff...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'first_name': 'Admin',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        users = {'admin': admin}
        for key, organization in organizations.items():
            cashier, _ = User.objects.get_or_create(
                email=f'cashier.{key}@example.com',
                defaults={
                    'first_name': 'Cashier',
                    'last_name': key.capitalize(),
                    'organization': organization,
                }
            )
            cashier.set_password('password123')
            cashier.save()
            users[key] = cashier

        return users

    def create_beneficiaries(self):
        self.stdout.write('  Creating beneficiaries...')

        beneficiaries = []
        for first_name, last_name in [
            ('Ana', 'Lopez'),
            ('Ben', 'Okafor'),
            ('Chen', 'Wei'),
            ('Dana', 'Novak'),
        ]:
            beneficiary, _ = Beneficiary.objects.get_or_create(
                email=f'{first_name.lower()}@example.com',
                defaults={'first_name': first_name, 'last_name': last_name}
            )
            beneficiaries.append(beneficiary)

        return beneficiaries

    def create_points_rules(self, organizations):
        """Create a default rule and an organization-scoped weekend bonus."""
        self.stdout.write('  Creating points rules...')

        PointsRule.objects.get_or_create(
            name='Base rate',
            defaults={
                'rule_type': RuleType.FIXED_AMOUNT,
                'config': {'points_per_dollar': 1},
                'is_default': True,
                'display_name': '1 point per dollar',
            }
        )
        PointsRule.objects.get_or_create(
            name='Weekend bonus',
            organization=organizations['north'],
            defaults={
                'rule_type': RuleType.PERCENTAGE,
                'config': {'percentage': 200},
                'priority': 10,
                'days_of_week': [0, 6],
                'time_start': time(8, 0),
                'time_end': time(20, 0),
                'display_name': 'Double points on weekends',
            }
        )

    def create_purchases(self, users, organizations, beneficiaries):
        """Record purchases through the purchase workflow."""
        self.stdout.write('  Creating purchases...')

        if Purchase.objects.exists():
            return

        carts = [
            ('north', beneficiaries[0], [
                {'item_name': 'Coffee beans', 'quantity': 2, 'unit_price': Decimal('12.50')},
                {'item_name': 'Milk', 'quantity': 1, 'unit_price': Decimal('2.30')},
            ]),
            ('north', beneficiaries[1], [
                {'item_name': 'Bread', 'quantity': 3, 'unit_price': Decimal('3.10')},
            ]),
            ('south', beneficiaries[2], [
                {'item_name': 'Orange juice', 'quantity': 4, 'unit_price': Decimal('4.75')},
                {'item_name': 'Apples', 'quantity': 6, 'unit_price': Decimal('0.80')},
            ]),
            ('south', beneficiaries[3], [
                {'item_name': 'Purchase', 'quantity': 1, 'unit_price': Decimal('58.00')},
            ]),
        ]

        for key, beneficiary, items in carts:
            branch = organizations[key].branches.order_by('id').first()
            result = create_purchase(
                beneficiary_id=beneficiary.id,
                cashier_id=users[key].id,
                branch_id=branch.id,
                items=items,
                notes='Demo purchase',
            )
            if not result['success']:
                raise CommandError(f"Failed to create demo purchase: {result['error']}")
