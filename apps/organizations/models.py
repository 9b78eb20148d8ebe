from django.db import models


class Organization(models.Model):
    """A business enrolled in the loyalty program."""

    name = models.CharField(max_length=200)
    business_name = models.CharField(max_length=200, blank=True)
    tax_id = models.CharField(max_length=50, blank=True)
    creation_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'organizations'
        ordering = ['name']

    def __str__(self):
        return self.name


class Branch(models.Model):
    """A physical location belonging to an organization."""

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name='branches'
    )
    name = models.CharField(max_length=200)
    code = models.CharField(max_length=50, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'branches'
        indexes = [
            models.Index(fields=['organization', 'active'], name='branches_org_active_idx'),
        ]
        ordering = ['organization', 'name']

    def __str__(self):
        return f"{self.name} ({self.organization.name})"


class Category(models.Model):
    """Product category; point rules may be scoped to one."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)

    class Meta:
        db_table = 'categories'
        ordering = ['name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name
