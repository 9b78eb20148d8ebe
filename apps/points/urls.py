from django.urls import path
from . import views

app_name = 'points'

urlpatterns = [
    # GET  /api/points/rules/     - Active rules for the active organization
    # POST /api/points/calculate/ - Preview points for an amount
    path('rules/', views.active_rules, name='active-rules'),
    path('calculate/', views.calculate_points, name='calculate'),
]
