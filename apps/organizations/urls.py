from django.urls import path
from . import views

app_name = 'organizations'

urlpatterns = [
    # GET  /api/organizations/active/ - Read active organization
    # POST /api/organizations/active/ - Select active organization
    path('active/', views.active_organization, name='active-organization'),
]
