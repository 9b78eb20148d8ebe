from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'beneficiaries'

router = SimpleRouter()
router.register(r'', views.BeneficiaryViewSet, basename='beneficiary')

urlpatterns = [
    # GET  /api/beneficiaries/                 - List beneficiaries
    # GET  /api/beneficiaries/{id}/            - Get beneficiary details
    # GET  /api/beneficiaries/{id}/purchases/  - Purchase history
    # POST /api/beneficiaries/verify/          - Look a beneficiary up by email
    path('', include(router.urls)),
]
