from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'purchases'

router = SimpleRouter()
router.register(r'', views.PurchaseViewSet, basename='purchase')

urlpatterns = [
    # GET    /api/purchases/       - List purchases (active organization scope)
    # POST   /api/purchases/       - Record a purchase
    # GET    /api/purchases/{id}/  - Get purchase details with items
    path('', include(router.urls)),
]
