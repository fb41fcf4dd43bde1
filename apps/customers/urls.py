from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'customers'

router = DefaultRouter()
router.register(r'', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # GET    /api/customers/                       - List customers (?search=&sort=)
    # POST   /api/customers/                       - Create customer
    # GET    /api/customers/{id}/                  - Customer with embedded sales
    # POST   /api/customers/{id}/adjust_credit/    - Direct credit adjustment
    # POST   /api/customers/{id}/rebuild_history/  - Rebuild history from sales
    path('', include(router.urls)),
]
