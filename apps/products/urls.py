from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'products'

router = DefaultRouter()
router.register(r'', views.ProductViewSet, basename='product')

urlpatterns = [
    # GET    /api/products/       - List products (?search=)
    # POST   /api/products/       - Create product
    # GET    /api/products/{id}/  - Get product
    # PUT    /api/products/{id}/  - Update product
    # PATCH  /api/products/{id}/  - Partial update
    # DELETE /api/products/{id}/  - Delete product
    path('', include(router.urls)),
]
