from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'store'

router = DefaultRouter()
router.register(r'products', views.ProductViewSet, basename='product')
router.register(r'orders', views.OrderViewSet, basename='order')

urlpatterns = [
    path('shop/<uuid:school_id>/', views.storefront, name='storefront'),
    path('shop/<uuid:school_id>/orders/', views.create_order, name='create-order'),

    path('', include(router.urls)),
]
