from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.schools.mixins import SchoolScopedViewSetMixin
from apps.schools.views import SchoolPagination
from apps.schools.models import School
from .models import Product, Order
from .serializers import (
    ProductSerializer,
    PublicProductSerializer,
    PlaceOrderSerializer,
    OrderSerializer,
)
from .services import place_order, cancel_order
from .exceptions import (
    EmptyOrderError,
    InvalidQuantityError,
    ProductUnavailableError,
    InsufficientStockError,
    OrderNotPendingError,
)


class ProductViewSet(SchoolScopedViewSetMixin, viewsets.ModelViewSet):
    """Catalogue management. Staff read, admins write."""

    queryset = Product.objects.select_related('school')
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination

    def perform_create(self, serializer):
        self.check_school_write(serializer.validated_data['school'])
        serializer.save()


class OrderViewSet(
    SchoolScopedViewSetMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Orders received by the caller's schools."""

    queryset = Order.objects.prefetch_related('items__product')
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        order = self.get_object()
        try:
            order = cancel_order(order=order)
        except OrderNotPendingError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data)


@extend_schema(
    responses={200: PublicProductSerializer(many=True)},
    description="Public storefront: active products with stock.",
    tags=['store'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def storefront(request, school_id):
    school = get_object_or_404(School, id=school_id)
    products = school.products.filter(active=True, stock__gt=0)
    return Response({
        'school': {'id': school.id, 'name': school.name, 'primary_color': school.primary_color},
        'products': PublicProductSerializer(products, many=True).data,
    })


@extend_schema(
    request=PlaceOrderSerializer,
    responses={201: OrderSerializer},
    description="Place an order on a school's storefront.",
    tags=['store'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def create_order(request, school_id):
    school = get_object_or_404(School, id=school_id)
    serializer = PlaceOrderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        order = place_order(school=school, **serializer.validated_data)
    except (EmptyOrderError, InvalidQuantityError, ProductUnavailableError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except InsufficientStockError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)
