from rest_framework import serializers
from apps.schools.models import School
from .models import Product, Order, OrderItem


class ProductSerializer(serializers.ModelSerializer):
    school = serializers.PrimaryKeyRelatedField(queryset=School.objects.all())
    name = serializers.CharField(min_length=2, max_length=200)
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'school',
            'name',
            'description',
            'price',
            'stock',
            'image_url',
            'active',
            'in_stock',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']


class PublicProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ['id', 'name', 'description', 'price', 'stock', 'image_url']
        read_only_fields = fields


class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=100)


class PlaceOrderSerializer(serializers.Serializer):
    buyer_name = serializers.CharField(min_length=2, max_length=200)
    buyer_email = serializers.EmailField(required=False, allow_blank=True, default='')
    items = OrderItemInputSerializer(many=True, allow_empty=False)


class OrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'product_name', 'quantity', 'unit_price', 'subtotal']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = ['id', 'school', 'buyer_name', 'buyer_email', 'total', 'status', 'items', 'created_at']
        read_only_fields = fields
