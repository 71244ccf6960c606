from rest_framework import serializers
from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(read_only=True)
    sku = serializers.CharField(read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'product_name', 'sku', 'quantity', 'unit_price', 'total_price']
        read_only_fields = ['unit_price', 'total_price']
        extra_kwargs = {'product': {'required': True, 'allow_null': False}}


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True)

    class Meta:
        model = Order
        fields = [
            "id", "status", "total_price",
            "customer_name", "customer_email",
            "ordered_at", "items"
        ]
        read_only_fields = ["total_price", "ordered_at"]

    def create(self, validated_data):
        items_data = validated_data.pop('items')
        # Items must exist before the order reaches its requested status,
        # otherwise a status-triggered notification would see an empty order.
        target_status = validated_data.pop('status', Order.Status.CREATED)
        order = Order.objects.create(status=Order.Status.CREATED, **validated_data)
        total = 0

        for item_data in items_data:
            product = item_data['product']
            quantity = item_data['quantity']
            item = OrderItem.objects.create(
                order=order,
                product=product,
                quantity=quantity,
                unit_price=product.price,
            )
            total += item.total_price

        order.total_price = total
        order.status = target_status
        order.save()
        return order

    def update(self, instance, validated_data):
        if 'items' in validated_data:
            raise serializers.ValidationError({"items": "Order items cannot be changed."})
        return super().update(instance, validated_data)


class NotifyResultSerializer(serializers.Serializer):
    order_id = serializers.IntegerField()
    sent = serializers.IntegerField()
    failed = serializers.IntegerField()
    outcomes = serializers.ListField(child=serializers.DictField())
