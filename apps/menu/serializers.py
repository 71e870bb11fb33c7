from rest_framework import serializers
from .models import MenuItem, RecipeLine


class RecipeLineSerializer(serializers.ModelSerializer):
    """Serializer for one recipe line of a menu item."""

    required_display = serializers.CharField(source='required_amount.display', read_only=True)

    class Meta:
        model = RecipeLine
        fields = [
            'id',
            'ingredient',
            'ingredient_name',
            'required_value',
            'required_unit',
            'required_display',
        ]
        read_only_fields = fields


class MenuItemSerializer(serializers.ModelSerializer):
    """Main serializer for menu items."""

    recipe_lines = RecipeLineSerializer(many=True, read_only=True)

    class Meta:
        model = MenuItem
        fields = [
            'id',
            'shop',
            'name',
            'price',
            'category',
            'description',
            'image_url',
            'is_available',
            'recipe_lines',
            'updated_at',
        ]
        read_only_fields = fields


class MenuItemListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for menu listings."""

    class Meta:
        model = MenuItem
        fields = ['id', 'name', 'price', 'category', 'image_url', 'is_available']
        read_only_fields = fields


class RefreshAvailabilitySerializer(serializers.Serializer):
    """Input for recomputing a shop's menu availability."""
    shop = serializers.UUIDField()


class RefreshAvailabilityResponseSerializer(serializers.Serializer):
    """Response serializer listing items whose availability flipped."""
    changed = MenuItemListSerializer(many=True)
