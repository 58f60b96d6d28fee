from rest_framework import serializers

from marketplace.models import Game, JasaCari, JasaPosting
from marketplace.utils import format_phone_number
from marketplace.validators import (
    validate_listing_price,
    validate_photos,
    validate_price_range,
    validate_spec_words,
    validate_whatsapp_number,
)


class GameSerializer(serializers.ModelSerializer):
    class Meta:
        model = Game
        fields = ['id', 'name', 'icon_name', 'created_at']


class ListingSerializer(serializers.ModelSerializer):
    """
    Common behaviour: the game is nested on output and written as
    ``game_id``; code, owner and approval state are never client supplied.
    """
    game = GameSerializer(read_only=True)
    game_id = serializers.PrimaryKeyRelatedField(
        source='game',
        queryset=Game.objects.all(),
        error_messages={'required': 'Game harus dipilih', 'null': 'Game harus dipilih'},
    )
    phone_number = serializers.CharField(max_length=20, validators=[validate_whatsapp_number])

    def validate_phone_number(self, value):
        return format_phone_number(value)


class JasaPostingSerializer(ListingSerializer):
    price = serializers.IntegerField(validators=[validate_listing_price])
    photos = serializers.ListField(child=serializers.CharField(), validators=[validate_photos])

    class Meta:
        model = JasaPosting
        fields = [
            'id', 'code', 'owner_name', 'game', 'game_id', 'price', 'phone_number',
            'is_safe', 'additional_spec', 'photos', 'user', 'is_approved',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['code', 'user', 'is_approved']
        extra_kwargs = {
            'owner_name': {'error_messages': {'blank': 'Nama pemilik akun harus diisi'}},
            'is_safe': {'error_messages': {'required': 'Status keamanan akun harus dipilih'}},
        }


class JasaCariSerializer(ListingSerializer):
    price_min = serializers.IntegerField(validators=[validate_listing_price])
    price_max = serializers.IntegerField(validators=[validate_listing_price])
    account_spec = serializers.CharField(validators=[validate_spec_words])

    class Meta:
        model = JasaCari
        fields = [
            'id', 'code', 'requester_name', 'game', 'game_id', 'price_min', 'price_max',
            'phone_number', 'account_spec', 'user', 'is_approved', 'created_at', 'updated_at',
        ]
        read_only_fields = ['code', 'user', 'is_approved']
        extra_kwargs = {
            'requester_name': {'error_messages': {'blank': 'Nama harus diisi'}},
        }

    def validate(self, attrs):
        validate_price_range(attrs['price_min'], attrs['price_max'])
        return attrs


class PublicJasaPostingSerializer(JasaPostingSerializer):
    """Market view of a posting: contact details stay with the admins."""
    game_id = None
    phone_number = None

    class Meta(JasaPostingSerializer.Meta):
        fields = [
            'id', 'code', 'owner_name', 'game', 'price', 'is_safe',
            'additional_spec', 'photos', 'is_approved', 'created_at',
        ]


class PublicJasaCariSerializer(JasaCariSerializer):
    game_id = None
    phone_number = None

    class Meta(JasaCariSerializer.Meta):
        fields = [
            'id', 'code', 'requester_name', 'game', 'price_min', 'price_max',
            'account_spec', 'is_approved', 'created_at',
        ]
