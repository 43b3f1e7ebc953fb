"""Request serializers shared by the owner and customer profile endpoints.

Update serializers declare every field `required=False` so that absent keys
never reach `validated_data`; nullable fields use `allow_null=True` so an
explicit null survives as a "clear this value" instruction.
"""

from rest_framework import serializers

from .changes import ProfileChanges
from .models import normalize_email


class ProfileChangesSerializer(serializers.Serializer):
    """Validate a profile update and turn it into a `ProfileChanges`."""

    changes_class = ProfileChanges

    email = serializers.EmailField(required=False, max_length=254)
    phone_verification_token = serializers.CharField(required=False)
    full_name = serializers.CharField(required=False, min_length=2, max_length=150)
    photo_url = serializers.URLField(required=False, max_length=500)
    country_code = serializers.RegexField(r"^\+?\d{1,4}$", required=False)

    def validate_email(self, value: str) -> str:
        return normalize_email(value)

    def validate_country_code(self, value: str) -> str:
        return value.lstrip("+")

    def validate(self, attrs):
        unknown = sorted(set(self.initial_data) - set(self.fields))
        if unknown:
            raise serializers.ValidationError({name: "Unknown field." for name in unknown})
        return attrs

    def to_changes(self) -> ProfileChanges:
        return self.changes_class.from_data(self.validated_data)


class EmailChangeConfirmSerializer(serializers.Serializer):
    token = serializers.CharField()
