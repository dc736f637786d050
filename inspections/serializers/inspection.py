import html

import bleach
from rest_framework import serializers


def _clean_text(v):
    if v is None:
        return v
    # strip tags only; entities come back as the characters the client sent
    return html.unescape(bleach.clean(v, strip=True))


class AttachmentField(serializers.JSONField):
    """A URL string or an ``{url, key, type, name, ...}`` object."""


class InspectionItemSerializer(serializers.Serializer):
    item_number = serializers.IntegerField(required=False, allow_null=True)
    item_text = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    response = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='na')
    location_action = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    action_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    photo = AttachmentField(required=False, allow_null=True)
    doc = AttachmentField(required=False, allow_null=True)

    def validate_response(self, v):
        return v or 'na'


class GeoLocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(required=False, allow_null=True)
    lng = serializers.FloatField(required=False, allow_null=True)
    accuracy = serializers.FloatField(required=False, allow_null=True)
    timestamp = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class HospitalSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    logo = AttachmentField(required=False, allow_null=True)
    # already normalised; left loose so odd shapes never block a save
    images = serializers.JSONField(required=False, allow_null=True)


class InspectionPayloadSerializer(serializers.Serializer):
    """Full inspection document as submitted by the client.

    Used for create and for update alike: an update replaces the whole
    record, so the same shape is required in both cases.
    """
    inspection_date = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    inspector_name = serializers.CharField(max_length=255, error_messages={
        'required': 'inspector_name is required',
        'blank': 'inspector_name is required',
        'null': 'inspector_name is required',
    })
    inspector_email = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    comments = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32)
    items = InspectionItemSerializer(many=True, required=False, allow_null=True)
    images = serializers.ListField(child=AttachmentField(allow_null=True), required=False, allow_null=True)
    inspector_selfie = AttachmentField(required=False, allow_null=True)
    inspector_signature = AttachmentField(required=False, allow_null=True)
    geo_location = GeoLocationSerializer(required=False, allow_null=True)
    hospital = HospitalSerializer(required=False, allow_null=True)

    def validate_inspector_name(self, v):
        v = _clean_text((v or '').strip())
        if not v:
            raise serializers.ValidationError('inspector_name is required')
        return v

    def validate_comments(self, v):
        return _clean_text(v)

    def to_payload(self) -> dict:
        """Validated data as plain dicts and lists, ready for JSON columns."""
        return _plain(self.validated_data)


def _plain(value):
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


class UploadUrlSerializer(serializers.Serializer):
    filename = serializers.CharField(required=False, allow_blank=True)
    contentType = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get('filename') or not attrs.get('contentType'):
            raise serializers.ValidationError('filename and contentType required')
        return attrs


class PresignGetSerializer(serializers.Serializer):
    key = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    url = serializers.CharField(required=False, allow_blank=True, allow_null=True)
