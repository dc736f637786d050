from rest_framework import serializers


class CredentialsSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)

    def validate(self, attrs):
        if not attrs.get('email') or not attrs.get('password'):
            raise serializers.ValidationError('email and password required')
        return attrs


class LoginSerializer(CredentialsSerializer):
    pass


class RegisterSerializer(CredentialsSerializer):
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
