"""Serializers for the accounts REST API."""

from rest_framework import serializers


class CredentialsSerializer(serializers.Serializer):
    """Username/password pair, plus an optional email on registration.

    Presence of username and password is checked by the logic layer.
    """

    username = serializers.CharField(required=False, allow_blank=True, default='')
    password = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
        trim_whitespace=False,
        write_only=True,
    )
    email = serializers.EmailField(required=False, allow_blank=True, default='')


class AccountSerializer(serializers.Serializer):
    """Account as returned after login or registration."""

    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
