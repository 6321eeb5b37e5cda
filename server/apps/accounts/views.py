"""REST API views for registration and login."""

from rest_framework import permissions, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from server.apps.accounts.logic.registration import (
    issue_token,
    login_user,
    register_user,
)
from server.apps.accounts.serializers import (
    AccountSerializer,
    CredentialsSerializer,
)


class RegisterView(APIView):
    """Create an account and issue a bearer token."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request: Request) -> Response:
        """Register the user."""
        serializer = CredentialsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = register_user(
            serializer.validated_data['username'],
            serializer.validated_data['password'],
            serializer.validated_data['email'] or None,
        )
        return Response(
            {
                'message': 'User registered successfully',
                'success': True,
                'token': issue_token(user),
                'user': AccountSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """Exchange credentials for a bearer token."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request: Request) -> Response:
        """Log the user in."""
        serializer = CredentialsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = login_user(
            serializer.validated_data['username'],
            serializer.validated_data['password'],
        )
        return Response({
            'success': True,
            'token': issue_token(user),
            'user': AccountSerializer(user).data,
        })
