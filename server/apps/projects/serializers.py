"""Serializers for the projects REST API."""

import json
from typing import Any

from rest_framework import serializers
from rest_framework.fields import empty
from rest_framework.utils import html

from server.apps.projects.models import Comment, Project, ProjectFile


class UserSummarySerializer(serializers.Serializer):
    """Public identity of a user: id and username only."""

    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)


class ProjectFileSerializer(serializers.ModelSerializer):
    """File metadata as exposed to clients."""

    filename = serializers.CharField(source='stored_name', read_only=True)
    path = serializers.CharField(source='storage_path', read_only=True)
    size = serializers.IntegerField(source='size_bytes', read_only=True)
    mimetype = serializers.CharField(source='mime_type', read_only=True)

    class Meta:
        """Serializer metadata."""

        model = ProjectFile
        fields = [
            'original_name',
            'filename',
            'path',
            'size',
            'mimetype',
            'uploaded_at',
        ]
        read_only_fields = fields


class CommentSerializer(serializers.ModelSerializer):
    """Comment with its author."""

    user = UserSummarySerializer(read_only=True)
    comment = serializers.CharField(source='text', read_only=True)

    class Meta:
        """Serializer metadata."""

        model = Comment
        fields = ['id', 'user', 'comment', 'created_at']
        read_only_fields = fields


class ProjectSerializer(serializers.ModelSerializer):
    """Full project representation with members, files and comments."""

    owner = UserSummarySerializer(read_only=True)
    collaborators = UserSummarySerializer(many=True, read_only=True)
    likes = serializers.PrimaryKeyRelatedField(many=True, read_only=True)
    like_count = serializers.SerializerMethodField()
    comments = CommentSerializer(many=True, read_only=True)
    files = ProjectFileSerializer(many=True, read_only=True)

    class Meta:
        """Serializer metadata."""

        model = Project
        fields = [
            'id',
            'title',
            'description',
            'technologies',
            'github',
            'demo',
            'owner',
            'collaborators',
            'likes',
            'like_count',
            'comments',
            'files',
            'storage_folder',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_like_count(self, obj: Project) -> int:
        """Count likes using the prefetched relation."""
        return len(obj.likes.all())


class TechnologiesField(serializers.Field):
    """List of technology names.

    Accepts a JSON list, a JSON encoded list (multipart forms send
    strings) or a comma separated string.
    """

    default_error_messages = {  # noqa: WPS115
        'invalid': 'Expected a list of strings.',
    }

    def get_value(self, dictionary: Any) -> Any:
        """Read single or repeated form values."""
        if html.is_html_input(dictionary):
            values = dictionary.getlist(self.field_name)
            if not values:
                return empty
            return values[0] if len(values) == 1 else values
        return super().get_value(dictionary)

    def to_internal_value(self, data: Any) -> list[str]:
        """Normalize input to a list of non-empty names."""
        if isinstance(data, str):
            data = self._parse_string(data)
        if not isinstance(data, list):
            self.fail('invalid')
        if not all(isinstance(item, str) for item in data):
            self.fail('invalid')
        return [item.strip() for item in data if item.strip()]

    def to_representation(self, value: Any) -> list[str]:
        """Return the stored list."""
        return list(value)

    def _parse_string(self, raw: str) -> Any:
        if not raw.strip():
            return []
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw.split(',')


class ProjectCreateSerializer(serializers.Serializer):
    """Input for project creation.

    Title and description presence is checked by the logic layer.
    """

    title = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
        max_length=200,
    )
    description = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
    )
    technologies = TechnologiesField(required=False, default=list)
    github = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
        max_length=500,
    )
    demo = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
        max_length=500,
    )


class CommentCreateSerializer(serializers.Serializer):
    """Input for a new comment."""

    comment = serializers.CharField(required=False, allow_blank=True)
