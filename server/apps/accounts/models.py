"""Database models for accounts app."""

from typing import final

from django.contrib.auth.models import AbstractUser
from django.db import models


@final
class User(AbstractUser):
    """Application user.

    Same as Django's default user, except that email is required
    and unique across all accounts.
    """

    email = models.EmailField('email address', unique=True)
