"""Management command to remove storage folders without a project."""

import logging
import shutil
import uuid
from datetime import datetime, timedelta
from typing import Any, Final

from django.core.management.base import BaseCommand
from django.utils import timezone

from server.apps.projects.logic.storage_operations import (
    PROJECTS_FOLDER,
    get_storage,
)
from server.apps.projects.models import Project

_DEFAULT_BATCH_SIZE: Final = 1000

# Uploads in progress write files before their record is committed
_DEFAULT_MIN_AGE_SECONDS: Final = 3600

logger = logging.getLogger(__name__)


def _is_project_id(folder_name: str) -> bool:
    try:
        uuid.UUID(folder_name)
    except ValueError:
        return False
    return True


def _modified_before(storage: Any, folder: str, cutoff: datetime) -> bool:
    try:
        return storage.get_modified_time(folder) < cutoff
    except FileNotFoundError:
        return False


class Command(BaseCommand):
    """Delete project folders whose project record no longer exists."""

    help = 'Remove orphaned project folders from storage'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=_DEFAULT_BATCH_SIZE,
            help=f'Max folders to process (default: {_DEFAULT_BATCH_SIZE})',
        )
        parser.add_argument(
            '--min-age',
            type=int,
            default=_DEFAULT_MIN_AGE_SECONDS,
            help=(
                'Only remove folders untouched for this many seconds ' +
                f'(default: {_DEFAULT_MIN_AGE_SECONDS})'
            ),
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the cleanup command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        batch_size = options['batch_size']
        cutoff = timezone.now() - timedelta(seconds=options['min_age'])
        storage = get_storage()

        try:
            folder_names, _ = storage.listdir(PROJECTS_FOLDER)
        except FileNotFoundError:
            self.stdout.write(self.style.SUCCESS('No project storage found'))
            return

        candidates = [name for name in folder_names if _is_project_id(name)]
        known_ids = {
            str(project_id)
            for project_id in Project.objects.filter(
                pk__in=candidates,
            ).values_list('pk', flat=True)
        }
        orphans = sorted(
            name for name in candidates
            if str(uuid.UUID(name)) not in known_ids
            and _modified_before(storage, f'{PROJECTS_FOLDER}/{name}', cutoff)
        )[:batch_size]

        count = 0
        failed = 0

        for folder_name in orphans:
            folder = f'{PROJECTS_FOLDER}/{folder_name}'
            if dry_run:
                self.stdout.write(f'Would delete: {folder}')
                count += 1
                continue

            try:
                shutil.rmtree(storage.path(folder))
            except OSError as exc:
                self.stderr.write(f'Failed to delete {folder}: {exc}')
                logger.exception('Failed to remove orphaned folder: %s', folder)
                failed += 1
                continue

            count += 1
            logger.info('Removed orphaned folder: %s', folder)

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Would remove {count} orphaned folders'),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Removed {count} orphaned folders, {failed} failed',
                ),
            )
