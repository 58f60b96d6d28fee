#!/usr/bin/env python3
"""
Command-line entry point for the thisizstore project.

Usage:
    python manage.py migrate
    python manage.py seed_games
    python manage.py prefetch_listings
    python manage.py runserver
"""
import os
import sys


def main() -> None:
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'thisizstore.settings')
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Is it installed in the active virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
