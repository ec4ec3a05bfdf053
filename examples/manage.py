#!/usr/bin/env python
"""Run management commands against the example symposium site."""

import os
import sys


def main() -> None:
    """Run administrative tasks with the example settings."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "settings")
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
