#!/usr/bin/env python
"""Run the social graph service with the Django development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Start ``runlocal`` (runserver without migration checks).

    Extra command line arguments, such as an address:port, are passed on.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "social_service.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
