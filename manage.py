#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import os
import sys


def main():
    """Run administrative tasks."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseLedgerService.settings.dev")
    from django.core.management import execute_from_command_line
    from django.core.management.commands.runserver import Command as runserver

    runserver.default_port = os.environ.get("PORT", "7861")
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
