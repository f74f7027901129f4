"""Django project package for the notifier service."""
