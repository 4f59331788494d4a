"""
Package de configuration : expose l'application Celery au chargement de Django.
"""

from .celery import app as celery_app

__all__ = ('celery_app',)
