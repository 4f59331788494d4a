"""
Django settings pour Solar Financing.

Le projet n'expose ni vues ni modèles : Django fournit la configuration,
le cache des productibles et l'intégration Celery aux calculateurs.
"""

import os

# ==============================================================================
# BASE
# ==============================================================================

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'solar-financing-dev-key')

DEBUG = os.environ.get('DJANGO_DEBUG', 'False') == 'True'

INSTALLED_APPS = [
    'core',
    'weather',
    'solar_calc',
    'financial',
    'energy_audit',
]

# Aucune persistance : les résultats sont sérialisés par l'appelant
DATABASES = {}

USE_TZ = True
TIME_ZONE = 'Africa/Tunis'
LANGUAGE_CODE = 'fr-fr'

# ==============================================================================
# CACHE (productibles PVGIS)
# ==============================================================================

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'solar-financing',
    }
}

# ==============================================================================
# PVGIS
# ==============================================================================

PVGIS_API_URL = os.environ.get('PVGIS_API_URL', 'https://re.jrc.ec.europa.eu/api/v5_3/PVcalc')
PVGIS_TIMEOUT = int(os.environ.get('PVGIS_TIMEOUT', 30))
PVGIS_MAX_RETRIES = int(os.environ.get('PVGIS_MAX_RETRIES', 2))

# 30 jours
YIELD_CACHE_TIMEOUT = 60 * 60 * 24 * 30
YIELD_LOOKUP_WORKERS = 6

# ==============================================================================
# CELERY
# ==============================================================================

CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND', 'redis://localhost:6379/0')
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_TRACK_STARTED = True

# ==============================================================================
# LOGGING
# ==============================================================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'weather': {'level': os.environ.get('WEATHER_LOG_LEVEL', 'INFO')},
        'financial': {'level': 'INFO'},
        'solar_calc': {'level': 'INFO'},
        'energy_audit': {'level': 'INFO'},
    },
}
