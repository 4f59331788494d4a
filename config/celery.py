# config/celery.py
"""
Configuration Celery pour Solar Financing.

Les audits solaires, comparaisons de financement et rafraîchissements
des productibles PVGIS peuvent être exécutés en tâches asynchrones.
"""

import os
from celery import Celery

# Définir le module de settings Django par défaut
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('solar_financing')

# Paramètres préfixés par 'CELERY_' dans settings.py
app.config_from_object('django.conf:settings', namespace='CELERY')

# Tâches des apps installées (weather, solar_calc, financial)
app.autodiscover_tasks()
