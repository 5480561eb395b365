from django.apps import AppConfig


class DarajaAppConfig(AppConfig):
    name = 'daraja'
    verbose_name = 'M-Pesa Daraja'
