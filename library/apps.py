from django.apps import AppConfig

class LibraryConfig(AppConfig):
    """Django app config for the library access-control core."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'library'
    verbose_name = 'Library access control'
