from .conversion_service import ConversionService
from .preferences_service import PreferencesService
from .rate_store import RateStore

__all__ = ['ConversionService', 'PreferencesService', 'RateStore']
