from .luxafor_api import LuxaforAPI, DEFAULT_BASE_URL, SOLID_COLOR, BLINK

__all__ = ['LuxaforAPI', 'DEFAULT_BASE_URL', 'SOLID_COLOR', 'BLINK']
