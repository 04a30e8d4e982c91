from .api.luxafor_api import LuxaforAPI
from .facade.flag_facade import FlagFacade
from .exceptions import LuxaforError, FlagUpdateError

__all__ = ['LuxaforAPI', 'FlagFacade', 'LuxaforError', 'FlagUpdateError']
