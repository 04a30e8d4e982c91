from .flag_facade import FlagFacade

__all__ = ['FlagFacade']
