from emucontext.contexts.fceux.context import FceuxContext

__all__ = ["FceuxContext"]
