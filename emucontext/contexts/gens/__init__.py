from emucontext.contexts.gens.context import BUILDS, GensContext

__all__ = ["BUILDS", "GensContext"]
