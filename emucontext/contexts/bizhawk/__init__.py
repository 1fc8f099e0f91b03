from emucontext.contexts.bizhawk.context import BizHawkContext

__all__ = ["BizHawkContext"]
