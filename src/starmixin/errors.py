class ExtenderError(Exception):
    """Base exception for view model extension errors"""
    pass

class MixinTargetError(ExtenderError):
    """Raised when a mixin type does not specify the view model it extends"""
    pass

class DuplicateModuleError(ExtenderError):
    """Raised when a module name is registered twice"""
    pass

class RegistrationOrderError(ExtenderError):
    """Raised when a module is used before ``register`` was called"""
    pass
