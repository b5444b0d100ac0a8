class FlagException(Exception):
    pass


class AlreadyFlaggedException(FlagException):
    pass


class NotFlaggedException(FlagException):
    pass


class PluginNotFoundException(Exception):
    pass
