class CabinetError(Exception):
    """Base class for errors reported to the user without a traceback."""


class UsageError(CabinetError):
    pass


class ListenError(UsageError):
    pass


class ConfigError(CabinetError):
    pass
