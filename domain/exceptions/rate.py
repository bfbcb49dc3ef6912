class RateException(Exception):
    pass


class RateSourceError(RateException):
    pass


class NetworkFailure(RateSourceError):
    pass


class MalformedResponse(RateSourceError):
    pass


class NoDataFailure(RateSourceError):
    pass


class PersistenceFailure(RateException):
    pass


class UnsupportedStablecoinError(RateException):
    pass
