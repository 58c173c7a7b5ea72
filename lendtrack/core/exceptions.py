class LendTrackError(Exception): pass

class ValidationError(LendTrackError): pass

class BookNotFoundError(LendTrackError): pass

class StoreError(LendTrackError): pass

NotFoundError = BookNotFoundError
