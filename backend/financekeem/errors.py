"""
Error taxonomy shared by the storage layer, the services and the API
"""


class FinanceKeemError(Exception):
    """Base class for application errors"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFound(FinanceKeemError):
    """Update/delete/lookup on a record id that does not exist"""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection} record {record_id} not found")
        self.collection = collection
        self.record_id = record_id


class StorageUnavailable(FinanceKeemError):
    """The backing store could not be reached or read"""


class Conflict(FinanceKeemError):
    """A write violated a uniqueness constraint of the store"""

    def __init__(self, collection: str, fields: tuple):
        super().__init__(f"{collection}: duplicate value for {', '.join(fields)}")
        self.collection = collection
        self.fields = fields


class ValidationError(FinanceKeemError):
    """Input rejected before any write was attempted"""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field
