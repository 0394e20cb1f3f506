"""
Error types raised by the allocator and the paste store.

Each error carries the HTTP status the routing layer should answer with, so
handlers can map any PasteError without a lookup table.
"""


class PasteError(Exception):
    status_code = 500
    message = "Internal error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class AllocatorError(PasteError):
    pass


class InvalidSlug(AllocatorError):
    status_code = 400
    message = "Invalid slug. Use 1-64 alphanumeric characters, hyphens, or underscores."


class SlugTaken(AllocatorError):
    status_code = 409
    message = "Slug already taken"


class AllocationExhausted(AllocatorError):
    status_code = 500
    message = "Could not allocate a free paste id"


class StoreError(PasteError):
    pass


class DuplicateId(StoreError):
    status_code = 409
    message = "Paste id already exists"

    def __init__(self, paste_id: str, message=None):
        super().__init__(message)
        self.paste_id = paste_id


class EmptyContent(StoreError):
    status_code = 400
    message = "Content is required"


class StorageUnavailable(StoreError):
    status_code = 500
    message = "Storage unavailable"
