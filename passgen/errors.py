class EmptyPoolError(ValueError):
    """No character class was selected, so there is nothing to draw from."""

    def __init__(self, message="select at least one character class"):
        super().__init__(message)


class HistoryItemNotFound(LookupError):
    def __init__(self, item_id):
        super().__init__(f"history item not found: {item_id}")
        self.item_id = item_id


class StorageUnavailable(RuntimeError):
    """The history database could not be read or written. Safe to retry."""
