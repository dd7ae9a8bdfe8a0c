from .errors import EmptyPoolError, HistoryItemNotFound, StorageUnavailable
from .generator import CHARSETS, entropy, evaluate, generate
from .stats import compute_stats
from .storage import HistoryItem, HistoryStore
