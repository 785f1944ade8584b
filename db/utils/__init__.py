from .time import utcnow
from .types import MAX_AMOUNT, AmountType, JSONType, UUIDType, amount_in_range

__all__ = ["MAX_AMOUNT", "AmountType", "JSONType", "UUIDType", "amount_in_range", "utcnow"]
