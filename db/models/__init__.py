from db.models.chat_message import ChatMessage
from db.models.conversation import Conversation
from db.models.transaction import Transaction, TransactionStatus
from db.models.user import User
from db.models.wallet_signature import WalletSignature

__all__ = [
    "ChatMessage",
    "Conversation",
    "Transaction",
    "TransactionStatus",
    "User",
    "WalletSignature",
]
