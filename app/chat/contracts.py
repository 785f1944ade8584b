from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer


class IntentType(str, Enum):
    SEND = "send"
    SPLIT = "split"
    CHECK_BALANCE = "check_balance"
    TRANSACTION_HISTORY = "transaction_history"
    CHAT_HISTORY = "chat_history"
    HISTORY = "history"
    CONVERSATION = "conversation"
    UNKNOWN = "unknown"


class SplitType(str, Enum):
    EQUAL = "equal"
    PERCENTAGE = "percentage"
    CUSTOM = "custom"


class HistoryType(str, Enum):
    TRANSACTIONS = "transactions"
    CHAT = "chat"
    ALL = "all"


TRANSACTION_INTENTS = {IntentType.SEND, IntentType.SPLIT}
HISTORY_INTENTS = {IntentType.TRANSACTION_HISTORY, IntentType.CHAT_HISTORY, IntentType.HISTORY}


class _IntentBase(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    raw_message: str | None = None
    parsed_by: str | None = None


class ConversationIntent(_IntentBase):
    intent: Literal["conversation"] = "conversation"
    is_conversational: Literal[True] = Field(default=True, alias="isConversational")
    query: str


class ActionIntent(_IntentBase):
    intent: Literal[
        "send",
        "split",
        "check_balance",
        "transaction_history",
        "chat_history",
        "history",
        "unknown",
    ]
    amount: Decimal | None = None
    token: str = "ETH"
    recipients: list[str] = Field(default_factory=list)
    split_type: SplitType | None = None
    note: str | None = None
    history_type: HistoryType | None = None
    limit: int | None = Field(default=None, ge=1)
    is_conversational: Literal[False] = Field(default=False, alias="isConversational")
    query: str | None = None

    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, value: Decimal | None) -> float | int | None:
        if value is None:
            return None
        if value == value.to_integral_value():
            return int(value)
        return float(value)


ParsedIntent = Annotated[Union[ConversationIntent, ActionIntent], Field(discriminator="intent")]

parsed_intent_adapter: TypeAdapter[ParsedIntent] = TypeAdapter(ParsedIntent)


def intent_to_json(intent: ConversationIntent | ActionIntent) -> dict[str, Any]:
    return intent.model_dump(mode="json", by_alias=True)


class ChatMessageIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messages: list[ChatMessageIn] = Field(..., min_length=1)
    walletAddress: str | None = None
    conversationId: int | None = None


class ChatReply(BaseModel):
    text: str
    parsed: dict[str, Any] = Field(default_factory=dict)
