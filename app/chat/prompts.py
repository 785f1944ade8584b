from __future__ import annotations

import json
from typing import Any, Dict


INTENT_PARSER_SYSTEM = (
    "You are the intent parser for Lucra AI, a crypto wallet chat app. "
    "Decide whether the user message is an action request or a conversational query. "
    "Return strict JSON only (no markdown, no commentary). "
    "For actions, required keys: intent, amount, token, recipients, split_type, note, "
    "history_type, limit, isConversational. "
    "intent must be one of send, split, check_balance, transaction_history, chat_history, history. "
    "amount is a number or null. token defaults to ETH when not specified. "
    "recipients lists the handles written with @, without the @. "
    "split_type is one of equal, percentage, custom, or null. "
    "history_type is one of transactions, chat, all, or null. "
    "isConversational is false for actions. "
    "For greetings and questions return {intent: conversation, isConversational: true, query}. "
    "If you are not sure about a field, use null."
)

CONVERSATION_SYSTEM = (
    "You are Lucra AI, a friendly assistant for a crypto wallet app. "
    "Lucra AI is a personal onchain CFO: users send, split and track payments and manage "
    "wallets in natural language. It integrates with the Base and Ethereum networks. "
    "Base is a low-cost Ethereum L2 built on the OP Stack and incubated by Coinbase. "
    "Keep answers concise and informative, in simple terms. "
    "Focus on crypto topics and Lucra AI features. "
    "Do not invent facts about Lucra AI; if you don't know, say so and offer other help. "
    "Return strict JSON only with a single key: message."
)


def build_intent_parser_prompt(message: str) -> Dict[str, str]:
    user = {
        "message": message,
        "examples": [
            {
                "input": "Send 50 ETH to @alice.base",
                "output": {
                    "intent": "send",
                    "amount": 50,
                    "token": "ETH",
                    "recipients": ["alice.base"],
                    "split_type": None,
                    "note": None,
                    "isConversational": False,
                },
            },
            {
                "input": "Split 100 equally between @bob and @charlie for dinner",
                "output": {
                    "intent": "split",
                    "amount": 100,
                    "token": "ETH",
                    "recipients": ["bob", "charlie"],
                    "split_type": "equal",
                    "note": "dinner",
                    "isConversational": False,
                },
            },
            {
                "input": "Check my balance",
                "output": {
                    "intent": "check_balance",
                    "amount": None,
                    "token": "ETH",
                    "recipients": [],
                    "split_type": None,
                    "note": None,
                    "isConversational": False,
                },
            },
            {
                "input": "Show my transaction history",
                "output": {
                    "intent": "transaction_history",
                    "history_type": "transactions",
                    "limit": 10,
                    "isConversational": False,
                },
            },
            {
                "input": "Hi there",
                "output": {"intent": "conversation", "isConversational": True, "query": "Hi there"},
            },
            {
                "input": "How does Base network work?",
                "output": {
                    "intent": "conversation",
                    "isConversational": True,
                    "query": "How does Base network work?",
                },
            },
        ],
        "instruction": "Parse the message and return JSON only.",
    }

    return {
        "system": INTENT_PARSER_SYSTEM,
        "user": json.dumps(user, ensure_ascii=True),
    }


def build_conversation_prompt(query: str, context: Dict[str, Any] | None = None) -> Dict[str, str]:
    user = {
        "query": query,
        "context": context or {},
        "instruction": "Return JSON: {\"message\": \"...\"}",
    }
    return {
        "system": CONVERSATION_SYSTEM,
        "user": json.dumps(user, ensure_ascii=True),
    }
