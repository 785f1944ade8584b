from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # database
    database_url: str = "sqlite:///./lucra.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout_s: int = 30
    db_pool_recycle_s: int = 1800

    # llm
    llm_enabled: bool = True
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"  # safe default- override via env
    openai_api_key: str = ""
    llm_temperature: float = 0.1
    llm_chat_temperature: float = 0.7
    llm_timeout_s: int = 30

    # tracing (optional)
    langsmith_tracing: bool = False
    langsmith_api_key: str = ""
    langsmith_project: str = "lucra-ai"
    langsmith_endpoint: str = "https://api.smith.langchain.com"

    # logging
    log_level: str = "INFO"
    log_json: bool = False

    # chat
    default_token: str = "ETH"
    default_wallet_type: str = "wagmi"
    history_default_limit: int = 10
    conversation_title_max_len: int = 50
    explorer_tx_url: str = "https://basescan.org/tx/{hash}"
    default_network: str = "base"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def DATABASE_URL(self) -> str:
        return self.database_url

    @property
    def LLM_ENABLED(self) -> bool:
        return self.llm_enabled

    @property
    def LLM_PROVIDER(self) -> str:
        return self.llm_provider

    @property
    def LLM_MODEL(self) -> str:
        return self.llm_model

    @property
    def OPENAI_API_KEY(self) -> str:
        return self.openai_api_key

    @property
    def LLM_TEMPERATURE(self) -> float:
        return self.llm_temperature

    @property
    def LLM_CHAT_TEMPERATURE(self) -> float:
        return self.llm_chat_temperature

    @property
    def LLM_TIMEOUT_S(self) -> int:
        return self.llm_timeout_s


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader (process-level).
    """
    return Settings()
