"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks ZK67_.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"

    # Evaluator
    target_value: int = 67
    strict_tokens: bool = False         # True = odrzucaj nieznane znaki zamiast je usuwać
    max_factorial_operand: int = 500
    max_result_bits: int = 8192

    # Sztuczne opóźnienia (UX) — tylko warstwa API, rdzeń jest synchroniczny
    prove_delay_ms: int = 500
    verify_delay_ms: int = 300

    # App
    app_title: str = "zk67"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="ZK67_", env_file=".env", extra="ignore")
