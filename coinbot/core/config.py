# coinbot/core/config.py
from __future__ import annotations
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

HOUR = 60 * 60
DAY = 24 * HOUR


def _opt_int(var: str) -> Optional[int]:
    # vide / absent = illimité
    raw = os.getenv(var, "").strip()
    return int(raw) if raw else None


class CurrencyConfig(BaseModel):
    starting_balance: int = 1000
    max_wallet_amount: Optional[int] = Field(default_factory=lambda: _opt_int("MAX_WALLET_AMOUNT"))
    max_transaction_amount: Optional[int] = Field(default_factory=lambda: _opt_int("MAX_TRANSACTION_AMOUNT"))
    min_transaction_amount: int = Field(default=1, ge=1)


class SafeConfig(BaseModel):
    base_cost: int = 5000
    base_capacity: int = 10000
    upgrade_multiplier: float = 1.5
    capacity_increase_per_tier: int = 10000
    max_tier: int = 50


class XPSources(BaseModel):
    gambling: int = 15
    transfer: int = 20
    work: int = 10


class LevelingConfig(BaseModel):
    base_xp: int = Field(default=100, gt=0)
    xp_multiplier: float = Field(default=1.5, ge=1)
    level_up_bonus: int = 500
    max_level: Optional[int] = None
    xp_sources: XPSources = XPSources()


class StreakConfig(BaseModel):
    enabled: bool = True
    per_streak_bonus: float = 0.1
    max_bonus: float = 2.0
    reset_after_s: int = 48 * HOUR


class ClaimConfig(BaseModel):
    amount: int
    window_s: int
    xp: int
    streak: Optional[StreakConfig] = None


class ClaimsConfig(BaseModel):
    daily: ClaimConfig = ClaimConfig(amount=1000, window_s=DAY, xp=25, streak=StreakConfig())
    weekly: ClaimConfig = ClaimConfig(amount=10000, window_s=7 * DAY, xp=100)
    monthly: ClaimConfig = ClaimConfig(amount=50000, window_s=30 * DAY, xp=500)
    yearly: ClaimConfig = ClaimConfig(amount=1000000, window_s=365 * DAY, xp=10000)

    @model_validator(mode="after")
    def _grace_longer_than_window(self):
        for name in ("daily", "weekly", "monthly", "yearly"):
            c: ClaimConfig = getattr(self, name)
            if c.streak and c.streak.reset_after_s <= c.window_s:
                raise ValueError(f"{name}: streak reset window must be longer than the claim window")
        return self


class WorkConfig(BaseModel):
    cooldown_s: int = 10
    base_reward: int = 100
    max_reward: int = 100000
    randomness: float = 0.1  # ±10%


class SlotsConfig(BaseModel):
    symbols: list[str] = ["🍒", "🍋", "🍊", "🍇", "💎", "7️⃣"]
    jackpot_symbol: str = "7️⃣"
    premium_symbol: str = "💎"
    three_jackpot: float = 10
    three_premium: float = 5
    three_other: float = 3
    two_matching: float = 1.5


class CoinflipConfig(BaseModel):
    win_multiplier: float = 1.95


class NumberGuessConfig(BaseModel):
    base_multiplier: float = 2
    difficulty_bonus: float = 0.5
    min_range: int = 2
    max_range: int = 100


class DiceConfig(BaseModel):
    exact_match_multiplier: float = 5.5
    max_dice: int = 5


class RussianRouletteConfig(BaseModel):
    chambers: int = Field(default=6, ge=2)
    win_multiplier: float = 5.5


class EuropeanRouletteConfig(BaseModel):
    red_numbers: list[int] = [1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36]
    even_money_multiplier: float = 2
    number_multiplier: float = 36


class GamblingConfig(BaseModel):
    min_bet: int = 100
    max_bet: Optional[int] = Field(default_factory=lambda: _opt_int("MAX_BET"))
    max_repeats: int = Field(default=10, ge=1)
    slots: SlotsConfig = SlotsConfig()
    coinflip: CoinflipConfig = CoinflipConfig()
    number_guess: NumberGuessConfig = NumberGuessConfig()
    dice: DiceConfig = DiceConfig()
    russian_roulette: RussianRouletteConfig = RussianRouletteConfig()
    roulette: EuropeanRouletteConfig = EuropeanRouletteConfig()


class EconomyConfig(BaseModel):
    currency: CurrencyConfig = CurrencyConfig()
    safe: SafeConfig = SafeConfig()
    leveling: LevelingConfig = LevelingConfig()
    claims: ClaimsConfig = ClaimsConfig()
    work: WorkConfig = WorkConfig()
    gambling: GamblingConfig = GamblingConfig()


class Settings(BaseModel):
    data_dir: str = os.getenv("DATA_DIR", "./data")
    db_file: str = os.getenv("DB_FILE", "coinbot.db")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    housekeeping_interval_s: int = int(os.getenv("HOUSEKEEPING_INTERVAL_S", "3600"))
    economy: EconomyConfig = EconomyConfig()

settings = Settings()
