# coinbot/domain/wager.py
"""Jeux d'argent: tirage aléatoire uniforme, gain = floor(mise * multiplicateur).

Chaque partie tient dans une seule transaction: validation de la mise,
tirage, règlement sur le wallet (``gain - mise`` si gagné, ``-mise`` sinon),
écriture au ledger et XP "gambling" via le moteur de progression.
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Optional

from coinbot.core.config import settings
from coinbot.core.db.base import run_in_transaction
from coinbot.core.errors import BetOutOfRange, InsufficientFunds, InvalidAmount, InvalidGuess
from coinbot.domain import accounts as d_accounts
from coinbot.domain import economy as d_economy
from coinbot.domain import progression as d_progression
from coinbot.domain.money import floor_mul
from coinbot.domain.progression import XPResult

log = logging.getLogger(__name__)

COIN_SIDES = ("heads", "tails")
ROULETTE_BETS = ("red", "black", "even", "odd", "high", "low", "number")

# Source par défaut: chaque tirage est indépendant, pas de graine exposée.
_rng = random.SystemRandom()


@dataclass(frozen=True)
class WagerOutcome:
    game: str
    bet: int
    is_win: bool
    multiplier: float
    winnings: int
    net_change: int
    wallet: int
    xp: XPResult
    detail: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BatchOutcome:
    game: str
    plays: list[WagerOutcome]
    total_bet: int
    total_winnings: int
    net_change: int
    wins: int
    wallet: int


# ───────── Validation ─────────
def validate_bet_in(con, user_id, bet: int) -> None:
    cfg = settings.economy.gambling
    bet = int(bet)
    if bet < cfg.min_bet or (cfg.max_bet is not None and bet > cfg.max_bet):
        raise BetOutOfRange(bet, cfg.min_bet, cfg.max_bet)
    acc = d_accounts.ensure_in(con, user_id)
    if acc.wallet < bet:
        raise InsufficientFunds(bet, acc.wallet)

def validate_bet(user_id, bet: int) -> None:
    run_in_transaction(validate_bet_in, user_id, bet)

# ───────── Tirages & barèmes (purs) ─────────
def spin_reels(rng: random.Random, symbols: list[str], reels: int = 3) -> list[str]:
    return [rng.choice(symbols) for _ in range(reels)]

def slots_multiplier(reels: list[str]) -> float:
    cfg = settings.economy.gambling.slots
    a, b, c = reels
    if a == b == c:
        if a == cfg.jackpot_symbol:
            return cfg.three_jackpot
        if a == cfg.premium_symbol:
            return cfg.three_premium
        return cfg.three_other
    if a == b or b == c or a == c:
        return cfg.two_matching
    return 0

def number_guess_multiplier(range_: int) -> float:
    cfg = settings.economy.gambling.number_guess
    return cfg.base_multiplier + (int(range_) - 2) * cfg.difficulty_bonus

def roll_dice(rng: random.Random, count: int) -> list[int]:
    return [rng.randint(1, 6) for _ in range(int(count))]

def chambers_differ(rng: random.Random, chambers: int) -> bool:
    bullet = rng.randrange(chambers)
    trigger = rng.randrange(chambers)
    return bullet != trigger

def pocket_color(pocket: int) -> str:
    if pocket == 0:
        return "green"
    return "red" if pocket in settings.economy.gambling.roulette.red_numbers else "black"

def roulette_wins(bet_type: str, pocket: int, number: Optional[int] = None) -> bool:
    if bet_type == "number":
        return pocket == number
    # le zéro fait perdre toutes les mises simples
    if pocket == 0:
        return False
    return {
        "red": pocket_color(pocket) == "red",
        "black": pocket_color(pocket) == "black",
        "even": pocket % 2 == 0,
        "odd": pocket % 2 == 1,
        "high": pocket >= 19,
        "low": pocket <= 18,
    }[bet_type]

# ───────── Règlement ─────────
def _gambling_xp_in(con, user_id) -> XPResult:
    return d_progression.grant_xp_in(con, user_id, settings.economy.leveling.xp_sources.gambling, "gambling")

def settle_in(con, user_id, game: str, bet: int, is_win: bool, multiplier: float,
              detail: Optional[dict] = None, xp: Optional[XPResult] = None) -> WagerOutcome:
    uid = str(user_id)
    winnings = floor_mul(bet, multiplier) if is_win else 0
    net = winnings - bet if is_win else -bet

    if net > 0:
        d_economy.credit_in(con, uid, net, f"{game} win")
    elif net < 0:
        d_economy.debit_in(con, uid, -net, f"{game} {'win' if is_win else 'loss'}")

    if xp is None:
        xp = _gambling_xp_in(con, uid)
    wallet = d_accounts.ensure_in(con, uid).wallet
    return WagerOutcome(
        game=game, bet=bet, is_win=is_win, multiplier=multiplier if is_win else 0,
        winnings=winnings, net_change=net, wallet=wallet, xp=xp, detail=detail or {},
    )

# ───────── Jeux ─────────
def _slots_in(con, user_id, bet, rng):
    validate_bet_in(con, user_id, bet)
    reels = spin_reels(rng, settings.economy.gambling.slots.symbols)
    mult = slots_multiplier(reels)
    return settle_in(con, user_id, "slots", int(bet), mult > 0, mult, {"reels": reels})

def _coinflip_in(con, user_id, bet, choice, rng):
    if choice not in COIN_SIDES:
        raise InvalidGuess(f"choice must be one of {COIN_SIDES}")
    validate_bet_in(con, user_id, bet)
    result = rng.choice(COIN_SIDES)
    mult = settings.economy.gambling.coinflip.win_multiplier
    return settle_in(con, user_id, "coinflip", int(bet), result == choice, mult, {"result": result, "choice": choice})

def _number_guess_in(con, user_id, bet, guess, range_, rng):
    cfg = settings.economy.gambling.number_guess
    range_, guess = int(range_), int(guess)
    if not cfg.min_range <= range_ <= cfg.max_range:
        raise InvalidGuess(f"range must be between {cfg.min_range} and {cfg.max_range}")
    if not 1 <= guess <= range_:
        raise InvalidGuess(f"guess must be between 1 and {range_}")
    validate_bet_in(con, user_id, bet)
    result = rng.randint(1, range_)
    return settle_in(con, user_id, "number_guess", int(bet), result == guess, number_guess_multiplier(range_),
                     {"result": result, "guess": guess, "range": range_})

def _dice_in(con, user_id, bet, guess, dice_count, rng):
    cfg = settings.economy.gambling.dice
    dice_count, guess = int(dice_count), int(guess)
    if not 1 <= dice_count <= cfg.max_dice:
        raise InvalidGuess(f"dice count must be between 1 and {cfg.max_dice}")
    if not dice_count <= guess <= dice_count * 6:
        raise InvalidGuess(f"guess must be between {dice_count} and {dice_count * 6}")
    validate_bet_in(con, user_id, bet)
    rolls = roll_dice(rng, dice_count)
    total = sum(rolls)
    return settle_in(con, user_id, "dice_roll", int(bet), total == guess, cfg.exact_match_multiplier,
                     {"rolls": rolls, "total": total, "guess": guess})

def _roulette_in(con, user_id, bet, bet_type, number, rng):
    cfg = settings.economy.gambling.roulette
    bet_type = str(bet_type).lower().strip()
    if bet_type not in ROULETTE_BETS:
        raise InvalidGuess(f"bet type must be one of {ROULETTE_BETS}")
    if bet_type == "number":
        if number is None or not 0 <= int(number) <= 36:
            raise InvalidGuess("number bets need a number between 0 and 36")
        number = int(number)
    validate_bet_in(con, user_id, bet)
    pocket = rng.randint(0, 36)
    mult = cfg.number_multiplier if bet_type == "number" else cfg.even_money_multiplier
    return settle_in(con, user_id, "roulette", int(bet), roulette_wins(bet_type, pocket, number), mult,
                     {"pocket": pocket, "color": pocket_color(pocket), "bet_type": bet_type, "number": number})

def _russian_roulette_in(con, user_id, rng):
    cfg = settings.economy.gambling.russian_roulette
    acc = d_accounts.ensure_in(con, user_id)
    if acc.wallet <= 0:
        raise InsufficientFunds(1, acc.wallet)
    # XP d'abord: un bonus de level-up fait partie du tapis, perdre laisse donc le wallet à 0
    xp = _gambling_xp_in(con, acc.user_id)
    bet = d_accounts.ensure_in(con, acc.user_id).wallet  # tapis: tout le wallet, jamais le coffre
    survived = chambers_differ(rng, cfg.chambers)
    out = settle_in(con, acc.user_id, "russian_roulette", bet, survived, cfg.win_multiplier,
                    {"survived": survived}, xp=xp)
    log.info("Roulette russe %s: %s sur %d", acc.user_id, "survie" if survived else "perdu", bet)
    return out

# Jeux à mise fixe rejouables en série; la roulette russe (tapis) n'en fait pas partie.
_BATCHABLE = {
    "slots": _slots_in,
    "coinflip": _coinflip_in,
    "number_guess": _number_guess_in,
    "dice_roll": _dice_in,
    "roulette": _roulette_in,
}

def _batch_in(con, user_id, game, bet, repeats, args, rng):
    cfg = settings.economy.gambling
    play = _BATCHABLE.get(game)
    if play is None:
        raise ValueError(f"unknown game {game!r}")
    repeats, bet = int(repeats), int(bet)
    if not 1 <= repeats <= cfg.max_repeats:
        raise InvalidAmount(repeats, cfg.max_repeats)
    validate_bet_in(con, user_id, bet)
    acc = d_accounts.ensure_in(con, user_id)
    if acc.wallet < bet * repeats:
        raise InsufficientFunds(bet * repeats, acc.wallet)

    plays = [play(con, acc.user_id, bet, *args, rng) for _ in range(repeats)]
    net = sum(p.net_change for p in plays)
    log.info("Série %s x%d pour %s: %+d", game, repeats, acc.user_id, net)
    return BatchOutcome(
        game=game, plays=plays, total_bet=bet * repeats,
        total_winnings=sum(p.winnings for p in plays), net_change=net,
        wins=sum(1 for p in plays if p.is_win), wallet=plays[-1].wallet,
    )

def play_slots(user_id, bet: int, rng: random.Random | None = None) -> WagerOutcome:
    return run_in_transaction(_slots_in, user_id, bet, rng or _rng)

def play_coinflip(user_id, bet: int, choice: str, rng: random.Random | None = None) -> WagerOutcome:
    return run_in_transaction(_coinflip_in, user_id, bet, choice, rng or _rng)

def play_number_guess(user_id, bet: int, guess: int, range_: int, rng: random.Random | None = None) -> WagerOutcome:
    return run_in_transaction(_number_guess_in, user_id, bet, guess, range_, rng or _rng)

def play_dice(user_id, bet: int, guess: int, dice_count: int = 1, rng: random.Random | None = None) -> WagerOutcome:
    return run_in_transaction(_dice_in, user_id, bet, guess, dice_count, rng or _rng)

def play_russian_roulette(user_id, rng: random.Random | None = None) -> WagerOutcome:
    return run_in_transaction(_russian_roulette_in, user_id, rng or _rng)

def play_roulette(user_id, bet: int, bet_type: str, number: int | None = None,
                  rng: random.Random | None = None) -> WagerOutcome:
    return run_in_transaction(_roulette_in, user_id, bet, bet_type, number, rng or _rng)

def play_batch(user_id, game: str, bet: int, repeats: int, *args, rng: random.Random | None = None) -> BatchOutcome:
    """Joue ``repeats`` parties de ``game`` à mise ``bet``, tout ou rien.

    ``args`` sont les paramètres du jeu après la mise, dans l'ordre de sa
    fonction ``play_*`` (choix, guess/range, guess/dice_count, bet_type/number).
    """
    return run_in_transaction(_batch_in, user_id, game, bet, repeats, args, rng or _rng)
