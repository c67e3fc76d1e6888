"""
Wallet, XP and leaderboard collaborators.

These are mock stand-ins for an external rewards service: addresses are
random hex strings and the leaderboard is generated locally. They only
consume a finished session's score and status.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from .game.errors import SweeperError
from .game.session import GameSession


logger = logging.getLogger(__name__)

ADDRESS_HEX_DIGITS = 40


class ClaimError(SweeperError):
    """Raised when a session's score cannot be claimed."""


def mock_address(rng: Optional[random.Random] = None) -> str:
    """Generate a random ``0x``-prefixed 40 hex digit address."""
    rng = rng or random.Random()
    return "0x" + "".join(rng.choice("0123456789abcdef")
                          for _ in range(ADDRESS_HEX_DIGITS))


# ============================================================================
# Player
# ============================================================================

@dataclass
class Player:
    """
    A connected wallet and its accumulated XP.

    Attributes:
        wallet_address: Mock wallet address.
        asset_address: Mock asset address.
        xp: Total points claimed so far.
    """

    wallet_address: str
    asset_address: str
    xp: int = 0
    claimed_sessions: Set[int] = field(default_factory=set, repr=False, compare=False)

    def has_claimed(self, session: GameSession) -> bool:
        return session.session_id in self.claimed_sessions


def connect_wallet(rng: Optional[random.Random] = None) -> Player:
    """Create a player with freshly generated mock addresses."""
    rng = rng or random.Random()
    player = Player(wallet_address=mock_address(rng), asset_address=mock_address(rng))
    logger.info("Connected wallet %s", player.wallet_address)
    return player


def claim_points(player: Player, session: GameSession) -> int:
    """
    Add a finished session's score to the player's XP.

    Args:
        player: Player claiming the points.
        session: Session that reached a terminal status.

    Returns:
        Points added.

    Raises:
        ClaimError: Session still in progress or already claimed.
    """
    if not session.is_over:
        raise ClaimError("Cannot claim points before the game is over")
    if player.has_claimed(session):
        raise ClaimError("Points for this game were already claimed")

    player.claimed_sessions.add(session.session_id)
    player.xp += session.score
    logger.info("Claimed %d points for %s", session.score, player.wallet_address)
    return session.score


# ============================================================================
# Leaderboard
# ============================================================================

def mock_leaderboard(
    size: int = 10,
    rng: Optional[random.Random] = None,
    max_xp: int = 10000,
) -> List[Player]:
    """
    Generate a leaderboard of random players, highest XP first.

    Args:
        size: Number of players.
        rng: Randomness source.
        max_xp: Exclusive upper bound on generated XP.
    """
    rng = rng or random.Random()
    players = [
        Player(
            wallet_address=mock_address(rng),
            asset_address=mock_address(rng),
            xp=rng.randrange(max_xp),
        )
        for _ in range(size)
    ]
    players.sort(key=lambda p: p.xp, reverse=True)
    return players


def rank_player(leaderboard: List[Player], player: Player) -> int:
    """
    Insert a player into a sorted leaderboard.

    Ties rank below existing entries.

    Returns:
        1-based rank of the inserted player.
    """
    index = 0
    while index < len(leaderboard) and leaderboard[index].xp >= player.xp:
        index += 1
    leaderboard.insert(index, player)
    return index + 1
