import logging

from emoji_cinema.models import PHASE_PLAYING, Player, Room

logger = logging.getLogger(__name__)

_QUOTE_CHARS = str.maketrans('', '', '"«»')


def normalize_answer(text: str) -> str:
    return text.lower().translate(_QUOTE_CHARS).strip()


def is_correct_guess(text: str, title: str) -> bool:
    """Symmetric containment: either normalized string contains the other.

    An empty guess never matches, otherwise it would be contained in every
    title.
    """
    guess = normalize_answer(text)
    answer = normalize_answer(title)
    if not guess or not answer:
        return False
    return guess in answer or answer in guess


def score_chat_message(room: Room, player: Player, text: str) -> bool:
    """Apply scoring for a chat message; return True when it was a correct guess.

    +1 to the sender on a match. Rooms that are not playing, or have no
    secret, never score.
    """
    if room.phase != PHASE_PLAYING or not room.secret:
        return False
    if not is_correct_guess(text, room.secret['title']):
        return False
    award_point(player)
    logger.info(f"[guess-correct] room={room.id} player={player.id} score={player.score}")
    return True


def award_point(player: Player) -> int:
    player.score += 1
    return player.score
