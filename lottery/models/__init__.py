from .wager import MAX_NUMBER, NUMBERS_PER_WAGER, Wager
from .slip import MAX_BETS, MAX_DRAWS, Slip
from .draw import GRADES, Draw, GradeVector, prize_grade
from .ticket import Ticket, TicketId
from .persona import PersonalInfo
from .player import Player, PurchaseStrategy

__all__ = [
    "MAX_NUMBER",
    "NUMBERS_PER_WAGER",
    "Wager",
    "MAX_BETS",
    "MAX_DRAWS",
    "Slip",
    "GRADES",
    "Draw",
    "GradeVector",
    "prize_grade",
    "Ticket",
    "TicketId",
    "PersonalInfo",
    "Player",
    "PurchaseStrategy",
]
