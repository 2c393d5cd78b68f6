from courtdraw.models.player.player import Gender, Player

__all__ = [
    "Gender",
    "Player",
]
