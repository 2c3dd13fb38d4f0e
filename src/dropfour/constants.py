# Board geometry. Row 0 is the top row; discs settle toward ROWS - 1.
ROWS = 6
COLS = 9
WIN_LENGTH = 4

# Cell states
EMPTY = 0
PLAYER_1 = 1
PLAYER_2 = 2
PLAYERS = (PLAYER_1, PLAYER_2)

PLAYER_NAMES = {
    PLAYER_1: "Player 1",
    PLAYER_2: "Player 2",
}

# Scoring. Faster wins score more, clamped to [MIN_ROUND_POINTS, MAX_ROUND_POINTS].
MAX_SCORE = 120
MAX_ROUND_POINTS = 30
MIN_ROUND_POINTS = 10
PAR_PLAYER_MOVES = 20
POINTS_PER_SAVED_MOVE = 2

# Mods
MAX_ACTIVE_MODS = 2


def opponent_of(player: int) -> int:
    if player == PLAYER_1:
        return PLAYER_2
    if player == PLAYER_2:
        return PLAYER_1
    raise ValueError(f"Unknown player {player!r}")
