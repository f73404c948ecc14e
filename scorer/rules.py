"""Official pickleball game constants.

Games are played to 11 and must be won by 2. Player identifiers are the
letters shown on the court: A/B for my team, C/D for the opponents.
"""

# Game target
WIN_SCORE = 11
WIN_BY = 2

# Player identifiers, stored as (right court, left court)
MY_PLAYERS = ("A", "B")
OPPONENT_PLAYERS = ("C", "D")

# Side-out doubles: the team serving first only gets one server
FIRST_SERVER_NUMBER = 2
