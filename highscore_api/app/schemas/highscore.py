"""
Pydantic schema for highscore records.

A highscore is a ``(score, name, version)`` triple.  The same model is
used for request bodies and responses, so the wire shape is exactly
these three fields in this order.  Types are strict: a score sent as a
string or a float is rejected rather than coerced.
"""

from pydantic import BaseModel, Field, StrictInt, StrictStr

# Scores must fit in an unsigned 32-bit integer.
SCORE_MAX = 2**32 - 1


class Highscore(BaseModel):
    """A single submitted result."""

    score: StrictInt = Field(..., ge=0, le=SCORE_MAX, description="Non-negative score")
    name: StrictStr = Field(..., description="Player name; not unique")
    version: StrictStr = Field(..., description="Game or client version the score was achieved under")
