from .colorspace import (
    RGB,
    Lab,
    OKLab,
    hex_to_rgb,
    oklab_to_rgb,
    rgb_to_hex,
    rgb_to_lab,
    rgb_to_oklab,
)
from .config import GameConfig
from .errors import (
    InvalidColorError,
    InvalidInputError,
    PigmentMatchError,
    SessionStateError,
    UnknownPigmentError,
)
from .mixing import SubtractiveMixer, WeightedColor, mix_oklab
from .pigments import Pigment, PigmentCatalog, get_catalog
from .scoring import ScoreResult, calculate_color_score, color_distance
from .session import GamePhase, GameSession, MixResult

__version__ = "0.1.0"
