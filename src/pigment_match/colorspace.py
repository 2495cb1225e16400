# colorspace.py – sRGB ↔ linear RGB ↔ OKLab, sRGB → CIE Lab
#   - IEC 61966-2-1 companding (gamma 2.4, offset 0.055)
#   - OKLab matrices as published by Björn Ottosson (linear sRGB input)
#   - CIE Lab relative to D65 (0.95047, 1.0, 1.08883)

from __future__ import annotations

import numbers
import string
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from coloraide import Color

from .errors import InvalidColorError

# --- constants ---------------------------------------------------------------
SRGB_THRESHOLD = 0.04045
LINEAR_THRESHOLD = 0.0031308
SRGB_EXPONENT = 2.4
SRGB_A = 0.055

LAB_EPSILON = 0.008856
LAB_SLOPE = 7.787
D65_WHITE = np.array([0.95047, 1.0, 1.08883], dtype=np.float64)

# linear sRGB → LMS
_M1 = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ],
    dtype=np.float64,
)
# LMS′ → OKLab
_M2 = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ],
    dtype=np.float64,
)
# OKLab → LMS′
_M2_INV = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ],
    dtype=np.float64,
)
# LMS → linear sRGB
_M1_INV = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ],
    dtype=np.float64,
)
# linear sRGB → XYZ (D65)
_RGB_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ],
    dtype=np.float64,
)


# --- value types -------------------------------------------------------------
@dataclass(frozen=True)
class RGB:
    """8-bit sRGB colour, the display and interchange format."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, numbers.Integral):
                raise InvalidColorError(f"{name} must be an integer, got {v!r}")
            if not 0 <= v <= 255:
                raise InvalidColorError(f"{name} must be in 0..255, got {v}")
            object.__setattr__(self, name, int(v))

    def coords(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        return rgb_to_hex(self)


@dataclass(frozen=True)
class OKLab:
    L: float
    a: float
    b: float

    def __post_init__(self) -> None:
        for name in ("L", "a", "b"):
            v = float(getattr(self, name))
            if not np.isfinite(v):
                raise InvalidColorError(f"OKLab {name} must be finite, got {v}")
            object.__setattr__(self, name, v)

    def coords(self) -> tuple[float, float, float]:
        return (self.L, self.a, self.b)


@dataclass(frozen=True)
class Lab:
    L: float
    a: float
    b: float

    def coords(self) -> tuple[float, float, float]:
        return (self.L, self.a, self.b)


ColorLike = Union[RGB, OKLab, Lab, Sequence[float], np.ndarray]


def _vec(c: ColorLike) -> np.ndarray:
    if isinstance(c, (RGB, OKLab, Lab)):
        c = c.coords()
    v = np.asarray(c, dtype=np.float64)
    if v.shape != (3,):
        raise InvalidColorError(f"expected 3 channels, got shape {v.shape}")
    return v


# --- IEC 61966-2-1 companding ------------------------------------------------
def srgb_to_linear(u):
    """Gamma-decode sRGB values in [0,1]; scalars in, scalars out."""
    v = np.atleast_1d(np.asarray(u, dtype=np.float64))
    m = v > SRGB_THRESHOLD
    out = np.empty_like(v)
    out[m] = ((v[m] + SRGB_A) / (1.0 + SRGB_A)) ** SRGB_EXPONENT
    out[~m] = v[~m] / 12.92
    return float(out[0]) if np.ndim(u) == 0 else out


def linear_to_srgb(u):
    v = np.atleast_1d(np.asarray(u, dtype=np.float64))
    m = v > LINEAR_THRESHOLD
    out = np.empty_like(v)
    out[m] = (1.0 + SRGB_A) * np.power(v[m], 1.0 / SRGB_EXPONENT) - SRGB_A
    out[~m] = v[~m] * 12.92
    return float(out[0]) if np.ndim(u) == 0 else out


def rgb_to_linear(rgb: ColorLike) -> np.ndarray:
    return srgb_to_linear(_vec(rgb) / 255.0)


def linear_to_rgb(lrgb: ColorLike) -> RGB:
    # round half up (Math.round on the browser side) and saturate
    u8 = np.floor(linear_to_srgb(_vec(lrgb)) * 255.0 + 0.5)
    u8 = np.clip(np.nan_to_num(u8, nan=0.0), 0, 255).astype(int)
    return RGB(int(u8[0]), int(u8[1]), int(u8[2]))


# --- OKLab -------------------------------------------------------------------
def linear_rgb_to_oklab(lrgb: ColorLike) -> OKLab:
    lms = _M1 @ _vec(lrgb)
    L, a, b = _M2 @ np.cbrt(lms)
    return OKLab(L, a, b)


def oklab_to_linear_rgb(oklab: ColorLike) -> np.ndarray:
    lms_ = _M2_INV @ _vec(oklab)
    # negative LMS′ would cube to a negative cone response
    lms = np.maximum(lms_, 0.0) ** 3
    return np.clip(_M1_INV @ lms, 0.0, 1.0)


def rgb_to_oklab(rgb: ColorLike) -> OKLab:
    return linear_rgb_to_oklab(rgb_to_linear(rgb))


def oklab_to_rgb(oklab: ColorLike) -> RGB:
    return linear_to_rgb(oklab_to_linear_rgb(oklab))


# --- CIE Lab -----------------------------------------------------------------
def _lab_f(t: np.ndarray) -> np.ndarray:
    out = np.empty_like(t)
    m = t > LAB_EPSILON
    out[m] = np.cbrt(t[m])
    out[~m] = LAB_SLOPE * t[~m] + 16.0 / 116.0
    return out


def rgb_to_lab(rgb: ColorLike) -> Lab:
    xyz = _RGB_XYZ @ rgb_to_linear(rgb)
    fx, fy, fz = _lab_f(xyz / D65_WHITE)
    return Lab(116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


# --- hex / CSS strings -------------------------------------------------------
def _canon_hex(s: str) -> str:
    raw = s.strip()
    bare = raw.lstrip("#")
    if len(bare) in (3, 6) and all(c in string.hexdigits for c in bare):
        return "#" + bare.lower()
    return raw


def hex_to_rgb(text: str) -> RGB:
    """Parse ``#rgb`` / ``#rrggbb`` (``#`` optional) or any CSS colour."""
    if not isinstance(text, str) or not text.strip():
        raise InvalidColorError(f"invalid color: {text!r}")
    try:
        color = Color(_canon_hex(text))
    except ValueError as exc:
        raise InvalidColorError(f"invalid color: {text!r}") from exc
    coords = np.nan_to_num(np.asarray(color.convert("srgb").clip().coords()[:3]))
    r, g, b = np.clip(np.floor(coords * 255.0 + 0.5), 0, 255).astype(int)
    return RGB(int(r), int(g), int(b))


def rgb_to_hex(rgb: RGB) -> str:
    return f"#{rgb.r:02x}{rgb.g:02x}{rgb.b:02x}"


__all__ = [
    "RGB",
    "OKLab",
    "Lab",
    "srgb_to_linear",
    "linear_to_srgb",
    "rgb_to_linear",
    "linear_to_rgb",
    "linear_rgb_to_oklab",
    "oklab_to_linear_rgb",
    "rgb_to_oklab",
    "oklab_to_rgb",
    "rgb_to_lab",
    "hex_to_rgb",
    "rgb_to_hex",
]
