from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .colorspace import OKLab, hex_to_rgb, rgb_to_oklab
from .errors import InvalidInputError, UnknownPigmentError


@dataclass(frozen=True)
class Pigment:
    id: str
    name: str
    code: str
    swatch_hex: str  # display only; never reparsed for mixing
    colorant: OKLab
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidInputError("pigment id must not be empty")
        if not isinstance(self.colorant, OKLab):
            raise InvalidInputError(f"{self.id}: colorant must be OKLab")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "swatchHex": self.swatch_hex,
            "colorant": {
                "L": self.colorant.L,
                "a": self.colorant.a,
                "b": self.colorant.b,
            },
            "description": self.description,
        }


def create_pigment(id: str, name: str, code: str, swatch_hex: str, description: str = "") -> Pigment:
    """Build a pigment whose colorant is derived once from its swatch."""
    colorant = rgb_to_oklab(hex_to_rgb(swatch_hex))
    return Pigment(id, name, code, swatch_hex.lower(), colorant, description)


class PigmentCatalog:
    """Read-only, insertion-ordered set of pigments keyed by id."""

    def __init__(self, pigments: Iterable[Pigment], name: str = "custom") -> None:
        self.name = name
        self._by_id: dict[str, Pigment] = {}
        for p in pigments:
            if p.id in self._by_id:
                raise InvalidInputError(f"duplicate pigment id {p.id!r} in catalog {name!r}")
            self._by_id[p.id] = p
        if not self._by_id:
            raise InvalidInputError(f"catalog {name!r} is empty")

    def get(self, pigment_id: str) -> Pigment:
        try:
            return self._by_id[pigment_id]
        except KeyError:
            raise UnknownPigmentError(pigment_id) from None

    def ids(self) -> tuple[str, ...]:
        return tuple(self._by_id)

    def __contains__(self, pigment_id: object) -> bool:
        return pigment_id in self._by_id

    def __iter__(self) -> Iterator[Pigment]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __repr__(self) -> str:
        return f"PigmentCatalog({self.name!r}, {len(self)} pigments)"


# --- classic oil palette (colorants derived from the swatch) -----------------
DEFAULT_PIGMENTS: tuple[Pigment, ...] = (
    create_pigment("pw6", "Titanium White", "PW6", "#F2F2F2"),
    create_pigment("pbk9", "Ivory Black", "PBk9", "#1C1C1C"),
    create_pigment("py35", "Cadmium Yellow", "PY35", "#F6C700"),
    create_pigment("py43", "Yellow Ochre", "PY43", "#C49A2C"),
    create_pigment("pr108", "Cadmium Red", "PR108", "#D02A2A"),
    create_pigment("pr177", "Alizarin Crimson", "PR177", "#8E1F2E"),
    create_pigment("pb29", "Ultramarine Blue", "PB29", "#2C3FA3"),
    create_pigment("pb15", "Phthalo Blue", "PB15", "#0C4DA2"),
    create_pigment("pg7", "Phthalo Green", "PG7", "#0C8A6D"),
    create_pigment("pbr7", "Burnt Sienna", "PBr7", "#7A3B1C"),
)


# --- expanded palette (hand-tuned colorants) ---------------------------------
def _p(id: str, name: str, code: str, swatch_hex: str, lab: tuple[float, float, float], description: str) -> Pigment:
    return Pigment(id, name, code, swatch_hex, OKLab(*lab), description)


EXPANDED_PIGMENTS: tuple[Pigment, ...] = (
    # Whites
    _p("pw6", "Titanium White", "PW6", "#f2f2f2", (0.96, 0.00, 0.00),
       "Opaque, bright white with excellent covering power."),
    _p("pw1", "Zinc White", "PW1", "#fefefe", (0.98, 0.00, 0.00),
       "Transparent white, perfect for subtle tinting."),
    _p("pw4", "Buff Titanium", "PW4", "#dad2c6", (0.85, 0.02, 0.05),
       "Unbleached warmth; bone, parchment, and beach sand."),
    # Blacks and Grays
    _p("pbk9", "Ivory Black", "PBk9", "#1c1c1c", (0.15, 0.00, 0.00),
       "Warm black with subtle brown undertones."),
    _p("pbk7", "Mars Black", "PBk7", "#0f0f0f", (0.12, 0.00, 0.00),
       "Dense, opaque black for strong contrasts."),
    _p("pg1", "Payne's Gray", "PG1", "#53606b", (0.42, -0.02, -0.05),
       "Elegant blue-gray that replaces black in skies and steel."),
    _p("ng1", "Neutral Gray", "NG1", "#808080", (0.55, 0.00, 0.00),
       "Value control - calms chroma without steering hue."),
    _p("pg2", "Davy's Gray", "PG2", "#5e6e66", (0.45, -0.02, 0.02),
       "Moody, mist-ready green-gray for rain and stone."),
    # Yellows
    _p("py35", "Cadmium Yellow", "PY35", "#ffd200", (0.88, 0.02, 0.18),
       "Bright, opaque yellow for high-chroma mixes without mud."),
    _p("py3", "Lemon Yellow", "PY3", "#fff44f", (0.92, -0.08, 0.22),
       "Crisp cool yellow that snaps greens to life in daylight glazes."),
    _p("py83", "Indian Yellow", "PY83", "#ffb000", (0.78, 0.08, 0.20),
       "Golden, transparent glow - the glaze that makes sunsets breathe."),
    _p("py74", "Hansa Yellow Medium", "PY74", "#f7d038", (0.85, 0.00, 0.16),
       "Clean workhorse yellow for high-chroma mixes without mud."),
    _p("py184", "Bismuth Yellow", "PY184", "#f9e04c", (0.89, -0.02, 0.18),
       "Bright, nontoxic cadmium stand-in for sparkling highlights."),
    _p("py154", "Naples Yellow", "PY154", "#f4e0a3", (0.88, 0.02, 0.08),
       "Buttery, opaque sunshine for skin highlights and warm light."),
    _p("py43", "Yellow Ochre", "PY43", "#c6862b", (0.62, 0.05, 0.12),
       "Earthy foundation - tone your canvas and warm every midtone."),
    # Oranges
    _p("po20", "Cadmium Orange", "PO20", "#ff7f2a", (0.68, 0.18, 0.16),
       "Opaque blaze for fiery clouds and late-afternoon masonry."),
    # Reds
    _p("pr108", "Cadmium Red", "PR108", "#e03c31", (0.55, 0.22, 0.14),
       "Bright, opaque red for bold statements and pure chroma."),
    _p("pr254", "Scarlet Lake", "PR254", "#ff2400", (0.58, 0.28, 0.18),
       "FIRE! The quick accent that commands attention."),
    _p("pr188", "Vermilion", "PR188", "#e34234", (0.56, 0.24, 0.16),
       "Imperial warmth that beats like a pulse under skin and silk."),
    _p("pr177", "Alizarin Crimson", "PR177", "#8a2232", (0.32, 0.18, 0.08),
       "Deep crimson for velvet darks and romantic glazes."),
    _p("pr19", "Carmine", "PR19", "#a50034", (0.38, 0.25, 0.05),
       "Velvet theatre red for drapery and crimson twilight."),
    _p("pr209", "Quinacridone Red", "PR209", "#d12c4f", (0.48, 0.25, 0.05),
       "Transparent punch that glows through layered passages."),
    _p("pr122", "Quinacridone Rose", "PR122", "#d95a8f", (0.58, 0.22, -0.05),
       "Cool bloom - petals, dawn clouds, and romantic glazes."),
    _p("pr170", "Permanent Rose", "PR170", "#e03c8a", (0.55, 0.28, -0.08),
       "Clean pinks that won't chalk, perfect for flushed light."),
    _p("pr83", "Rose Madder Hue", "PR83", "#e3a1b8", (0.72, 0.15, -0.02),
       "Victorian rose - delicate glazes with nostalgic softness."),
    _p("pr101", "Indian Red", "PR101", "#7e2a2a", (0.32, 0.15, 0.08),
       "Dense iron warmth - steadies complexions and ancient walls."),
    _p("pr102", "English Red Light Red", "PR102", "#b24c2b", (0.42, 0.18, 0.12),
       "Terracotta warmth that anchors flesh and brick."),
    _p("pr101v", "Venetian Red", "PR101", "#9e3a2b", (0.38, 0.16, 0.10),
       "Renaissance brick - classic cheeks, cloaks, and rooftops."),
    _p("pr233", "Transparent Oxide Red", "PR233", "#a34222", (0.42, 0.20, 0.12),
       "A ruby glaze that ignites landscapes without weight."),
    # Purples and Violets
    _p("pv14", "Cobalt Violet Light", "PV14", "#a98ac5", (0.62, 0.08, -0.15),
       "Whispered lilac for atmospheric distance and skin cools."),
    _p("pv14d", "Cobalt Violet Deep", "PV14", "#774c9e", (0.42, 0.15, -0.18),
       "Mineral royalty deepens evening shadows with restraint."),
    _p("pv23", "Dioxazine Purple", "PV23", "#4a2c6f", (0.28, 0.12, -0.22),
       "Electric violet - one drop turns twilight dramatic."),
    _p("pv42", "Mauve", "PV42", "#b190b6", (0.65, 0.08, -0.08),
       "Powdery haze that softens horizons and quiets form."),
    _p("pv16", "Mars Violet Caput Mortuum", "PV16", "#5e2d3a", (0.25, 0.10, -0.05),
       "Ancient wine - a solemn shadow for robes and rock."),
    _p("pv49", "Lavender", "PV49", "#c9b6e4", (0.75, 0.05, -0.12),
       "Misty veil; Monet's air in a tube."),
    # Blues (Fixed for proper yellow+blue=green mixing)
    _p("pb28", "Cobalt Blue", "PB28", "#3a5dae", (0.45, -0.02, -0.28),
       "Breezy mineral blue for honest daylight skies."),
    _p("pb35", "Cerulean Blue", "PB35", "#2a7fba", (0.55, -0.08, -0.22),
       "Milky, granulating sky tone; instant sea air."),
    _p("pb33", "Manganese Blue Hue", "PB33", "#3aa6de", (0.68, -0.12, -0.18),
       "Luminous water sparkle and high-key skies."),
    _p("pb27", "Prussian Blue", "PB27", "#0b3c5d", (0.28, -0.05, -0.18),
       "Inky depth that builds forests and night seas."),
    _p("pb29", "Ultramarine Blue", "PB29", "#3f4ba0", (0.42, -0.05, -0.25),
       "Classic blue for honest daylight skies."),
    _p("pb60", "Indigo", "PB60", "#26457d", (0.32, -0.02, -0.20),
       "Storm-borne twilight for brooding glazes."),
    _p("pb15", "Phthalo Blue", "PB15", "#0f4c81", (0.35, -0.08, -0.22),
       "Deep blue with green undertones for mixing."),
    _p("kb1", "King's Blue", "KB1", "#8fb9e6", (0.75, -0.05, -0.15),
       "Historical sky mix - white-kissed blue for porcelain light."),
    _p("az1", "Azure", "AZ1", "#007fff", (0.62, -0.08, -0.25),
       "High-noon clarity; the clean edge of summer."),
    _p("pb36", "Cobalt Turquoise", "PB36", "#2fb8b6", (0.72, -0.18, -0.08),
       "Glass-sea brilliance for sunlit shallows."),
    _p("pb74", "Cobalt Teal", "PB74", "#34c6b6", (0.78, -0.20, -0.05),
       "Minted surf that cools skin and stone."),
    _p("pg50t", "Phthalo Turquoise", "PG50", "#006d77", (0.45, -0.15, -0.08),
       "Petrol depth - oceans, beetle shells, and steel reflections."),
    # Greens
    _p("pg18", "Viridian", "PG18", "#1b8a6b", (0.52, -0.18, 0.08),
       "Transparent, cool green for crystalline shadows."),
    _p("pg7", "Phthalo Green", "PG7", "#00836c", (0.48, -0.15, 0.05),
       "Blue-green for crystalline shadows and mixing."),
    _p("pg36", "Sap Green", "PG36", "#507d2a", (0.45, -0.08, 0.18),
       "Leafy workhorse - mixable greens that feel lived-in."),
    _p("pg8", "Hooker's Green", "PG8", "#3b6e3b", (0.42, -0.10, 0.15),
       "Victorian landscape staple for hedges and pine."),
    _p("pg17", "Chromium Oxide Green", "PG17", "#4f7d4a", (0.48, -0.12, 0.12),
       "Opaque moss; the secret to believable foliage."),
    _p("pg23", "Terre Verte", "PG23", "#7ba05b", (0.58, -0.10, 0.15),
       "Classical green underpainting for luminous flesh."),
    _p("py129", "Olive Green", "PY129", "#6b8e23", (0.52, -0.05, 0.20),
       "Dusty, sun-baked leaves and Mediterranean shadow."),
    _p("pg50", "Cobalt Green", "PG50", "#6fbf9b", (0.72, -0.15, 0.08),
       "Pale mineral green for distance and air."),
    _p("pg55", "Emerald Green Modern", "PG55", "#00a776", (0.62, -0.22, 0.12),
       "Safer emerald sparkle for accents and fairy light."),
    _p("pg12", "Permanent Green Light", "PG12", "#74d055", (0.78, -0.18, 0.22),
       "Spring shoots and fresh highlights - zing without chalk."),
    # Browns and Earth Tones
    _p("pbr7r", "Raw Sienna", "PBr7", "#c08a3e", (0.58, 0.08, 0.15),
       "Earthy foundation - tone your canvas and warm every midtone."),
    _p("pbr7ru", "Raw Umber", "PBr7", "#6b4e2e", (0.35, 0.05, 0.08),
       "Fast-drying neutralizer; the underpainting's best friend."),
    _p("pbr7u", "Burnt Umber", "PBr7", "#7e4a25", (0.32, 0.08, 0.10),
       "Chocolate shadows that deepen portraits and woodgrain."),
    _p("pbr7", "Burnt Sienna", "PBr7", "#8a3b12", (0.35, 0.12, 0.08),
       "Chocolate shadows for portraits and wood textures."),
    _p("pbr8", "Van Dyke Brown", "PBr8", "#5a3a2b", (0.28, 0.06, 0.06),
       "Smoky, old-master depth for velvet darks."),
)

CATALOGS: dict[str, tuple[Pigment, ...]] = {
    "default": DEFAULT_PIGMENTS,
    "expanded": EXPANDED_PIGMENTS,
}


def get_catalog(name: str = "default") -> PigmentCatalog:
    try:
        pigments = CATALOGS[name]
    except KeyError:
        raise InvalidInputError(
            f"unknown catalog {name!r}; choose one of {sorted(CATALOGS)}"
        ) from None
    return PigmentCatalog(pigments, name=name)


__all__ = [
    "Pigment",
    "PigmentCatalog",
    "create_pigment",
    "DEFAULT_PIGMENTS",
    "EXPANDED_PIGMENTS",
    "CATALOGS",
    "get_catalog",
]
