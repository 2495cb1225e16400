import pytest

from pigment_match.colorspace import OKLab, hex_to_rgb, oklab_to_rgb, rgb_to_oklab
from pigment_match.errors import InvalidInputError, UnknownPigmentError
from pigment_match.pigments import (
    DEFAULT_PIGMENTS,
    EXPANDED_PIGMENTS,
    Pigment,
    PigmentCatalog,
    create_pigment,
    get_catalog,
)


def test_default_catalog_order():
    catalog = get_catalog()
    assert len(catalog) == 10
    assert catalog.ids()[:3] == ("pw6", "pbk9", "py35")
    assert [p.id for p in catalog] == [p.id for p in DEFAULT_PIGMENTS]


def test_default_colorants_come_from_swatch():
    yellow = get_catalog().get("py35")
    assert yellow.colorant == rgb_to_oklab(hex_to_rgb("#F6C700"))
    assert yellow.swatch_hex == "#f6c700"


def test_expanded_catalog_uses_curated_colorants():
    catalog = get_catalog("expanded")
    assert len(catalog) == len(EXPANDED_PIGMENTS) > 50
    assert catalog.get("py35").colorant == OKLab(0.88, 0.02, 0.18)
    assert catalog.get("pb29").colorant == OKLab(0.42, -0.05, -0.25)
    assert all(p.description for p in catalog)


def test_curated_colorants_render():
    for p in EXPANDED_PIGMENTS:
        rgb = oklab_to_rgb(p.colorant)
        assert all(0 <= c <= 255 for c in rgb.coords())


def test_unknown_pigment_is_a_lookup_error():
    catalog = get_catalog()
    assert "nope" not in catalog
    with pytest.raises(UnknownPigmentError) as info:
        catalog.get("nope")
    assert isinstance(info.value, LookupError)
    assert info.value.pigment_id == "nope"


def test_catalog_rejects_duplicates_and_empty():
    p = create_pigment("x", "X", "X1", "#123456")
    with pytest.raises(InvalidInputError):
        PigmentCatalog([p, p])
    with pytest.raises(InvalidInputError):
        PigmentCatalog([])


def test_unknown_catalog_name():
    with pytest.raises(InvalidInputError):
        get_catalog("watercolour")


def test_pigment_requires_oklab_colorant():
    with pytest.raises(InvalidInputError):
        Pigment("x", "X", "X1", "#000000", (0.1, 0.0, 0.0))


def test_to_dict_uses_client_field_names():
    d = get_catalog().get("pw6").to_dict()
    assert d["swatchHex"] == "#f2f2f2"
    assert set(d["colorant"]) == {"L", "a", "b"}
