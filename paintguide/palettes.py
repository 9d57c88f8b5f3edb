"""Curated artist, mood and classic palettes."""
from typing import Dict, List, Sequence, Union

from paintguide.color_utils import HEX_PATTERN
from paintguide.types import Palette, PaletteError

PALETTE_CATEGORIES: Dict[str, str] = {
    "artist": "Artist Palettes",
    "mood": "Mood Palettes",
    "classic": "Classic Palettes",
}

PALETTES: Dict[str, Palette] = {
    # Artist palettes
    "zorn": Palette(
        name="Anders Zorn",
        category="artist",
        description="Swedish painter known for warm, earthy tones",
        colors=("#FFE4B5", "#D2B48C", "#8B7355", "#654321",
                "#C09070", "#FF8C00", "#FFFACD", "#228B22"),
    ),
    "rubenSargent": Palette(
        name="John Singer Sargent",
        category="artist",
        description="Master of rich, saturated colors",
        colors=("#4A0E0E", "#8B4513", "#CD853F", "#DAA520",
                "#FFD700", "#F0E68C", "#DEB887", "#E6E6FA"),
    ),
    "rembrandtGold": Palette(
        name="Rembrandt Gold",
        category="artist",
        description="Dutch master's signature warm palette",
        colors=("#1A1410", "#3E2723", "#5D4037", "#8D6E63",
                "#A1887F", "#D7CCC8", "#FFCC99", "#FFE082"),
    ),
    "vanGogh": Palette(
        name="Van Gogh Nights",
        category="artist",
        description="Swirling blues and golds",
        colors=("#0F3460", "#1A5FA0", "#3B82D6", "#60A5FA",
                "#FDB813", "#F7B801", "#1E1B1B", "#E8D5B7"),
    ),

    # Mood palettes
    "moodyBlues": Palette(
        name="Moody Blues",
        category="mood",
        description="Introspective and calm mood",
        colors=("#001F3F", "#003D7A", "#0074D9", "#7FDBCA",
                "#39CCCC", "#2ECC40", "#AAAAAA", "#F2F2F2"),
    ),
    "warmAutumn": Palette(
        name="Warm Autumn",
        category="mood",
        description="Cozy and warm mood",
        colors=("#8B4513", "#CD853F", "#DAA520", "#FFD700",
                "#FF8C00", "#FF7F50", "#D2691E", "#F5DEB3"),
    ),
    "darkMystery": Palette(
        name="Dark Mystery",
        category="mood",
        description="Deep, mysterious mood",
        colors=("#1A0033", "#2D0052", "#440055", "#663366",
                "#9933CC", "#CC66FF", "#2F2F2F", "#666666"),
    ),
    "passionRed": Palette(
        name="Passion Red",
        category="mood",
        description="Bold, energetic mood",
        colors=("#330000", "#660000", "#990000", "#CC0000",
                "#FF0000", "#FF3333", "#FF9999", "#FFE6E6"),
    ),
    "forest": Palette(
        name="Forest Whisper",
        category="mood",
        description="Natural, earthy mood",
        colors=("#1B3A2C", "#2D5A3D", "#3D7856", "#52A674",
                "#7AC5A3", "#A8D5BA", "#8B7355", "#D2B48C"),
    ),
    "oceanDepths": Palette(
        name="Ocean Depths",
        category="mood",
        description="Cool, tranquil mood",
        colors=("#0D1B2A", "#1B3A52", "#2A5678", "#4A8FBF",
                "#7DC3E8", "#B4E7FF", "#4F4F4F", "#CCCCCC"),
    ),

    # Classic palettes
    "grayscale": Palette(
        name="Grayscale",
        category="classic",
        description="Pure black and white with greys",
        colors=("#000000", "#2B2B2B", "#555555", "#808080",
                "#AAAAAA", "#D3D3D3", "#EEEEEE", "#FFFFFF"),
    ),
    "primary": Palette(
        name="Primary Colors",
        category="classic",
        description="Red, Yellow, Blue and whites",
        colors=("#FF0000", "#0000FF", "#FFFF00", "#FFFFFF",
                "#000000", "#00FF00", "#FF00FF", "#00FFFF"),
    ),
    "pastel": Palette(
        name="Pastel Dreams",
        category="classic",
        description="Soft, gentle pastel colors",
        colors=("#FFB3BA", "#FFCCCB", "#FFFFBA", "#BAFFC9",
                "#BAE1FF", "#E0BBE4", "#FFDFD3", "#D4F1F4"),
    ),
}


def get_palette(key: str) -> Palette:
    """
    Look up a catalog palette by key.

    Raises:
        PaletteError: If the key is unknown
    """
    try:
        return PALETTES[key]
    except KeyError:
        known = ", ".join(sorted(PALETTES))
        raise PaletteError(f"Unknown palette '{key}'. Available: {known}") from None


def palettes_by_category(category: str) -> Dict[str, Palette]:
    """Catalog entries belonging to one category."""
    if category not in PALETTE_CATEGORIES:
        raise PaletteError(f"Unknown palette category '{category}'")
    return {key: p for key, p in PALETTES.items() if p.category == category}


def resolve_palette_colors(palette: Union[None, str, Sequence[str]]) -> List[str]:
    """
    Turn a palette reference into a list of hex colors.

    Accepts a catalog key, a comma-separated hex string, or a sequence of
    hex strings. None resolves to an empty list.
    """
    if palette is None:
        return []
    if isinstance(palette, str):
        if palette in PALETTES:
            return list(PALETTES[palette].colors)
        parts = [part.strip() for part in palette.split(",") if part.strip()]
        if parts and all(HEX_PATTERN.match(part) for part in parts):
            return parts
        return list(get_palette(palette).colors)
    return list(palette)
