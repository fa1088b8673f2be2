"""
data/colors.py
Deterministic per-symbol colours for the card badges.
A string hash picks the hue; fixed saturation/lightness pairs give the
light and dark theme variants.
"""


def _to_int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - 0x1_0000_0000 if n & 0x8000_0000 else n


def string_hue(text: str) -> int:
    """
    Map a string to a hue in [0, 360).

    Classic h * 31 + code hash over UTF-16 code units, with the shift
    wrapped to 32 bits the way JavaScript's << does, so a symbol gets the
    same hue here as in a JS client.
    """
    h = 0
    units = text.encode("utf-16-le")
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        h = code + (_to_int32(_to_int32(h) << 5) - h)
    return abs(h) % 360


def _hsl(hue: int, saturation: int, lightness: int) -> str:
    return f"hsl({hue}, {saturation}%, {lightness}%)"


def string_to_color(text: str) -> str:
    """Pastel background for light mode."""
    return _hsl(string_hue(text), 70, 85)


def string_to_dark_color(text: str) -> str:
    """Muted background for dark mode."""
    return _hsl(string_hue(text), 60, 25)


def string_to_text_color(text: str) -> str:
    return _hsl(string_hue(text), 80, 30)


def string_to_dark_text_color(text: str) -> str:
    return _hsl(string_hue(text), 80, 80)


def card_palette(symbol: str, dark: bool = False) -> tuple[str, str]:
    """(background, text) colour pair for a symbol's badge in the given theme."""
    if dark:
        return string_to_dark_color(symbol), string_to_dark_text_color(symbol)
    return string_to_color(symbol), string_to_text_color(symbol)
