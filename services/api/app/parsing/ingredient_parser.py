import re

from ..core.text import strip_tags

VULGAR_FRACTIONS = {
    "⅛": 1 / 8,
    "¼": 1 / 4,
    "⅓": 1 / 3,
    "⅜": 3 / 8,
    "½": 1 / 2,
    "⅝": 5 / 8,
    "⅔": 2 / 3,
    "¾": 3 / 4,
    "⅞": 7 / 8,
}

_FRACTION_CHARS = "".join(VULGAR_FRACTIONS)

# Leading run of digits, whitespace, vulgar fractions, "/", "-" and "."
QUANTITY_RE = re.compile(rf"^([0-9\s{_FRACTION_CHARS}/\-.]+)")

UNITS = {
    "cup", "cups", "c",
    "tablespoon", "tablespoons", "tbsp", "tbsps", "tbs",
    "teaspoon", "teaspoons", "tsp", "tsps",
    "pound", "pounds", "lb", "lbs",
    "ounce", "ounces", "oz",
    "gram", "grams", "g",
    "kilogram", "kilograms", "kg", "kgs",
    "ml", "milliliter", "milliliters", "millilitre", "millilitres",
    "liter", "liters", "litre", "litres", "l",
    "clove", "cloves",
    "can", "cans",
    "package", "packages", "pkg", "pkgs",
    "slice", "slices",
    "piece", "pieces",
    "bunch", "bunches",
    "stalk", "stalks",
    "head", "heads",
    "pinch", "pinches",
    "dash", "dashes",
    "handful", "handfuls",
}

_TRAILING_PUNCT_RE = re.compile(r"[.,]$")
_NOTES_SPLIT_RE = re.compile(r"[,(]")


def parse_ingredient_line(line: str) -> dict:
    """
    Split a free-text ingredient line into quantity/unit/name/notes.

    "2 cups flour, sifted" -> {"quantity": "2", "unit": "cups", "name": "flour", "notes": "sifted"}

    The quantity is kept verbatim ("1 1/2", "½", "2-3"). The unit is only taken
    when the word right after the quantity is a known unit; otherwise that word
    stays in the name ("3 large eggs").
    """
    text = strip_tags(line)

    match = QUANTITY_RE.match(text)
    if not match:
        return {"quantity": "", "unit": "", "name": text, "notes": ""}

    quantity = match.group(1).strip()
    remaining = text[match.end():].strip()

    unit = ""
    words = remaining.split()
    if words:
        candidate = _TRAILING_PUNCT_RE.sub("", words[0])
        if candidate.lower() in UNITS:
            unit = candidate
            remaining = " ".join(words[1:])

    name = remaining
    notes = ""
    split = _NOTES_SPLIT_RE.search(remaining)
    # A line that opens with "(" keeps the parenthetical as part of the name
    if split and split.start() > 0:
        name = remaining[:split.start()].strip()
        notes = remaining[split.start() + 1:].replace("(", "").replace(")", "").strip()

    return {"quantity": quantity, "unit": unit, "name": name or text, "notes": notes}


def parse_quantity(text: str) -> float:
    """
    Best effort numeric value of a quantity string for storage.

    Handles "1 1/2", "1/2", "1½", "½", "0.5" and ranges ("2-3" -> 2).
    Anything unparseable is 0.
    """
    if not text or not text.strip():
        return 0.0

    s = text.strip()
    # Ranges: use the lower bound
    low = s.split("-")[0].strip()
    if low:
        s = low

    mixed = re.match(r"^(\d+)\s+(\d+)/(\d+)", s)
    if mixed:
        whole, num, den = (int(g) for g in mixed.groups())
        return whole + num / den if den else float(whole)

    frac = re.match(r"^(\d+)/(\d+)", s)
    if frac:
        num, den = int(frac.group(1)), int(frac.group(2))
        return num / den if den else 0.0

    vulgar = re.match(rf"^(\d+(?:\.\d+)?)?\s*([{_FRACTION_CHARS}])", s)
    if vulgar:
        whole = float(vulgar.group(1)) if vulgar.group(1) else 0.0
        return whole + VULGAR_FRACTIONS[vulgar.group(2)]

    number = re.match(r"^\d*\.?\d+", s)
    if number:
        return float(number.group(0))

    return 0.0
